import enum
import uuid

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Enum,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from intouch.db.database import Base


def generate_user_id():
    return f"user_{uuid.uuid4().hex[:12]}"

class UserRole(str, enum.Enum):
    CUSTOMER = "customer"
    INDIVIDUAL_SPECIALIST = "individual_specialist"
    BUSINESS_SPECIALIST = "business_specialist"

class SpecialistType(str, enum.Enum):
    INDIVIDUAL = "individual"
    BUSINESS = "business"

class User(Base):
    __tablename__ = "users"

    id = Column(String, primary_key=True, default=generate_user_id)
    email = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)
    role = Column(Enum(UserRole), default=UserRole.CUSTOMER, nullable=False)
    first_name = Column(String)
    last_name = Column(String)
    company_name = Column(String)
    company_code = Column(String)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    specialist_profile = relationship("SpecialistProfile", back_populates="user", uselist=False, cascade="all, delete-orphan")


class SpecialistProfile(Base):
    """Public listing of a specialist; owner identity lives on User"""
    __tablename__ = "specialist_profiles"

    id = Column(Integer, primary_key=True, autoincrement=True)  # Roster order
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True)
    type = Column(Enum(SpecialistType), nullable=False)
    profession = Column(String, nullable=False, default="")
    categories = Column(JSON, nullable=False, default=list)
    locations = Column(JSON, nullable=False, default=list)  # [] means all of Lithuania
    services = Column(JSON, nullable=False, default=list)
    phone = Column(String, default="")
    description = Column(Text, default="")
    hourly_rate = Column(Integer, default=25)
    experience = Column(Integer, default=1)  # Years
    verified = Column(Boolean, default=False)
    image = Column(String, default="/placeholder.svg?height=200&width=200")
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    user = relationship("User", back_populates="specialist_profile")


class StorageEntry(Base):
    """Key/value entries backing sessions and per-user preferences"""
    __tablename__ = "storage_entries"

    key = Column(String, primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
