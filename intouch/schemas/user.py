from pydantic import BaseModel, Field, computed_field
from typing import List, Optional
from datetime import datetime
import re

from intouch.db.models import SpecialistType, UserRole

EMAIL_PATTERN = re.compile(r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$')


def is_valid_email(email: str) -> bool:
    return bool(EMAIL_PATTERN.match(email or ""))


# Shared properties
class UserBase(BaseModel):
    email: str
    role: UserRole
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    company_name: Optional[str] = None
    company_code: Optional[str] = None

# Properties to return via API and to keep in the session store
class User(UserBase):
    id: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True

    @computed_field
    @property
    def display_name(self) -> str:
        if self.role == UserRole.BUSINESS_SPECIALIST:
            return self.company_name or ""
        return f"{self.first_name or ''} {self.last_name or ''}".strip()

    @property
    def is_specialist(self) -> bool:
        return self.role != UserRole.CUSTOMER

# Properties stored in DB
class UserInDB(User):
    password_hash: str

    def public(self) -> User:
        return User(**self.model_dump(exclude={"password_hash", "display_name"}))

# Properties to receive on creation; validated in AuthService so that
# the user sees one translated message at a time
class CustomerSignup(BaseModel):
    email: str = ""
    password: str = ""
    confirm_password: str = ""
    first_name: str = ""
    last_name: str = ""

class SpecialistSignup(CustomerSignup):
    specialist_type: SpecialistType = SpecialistType.INDIVIDUAL
    company_name: str = ""
    company_code: str = ""
    profession: Optional[str] = None
    categories: List[str] = Field(default_factory=list)
    cities: List[str] = Field(default_factory=list, description="Empty means all of Lithuania")
    services: List[str] = Field(default_factory=list)

class LoginRequest(BaseModel):
    email: str = ""
    password: str = ""

class ForgotPasswordRequest(BaseModel):
    email: str = ""

class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: User

class MessageResponse(BaseModel):
    message: str

# Owner fields editable from the profile page
class UserUpdate(BaseModel):
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    company_name: Optional[str] = None
    company_code: Optional[str] = None
