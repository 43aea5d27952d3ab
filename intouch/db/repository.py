"""Data access for users and specialist profiles"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

import pendulum
from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from intouch.db import models
from intouch.db.models import generate_user_id
from intouch.schemas.specialist import (
    SpecialistListing,
    SpecialistProfile,
    SpecialistProfileCreate,
)
from intouch.schemas.user import UserInDB

logger = logging.getLogger(__name__)

PROFILE_DEFAULTS = {
    "hourly_rate": 25,
    "experience": 1,
    "verified": False,
    "image": "/placeholder.svg?height=200&width=200",
}

# Fields a profile update may never touch
IMMUTABLE_PROFILE_FIELDS = {"user_id", "type"}


class MarketplaceRepository(ABC):
    """Storage contract the services depend on"""

    @abstractmethod
    def find_by_email(self, email: str) -> Optional[UserInDB]:
        """Case-insensitive lookup"""

    @abstractmethod
    def get_user(self, user_id: str) -> Optional[UserInDB]:
        ...

    @abstractmethod
    def create(self, user_data: Dict[str, Any]) -> UserInDB:
        """Create a user from already-hashed credentials"""

    @abstractmethod
    def update_user(self, user_id: str, updates: Dict[str, Any]) -> Optional[UserInDB]:
        ...

    @abstractmethod
    def get_all(self) -> List[SpecialistListing]:
        """Every profile joined with its owner, in creation order"""

    @abstractmethod
    def create_profile(self, profile_data: SpecialistProfileCreate) -> SpecialistProfile:
        ...

    @abstractmethod
    def update_profile(self, user_id: str, updates: Dict[str, Any]) -> Optional[SpecialistProfile]:
        """Apply a partial update; None when the profile does not exist"""

    @abstractmethod
    def get_by_user_id(self, user_id: str) -> Optional[SpecialistProfile]:
        ...


def _join_listing(profile: SpecialistProfile, owner: Optional[UserInDB]) -> SpecialistListing:
    return SpecialistListing(
        **profile.model_dump(),
        email=owner.email if owner else None,
        first_name=owner.first_name if owner else None,
        last_name=owner.last_name if owner else None,
        company_name=owner.company_name if owner else None,
        company_code=owner.company_code if owner else None,
    )


class InMemoryMarketplaceRepository(MarketplaceRepository):
    """Process-local store, used by tests and demos"""

    def __init__(self):
        self.users: List[UserInDB] = []
        self.profiles: List[SpecialistProfile] = []

    def find_by_email(self, email: str) -> Optional[UserInDB]:
        email = email.lower()
        return next((u for u in self.users if u.email.lower() == email), None)

    def get_user(self, user_id: str) -> Optional[UserInDB]:
        return next((u for u in self.users if u.id == user_id), None)

    def create(self, user_data: Dict[str, Any]) -> UserInDB:
        user = UserInDB(
            id=user_data.get("id") or generate_user_id(),
            created_at=pendulum.now("UTC"),
            **{k: v for k, v in user_data.items() if k != "id"},
        )
        self.users.append(user)
        return user

    def update_user(self, user_id: str, updates: Dict[str, Any]) -> Optional[UserInDB]:
        for index, user in enumerate(self.users):
            if user.id == user_id:
                self.users[index] = user.model_copy(update=updates)
                return self.users[index]
        return None

    def get_all(self) -> List[SpecialistListing]:
        return [_join_listing(p, self.get_user(p.user_id)) for p in self.profiles]

    def create_profile(self, profile_data: SpecialistProfileCreate) -> SpecialistProfile:
        profile = SpecialistProfile(**profile_data.model_dump(), **PROFILE_DEFAULTS)
        self.profiles.append(profile)
        return profile

    def update_profile(self, user_id: str, updates: Dict[str, Any]) -> Optional[SpecialistProfile]:
        updates = {k: v for k, v in updates.items() if k not in IMMUTABLE_PROFILE_FIELDS}
        for index, profile in enumerate(self.profiles):
            if profile.user_id == user_id:
                self.profiles[index] = profile.model_copy(
                    update={**updates, "updated_at": pendulum.now("UTC")}
                )
                return self.profiles[index]
        return None

    def get_by_user_id(self, user_id: str) -> Optional[SpecialistProfile]:
        return next((p for p in self.profiles if p.user_id == user_id), None)


class SqlMarketplaceRepository(MarketplaceRepository):
    """SQLAlchemy-backed store"""

    def __init__(self, db: Session):
        self.db = db

    def find_by_email(self, email: str) -> Optional[UserInDB]:
        user = (
            self.db.query(models.User)
            .filter(func.lower(models.User.email) == email.lower())
            .first()
        )
        return UserInDB.model_validate(user) if user else None

    def get_user(self, user_id: str) -> Optional[UserInDB]:
        user = self.db.query(models.User).filter(models.User.id == user_id).first()
        return UserInDB.model_validate(user) if user else None

    def create(self, user_data: Dict[str, Any]) -> UserInDB:
        user = models.User(**user_data)
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        logger.info(f"User created in db: {user.id}")
        return UserInDB.model_validate(user)

    def update_user(self, user_id: str, updates: Dict[str, Any]) -> Optional[UserInDB]:
        user = self.db.query(models.User).filter(models.User.id == user_id).first()
        if not user:
            return None

        for field, value in updates.items():
            setattr(user, field, value)

        self.db.commit()
        self.db.refresh(user)
        return UserInDB.model_validate(user)

    def get_all(self) -> List[SpecialistListing]:
        profiles = (
            self.db.query(models.SpecialistProfile)
            .options(joinedload(models.SpecialistProfile.user))
            .order_by(models.SpecialistProfile.id)
            .all()
        )
        return [
            _join_listing(
                SpecialistProfile.model_validate(profile),
                UserInDB.model_validate(profile.user) if profile.user else None,
            )
            for profile in profiles
        ]

    def create_profile(self, profile_data: SpecialistProfileCreate) -> SpecialistProfile:
        profile = models.SpecialistProfile(**profile_data.model_dump(), **PROFILE_DEFAULTS)
        self.db.add(profile)
        self.db.commit()
        self.db.refresh(profile)
        logger.info(f"Specialist profile created for user {profile.user_id}")
        return SpecialistProfile.model_validate(profile)

    def update_profile(self, user_id: str, updates: Dict[str, Any]) -> Optional[SpecialistProfile]:
        profile = (
            self.db.query(models.SpecialistProfile)
            .filter(models.SpecialistProfile.user_id == user_id)
            .first()
        )
        if not profile:
            return None

        for field, value in updates.items():
            if field in IMMUTABLE_PROFILE_FIELDS:
                continue
            setattr(profile, field, value)

        self.db.commit()
        self.db.refresh(profile)
        return SpecialistProfile.model_validate(profile)

    def get_by_user_id(self, user_id: str) -> Optional[SpecialistProfile]:
        profile = (
            self.db.query(models.SpecialistProfile)
            .filter(models.SpecialistProfile.user_id == user_id)
            .first()
        )
        return SpecialistProfile.model_validate(profile) if profile else None
