"""Specialist profile maintenance"""

import logging
from typing import Any, Dict, Tuple

from intouch.db.repository import MarketplaceRepository
from intouch.schemas.specialist import (
    MyProfileUpdate,
    ServicesUpdate,
    SpecialistListing,
    SpecialistProfile,
)
from intouch.schemas.user import User, UserUpdate, is_valid_email
from intouch.services.auth_service import validate_categories, validate_cities
from intouch.services.exceptions import (
    ConflictError,
    NotFoundError,
    PermissionError,
    ValidationError,
)

logger = logging.getLogger(__name__)

OWNER_FIELDS = set(UserUpdate.model_fields)


class ProfileService:
    """Service for specialist profile business logic"""

    def __init__(self, repo: MarketplaceRepository):
        self.repo = repo

    def get_listing(self, user_id: str) -> SpecialistListing:
        listing = next((s for s in self.repo.get_all() if s.user_id == user_id), None)
        if not listing:
            raise NotFoundError("Specialist not found", error_code="specialistNotFound")
        return listing

    def get_my_profile(self, current_user: User) -> SpecialistProfile:
        self._ensure_specialist(current_user)
        profile = self.repo.get_by_user_id(current_user.id)
        if not profile:
            raise NotFoundError("Specialist profile not found", error_code="profileNotFound")
        return profile

    def update_my_profile(self, current_user: User, data: MyProfileUpdate) -> Tuple[User, SpecialistProfile]:
        """
        Apply the profile page form.

        Owner fields (names, company, e-mail) go to the user record, the rest
        to the listing. Returns the refreshed user and profile.
        """
        self._ensure_specialist(current_user)
        if not self.repo.get_by_user_id(current_user.id):
            raise NotFoundError("Specialist profile not found", error_code="profileNotFound")

        changes = data.model_dump(exclude_unset=True)
        owner_updates = {k: v for k, v in changes.items() if k in OWNER_FIELDS and v is not None}
        profile_updates = {k: v for k, v in changes.items() if k not in OWNER_FIELDS and v is not None}

        self._validate_owner_updates(current_user, owner_updates)
        self._validate_profile_updates(profile_updates)

        user = current_user
        if owner_updates:
            updated = self.repo.update_user(current_user.id, owner_updates)
            user = updated.public() if updated else current_user

        profile = self.repo.update_profile(current_user.id, profile_updates)
        if not profile:
            raise NotFoundError("Specialist profile not found", error_code="profileNotFound")

        logger.info(f"Profile updated for user {current_user.id}", extra={"fields": sorted(changes)})
        return user, profile

    def update_my_services(self, current_user: User, data: ServicesUpdate) -> SpecialistProfile:
        """Replace the offered services; an optional category becomes the only category"""
        self._ensure_specialist(current_user)

        services = list(dict.fromkeys(s.strip() for s in data.services if s.strip()))
        if not services:
            raise ValidationError("At least one service is required", error_code="pleaseSelectServices")

        updates: Dict[str, Any] = {"services": services}
        if data.category:
            validate_categories([data.category])
            updates["categories"] = [data.category]

        profile = self.repo.update_profile(current_user.id, updates)
        if not profile:
            raise NotFoundError("Specialist profile not found", error_code="profileNotFound")

        logger.info(f"Services updated for user {current_user.id}", extra={"count": len(services)})
        return profile

    def _ensure_specialist(self, user: User) -> None:
        if not user.is_specialist:
            raise PermissionError("Only specialists have profiles", error_code="specialistsOnly")

    def _validate_owner_updates(self, user: User, updates: Dict[str, Any]) -> None:
        email = updates.get("email")
        if email is None:
            return
        email = email.strip()
        if not is_valid_email(email):
            raise ValidationError("Email is not valid", error_code="pleaseEnterValidEmail")
        existing = self.repo.find_by_email(email)
        if existing and existing.id != user.id:
            raise ConflictError("User already exists", error_code="userExistsError")
        updates["email"] = email

    def _validate_profile_updates(self, updates: Dict[str, Any]) -> None:
        if "categories" in updates:
            validate_categories(updates["categories"])
            updates["categories"] = list(dict.fromkeys(updates["categories"]))
        if "locations" in updates:
            validate_cities(updates["locations"])
            updates["locations"] = list(dict.fromkeys(updates["locations"]))
        if "services" in updates:
            services = [s.strip() for s in updates["services"] if s.strip()]
            if not services:
                raise ValidationError("At least one service is required", error_code="pleaseSelectServices")
            updates["services"] = list(dict.fromkeys(services))
