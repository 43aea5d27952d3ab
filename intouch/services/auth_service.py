"""Signup, login and password reset"""

import logging
from typing import List

from intouch.core.catalog import ServiceCategory, is_known_city
from intouch.core.security import (
    create_access_token,
    get_password_hash,
    is_password_strong,
    verify_password,
)
from intouch.db.models import SpecialistType, UserRole
from intouch.db.repository import MarketplaceRepository
from intouch.schemas.specialist import SpecialistProfileCreate
from intouch.schemas.user import (
    CustomerSignup,
    SpecialistSignup,
    TokenResponse,
    UserInDB,
    is_valid_email,
)
from intouch.services.exceptions import AuthenticationError, ConflictError, ValidationError
from intouch.services.session_store import KeyValueStorage, SessionStore, new_session_id

logger = logging.getLogger(__name__)

DEFAULT_PROFESSION = "Specialistas"


def _fail(error_code: str, message: str, **details) -> None:
    raise ValidationError(message, error_code=error_code, details=details)


def validate_credentials(email: str, password: str, confirm_password: str) -> None:
    """The shared head of every signup form, checked in display order"""
    if not email.strip():
        _fail("pleaseEnterEmail", "Email is required")
    if not is_valid_email(email.strip()):
        _fail("pleaseEnterValidEmail", "Email is not valid")
    if not password:
        _fail("pleaseEnterPassword", "Password is required")
    if not is_password_strong(password):
        _fail("passwordTooWeak", "Password is too weak")
    if password != confirm_password:
        _fail("passwordMismatchError", "Passwords do not match")


def validate_categories(categories: List[str]) -> None:
    if not categories:
        _fail("pleaseSelectCategory", "At least one category is required")
    for category in categories:
        try:
            ServiceCategory(category)
        except ValueError:
            _fail("invalidCategory", f"Unknown category: {category}", category=category)


def validate_cities(cities: List[str]) -> None:
    for city in cities:
        if not is_known_city(city):
            _fail("invalidCity", f"Unknown city: {city}", city=city)


class AuthService:
    def __init__(self, repo: MarketplaceRepository):
        self.repo = repo

    def _ensure_email_free(self, email: str) -> None:
        if self.repo.find_by_email(email):
            raise ConflictError("User already exists", error_code="userExistsError")

    def signup_customer(self, data: CustomerSignup) -> UserInDB:
        validate_credentials(data.email, data.password, data.confirm_password)
        if not data.first_name.strip():
            _fail("pleaseEnterFirstName", "First name is required")
        if not data.last_name.strip():
            _fail("pleaseEnterLastName", "Last name is required")

        email = data.email.strip()
        self._ensure_email_free(email)

        user = self.repo.create({
            "email": email,
            "password_hash": get_password_hash(data.password),
            "role": UserRole.CUSTOMER,
            "first_name": data.first_name.strip(),
            "last_name": data.last_name.strip(),
        })
        logger.info(f"Customer signed up: {user.id}")
        return user

    def signup_specialist(self, data: SpecialistSignup) -> UserInDB:
        """Create a specialist account and its listing in one step"""
        validate_credentials(data.email, data.password, data.confirm_password)

        is_business = data.specialist_type == SpecialistType.BUSINESS
        if is_business:
            if not data.company_name.strip():
                _fail("pleaseEnterCompanyName", "Company name is required")
            if not data.company_code.strip():
                _fail("pleaseEnterCompanyCode", "Company code is required")
        else:
            if not data.first_name.strip():
                _fail("pleaseEnterFirstName", "First name is required")
            if not data.last_name.strip():
                _fail("pleaseEnterLastName", "Last name is required")

        validate_categories(data.categories)
        services = [s.strip() for s in data.services if s.strip()]
        if not services:
            _fail("pleaseSelectServices", "At least one service is required")
        validate_cities(data.cities)

        email = data.email.strip()
        self._ensure_email_free(email)

        owner = {
            "email": email,
            "password_hash": get_password_hash(data.password),
            "role": UserRole.BUSINESS_SPECIALIST if is_business else UserRole.INDIVIDUAL_SPECIALIST,
        }
        if is_business:
            owner.update(company_name=data.company_name.strip(), company_code=data.company_code.strip())
        else:
            owner.update(first_name=data.first_name.strip(), last_name=data.last_name.strip())

        user = self.repo.create(owner)
        self.repo.create_profile(SpecialistProfileCreate(
            user_id=user.id,
            type=data.specialist_type,
            profession=(data.profession or "").strip() or data.categories[0] or DEFAULT_PROFESSION,
            categories=list(dict.fromkeys(data.categories)),
            locations=list(dict.fromkeys(data.cities)),
            services=list(dict.fromkeys(services)),
        ))
        logger.info(f"Specialist signed up: {user.id} ({data.specialist_type.value})")
        return user

    def authenticate(self, email: str, password: str) -> UserInDB:
        if not email.strip():
            _fail("pleaseEnterEmail", "Email is required")
        if not password.strip():
            _fail("pleaseEnterPassword", "Password is required")

        user = self.repo.find_by_email(email.strip())
        # Unknown e-mail and wrong password look the same to the caller
        if not user or not verify_password(password, user.password_hash):
            logger.info("Failed login attempt")
            raise AuthenticationError("Invalid credentials", error_code="invalidCredentialsError")
        return user

    def start_session(self, storage: KeyValueStorage, user: UserInDB) -> TokenResponse:
        session_id = new_session_id()
        SessionStore(storage, session_id).set_current_user(user.public())
        logger.info(f"Session started for user {user.id}")
        return TokenResponse(access_token=create_access_token(session_id), user=user.public())

    def request_password_reset(self, email: str) -> None:
        """Validate the address; the reply never reveals whether an account exists"""
        if not email.strip():
            _fail("pleaseEnterEmail", "Email is required")
        if not is_valid_email(email.strip()):
            _fail("pleaseEnterValidEmail", "Email is not valid")

        if self.repo.find_by_email(email.strip()):
            logger.info("Password reset requested for an existing account")
        else:
            logger.info("Password reset requested for an unknown address")
