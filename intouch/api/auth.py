import logging
from typing import Any

from fastapi import APIRouter, Depends, status

from intouch.api.deps import get_current_user, get_repository, get_session_context, get_storage
from intouch.core.i18n import translate
from intouch.db.repository import MarketplaceRepository
from intouch.schemas.user import (
    CustomerSignup,
    ForgotPasswordRequest,
    LoginRequest,
    MessageResponse,
    SpecialistSignup,
    TokenResponse,
    User,
)
from intouch.services.auth_service import AuthService
from intouch.services.session_store import KeyValueStorage, SessionContext
from intouch.services.specialist_search import search_sessions

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/signup", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
def signup_customer(
    data: CustomerSignup,
    repo: MarketplaceRepository = Depends(get_repository),
    storage: KeyValueStorage = Depends(get_storage),
) -> Any:
    """
    Register a customer and log them in.
    """
    service = AuthService(repo)
    user = service.signup_customer(data)
    return service.start_session(storage, user)


@router.post("/signup/specialist", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
def signup_specialist(
    data: SpecialistSignup,
    repo: MarketplaceRepository = Depends(get_repository),
    storage: KeyValueStorage = Depends(get_storage),
) -> Any:
    """
    Register an individual or business specialist, create the listing and
    log them in.
    """
    service = AuthService(repo)
    user = service.signup_specialist(data)
    return service.start_session(storage, user)


@router.post("/login", response_model=TokenResponse)
def login(
    data: LoginRequest,
    repo: MarketplaceRepository = Depends(get_repository),
    storage: KeyValueStorage = Depends(get_storage),
) -> Any:
    service = AuthService(repo)
    user = service.authenticate(data.email, data.password)
    return service.start_session(storage, user)


@router.post("/logout", response_model=MessageResponse)
def logout(context: SessionContext = Depends(get_session_context)) -> Any:
    """
    End the session. Safe to call when already logged out.
    """
    if context.store:
        context.store.clear_current_user()
        search_sessions.close(context.session_id)
    return {"message": translate("loggedOut", language=context.language)}


@router.get("/me", response_model=User)
def read_current_user(current_user: User = Depends(get_current_user)) -> Any:
    return current_user


@router.post("/forgot-password", response_model=MessageResponse)
def forgot_password(
    data: ForgotPasswordRequest,
    repo: MarketplaceRepository = Depends(get_repository),
    context: SessionContext = Depends(get_session_context),
) -> Any:
    """
    Acknowledge a password reset request. No e-mail is sent.
    """
    AuthService(repo).request_password_reset(data.email)
    return {"message": translate("passwordResetSent", language=context.language)}
