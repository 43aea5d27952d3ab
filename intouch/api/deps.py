import logging
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from intouch.core.config import settings
from intouch.core.i18n import normalize_language
from intouch.core.security import decode_access_token
from intouch.db.database import get_db
from intouch.db.repository import MarketplaceRepository, SqlMarketplaceRepository
from intouch.schemas.user import User
from intouch.services.email_service import email_service
from intouch.services.exceptions import AuthenticationError, PermissionError
from intouch.services.messaging import EmailNotifier, MailtoNotifier, Notifier
from intouch.services.session_store import (
    DatabaseStorage,
    KeyValueStorage,
    SessionContext,
    SessionStore,
)

logger = logging.getLogger(__name__)

oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{settings.API_V1_STR}/auth/login", auto_error=False)


def get_repository(db: Session = Depends(get_db)) -> MarketplaceRepository:
    return SqlMarketplaceRepository(db)


def get_storage(db: Session = Depends(get_db)) -> KeyValueStorage:
    return DatabaseStorage(db)


def get_session_context(
    request: Request,
    token: Optional[str] = Depends(oauth2_scheme),
    storage: KeyValueStorage = Depends(get_storage),
) -> SessionContext:
    """
    Resolve the caller's session from the bearer token.

    The response language is the one saved in the session, else the
    ``Accept-Language`` header, else the default language.
    """
    store = None
    if token:
        session_id = decode_access_token(token)
        if session_id:
            store = SessionStore(storage, session_id)
        else:
            logger.info("Ignoring invalid or expired session token")

    language = (store.get_language() if store else None) or normalize_language(
        request.headers.get("accept-language")
    )
    request.state.language = language
    return SessionContext(store, language)


def get_current_user(context: SessionContext = Depends(get_session_context)) -> User:
    user = context.user
    if user is None:
        raise AuthenticationError("Not authenticated", error_code="notAuthenticated")
    return user


def require_specialist(current_user: User = Depends(get_current_user)) -> User:
    if not current_user.is_specialist:
        raise PermissionError("Only specialists can do this", error_code="specialistsOnly")
    return current_user


def get_notifier(context: SessionContext = Depends(get_session_context)) -> Notifier:
    """E-mail delivery when the provider is configured, otherwise a mail-client hand-off"""
    if email_service.is_configured():
        return EmailNotifier(email_service, language=context.language)
    return MailtoNotifier(language=context.language)
