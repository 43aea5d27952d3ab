from typing import Any

from fastapi import APIRouter, Depends

from intouch.api.deps import get_current_user, get_notifier, get_repository, get_session_context
from intouch.db.repository import MarketplaceRepository
from intouch.schemas.search import ComposeRequest, ContactRequest, ContactResponse, MailtoResponse
from intouch.schemas.user import User
from intouch.services.messaging import MessagingService, Notifier, compose_mailto
from intouch.services.session_store import SessionContext

router = APIRouter()


@router.post("/compose", response_model=MailtoResponse)
def compose(
    data: ComposeRequest,
    context: SessionContext = Depends(get_session_context),
    current_user: User = Depends(get_current_user),
) -> Any:
    """
    Build a ``mailto:`` link from an explicit recipient list and subject.
    """
    recipients = list(dict.fromkeys(r.strip() for r in data.recipients if r.strip()))
    return compose_mailto(
        data.message,
        recipients,
        subject=data.subject,
        require_subject=True,
        language=context.language,
    )


@router.post("/contact", response_model=ContactResponse)
def contact_specialist(
    data: ContactRequest,
    repo: MarketplaceRepository = Depends(get_repository),
    notifier: Notifier = Depends(get_notifier),
    current_user: User = Depends(get_current_user),
) -> Any:
    """
    Send an inquiry to one specialist. With the e-mail provider configured
    the specialist is notified and the customer gets a confirmation;
    otherwise a ``mailto:`` link is returned.
    """
    return MessagingService(repo, notifier).contact_specialist(current_user, data.specialist_email, data.message)
