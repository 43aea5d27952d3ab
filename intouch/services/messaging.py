"""Outbound message composition and the notify hand-off"""

import logging
from abc import ABC, abstractmethod
from typing import Iterable, List, Optional
from urllib.parse import quote

from intouch.core.i18n import translate
from intouch.db.repository import MarketplaceRepository
from intouch.schemas.search import ContactResponse, MailtoResponse
from intouch.schemas.user import User
from intouch.services.email_service import EmailService
from intouch.services.exceptions import DispatchError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)

# Characters encodeURIComponent leaves alone besides letters and digits
URI_COMPONENT_SAFE = "-_.!~*'()"


def encode_uri_component(value: str) -> str:
    return quote(value, safe=URI_COMPONENT_SAFE)


def build_mailto(recipients: Iterable[str], subject: str, body: str) -> str:
    """``mailto:`` URI addressed to every recipient at once, ``;``-separated"""
    to = ";".join(recipients)
    return (
        f"mailto:{encode_uri_component(to)}"
        f"?subject={encode_uri_component(subject)}"
        f"&body={encode_uri_component(body)}"
    )


def validate_dispatch(
    message: str,
    recipients: List[str],
    subject: Optional[str] = None,
    require_subject: bool = False,
) -> None:
    """Raise ValidationError for the first missing piece of an outbound message"""
    if not (message or "").strip():
        raise ValidationError("Message is empty", error_code="pleaseEnterMessage")
    if not recipients:
        raise ValidationError("No recipients selected", error_code="pleaseSelectRecipients")
    if require_subject and not (subject or "").strip():
        raise ValidationError("Subject is empty", error_code="pleaseEnterSubject")


def compose_mailto(
    message: str,
    recipients: List[str],
    subject: Optional[str] = None,
    require_subject: bool = False,
    language: Optional[str] = None,
) -> MailtoResponse:
    validate_dispatch(message, recipients, subject, require_subject)
    if not require_subject:
        # The listing page always uses the fixed subject
        subject = translate("inquiryFromInTouch", language=language)

    return MailtoResponse(
        mailto=build_mailto(recipients, subject, message),
        recipients=list(recipients),
        subject=subject,
    )


class Notifier(ABC):
    """Delivers a customer's inquiry to one specialist"""

    @abstractmethod
    def notify(self, recipient: str, sender_display_name: str, message: str) -> bool:
        ...

    def confirm(self, customer_email: str) -> bool:
        """Acknowledge the inquiry to the customer; nothing to do by default"""
        return True


class MailtoNotifier(Notifier):
    """Hands the inquiry to the customer's own mail client"""

    def __init__(self, language: Optional[str] = None):
        self.language = language
        self.last_link: Optional[str] = None

    def notify(self, recipient: str, sender_display_name: str, message: str) -> bool:
        self.last_link = build_mailto(
            [recipient], translate("inquiryFromInTouch", language=self.language), message
        )
        return True


class EmailNotifier(Notifier):
    """Sends the inquiry and the customer confirmation through the e-mail API"""

    def __init__(self, service: EmailService, language: Optional[str] = None):
        self.service = service
        self.language = language

    def notify(self, recipient: str, sender_display_name: str, message: str) -> bool:
        return self.service.send_contact_notification(
            recipient, sender_display_name, message, language=self.language
        )

    def confirm(self, customer_email: str) -> bool:
        return self.service.send_contact_confirmation(customer_email, language=self.language)


class MessagingService:
    def __init__(self, repo: MarketplaceRepository, notifier: Notifier):
        self.repo = repo
        self.notifier = notifier

    def contact_specialist(self, customer: User, specialist_email: str, message: str) -> ContactResponse:
        if not (message or "").strip():
            raise ValidationError("Message is empty", error_code="pleaseEnterMessage")

        specialist = self.repo.find_by_email(specialist_email or "")
        if not specialist or not specialist.is_specialist:
            raise NotFoundError("Specialist not found", error_code="specialistNotFound")

        sender = customer.display_name or customer.email
        if not self.notifier.notify(specialist.email, sender, message):
            logger.error(f"Inquiry from {customer.id} to {specialist.id} was not delivered")
            raise DispatchError("Failed to send contact request", error_code="messageSendFailed")

        if not self.notifier.confirm(customer.email):
            logger.error(f"Confirmation to {customer.id} was not delivered")
            raise DispatchError("Failed to send contact request", error_code="messageSendFailed")

        logger.info(f"Inquiry from {customer.id} delivered to {specialist.id}")
        mailto = self.notifier.last_link if isinstance(self.notifier, MailtoNotifier) else None
        return ContactResponse(success=True, mailto=mailto)
