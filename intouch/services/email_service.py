"""Transactional e-mail through the provider's HTTP API"""

import html
import logging
from typing import Optional

import httpx

from intouch.core.config import settings
from intouch.core.i18n import translate

logger = logging.getLogger(__name__)


class EmailService:
    """Thin client for the ``POST {base}/send`` endpoint of the e-mail provider"""

    def __init__(self):
        self.api_key = settings.EMAIL_API_KEY
        self.base_url = settings.EMAIL_API_BASE_URL.rstrip("/")
        self.from_address = settings.EMAIL_FROM
        self.timeout = settings.EMAIL_TIMEOUT_SECONDS

    def is_configured(self) -> bool:
        return bool(self.api_key and self.base_url)

    def send_email(self, to: str, subject: str, body: str, from_address: Optional[str] = None) -> bool:
        """
        Send one HTML e-mail.

        Returns True when the provider accepted the message. Transport and
        HTTP errors are logged and reported as False.
        """
        if not self.is_configured():
            logger.warning(f"Email API not configured. Not sending '{subject}' to {to}")
            return False

        try:
            response = httpx.post(
                f"{self.base_url}/send",
                headers={
                    "Content-Type": "application/json",
                    "Authorization": f"Bearer {self.api_key}",
                },
                json={
                    "to": to,
                    "from": from_address or self.from_address,
                    "subject": subject,
                    "html": body,
                },
                timeout=self.timeout,
            )
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error(f"Email sending failed for {to}: {e}")
            return False

        logger.info(f"Email '{subject}' sent to {to}")
        return True

    def send_contact_notification(
        self, specialist_email: str, customer_name: str, message: str, language: Optional[str] = None
    ) -> bool:
        params = {"name": html.escape(customer_name), "message": html.escape(message)}
        return self.send_email(
            specialist_email,
            translate("contactNotificationSubject", {"name": customer_name}, language=language),
            translate("contactNotificationBody", params, language=language),
        )

    def send_contact_confirmation(self, customer_email: str, language: Optional[str] = None) -> bool:
        return self.send_email(
            customer_email,
            translate("contactConfirmationSubject", language=language),
            translate("contactConfirmationBody", language=language),
        )


email_service = EmailService()
