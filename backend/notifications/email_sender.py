"""
Email delivery via Resend API for the notification system.
"""

from typing import Any

import resend

from config import settings
from shared.errors import TransportError


# Initialize Resend with API key from environment
resend.api_key = settings.RESEND_API_KEY


class ResendEmailSender:
    """Sends one notification email through Resend."""

    def __init__(self, from_email: str = settings.NOTIFICATION_FROM_EMAIL):
        self._from_email = from_email

    def send(self, address: str, subject: str, text_body: str, html_body: str) -> str | None:
        """
        Send an email with both text and HTML parts.

        Returns:
            Resend email id, if the API returned one

        Raises:
            TransportError: Resend rejected the message or could not be reached
        """
        try:
            response: Any = resend.Emails.send(
                {
                    "from": f"Alertas de Publicações <{self._from_email}>",
                    "to": address,
                    "subject": subject,
                    "html": html_body,
                    "text": text_body,
                }
            )
        except Exception as e:
            raise TransportError(f"Email to {address} failed: {e}") from e

        if isinstance(response, dict):
            return response.get("id")
        return getattr(response, "id", None)
