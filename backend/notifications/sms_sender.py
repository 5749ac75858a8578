"""
SMS delivery via the Twilio Messages REST API.
"""

import requests

from config import settings
from shared.errors import TransportError

TWILIO_MESSAGES_URL = "https://api.twilio.com/2010-04-01/Accounts/{sid}/Messages.json"


class TwilioSmsSender:
    """Sends one SMS through Twilio's REST endpoint."""

    def __init__(
        self,
        account_sid: str | None = settings.TWILIO_ACCOUNT_SID,
        auth_token: str | None = settings.TWILIO_AUTH_TOKEN,
        from_number: str | None = settings.TWILIO_FROM_NUMBER,
        timeout: float = settings.SMS_TIMEOUT_SECONDS,
        session: requests.Session | None = None,
    ):
        self._account_sid = account_sid
        self._auth_token = auth_token
        self._from_number = from_number
        self._timeout = timeout
        self._session = session or requests.Session()

    def send(self, phone_number: str, text: str) -> str | None:
        """
        Send a text message.

        Returns:
            Twilio message SID, if present in the response

        Raises:
            TransportError: SMS is not configured, the request failed or timed out
        """
        if not (self._account_sid and self._auth_token and self._from_number):
            raise TransportError(
                "TWILIO_ACCOUNT_SID, TWILIO_AUTH_TOKEN and TWILIO_FROM_NUMBER must be set"
            )

        try:
            response = self._session.post(
                TWILIO_MESSAGES_URL.format(sid=self._account_sid),
                data={"To": phone_number, "From": self._from_number, "Body": text},
                auth=(self._account_sid, self._auth_token),
                timeout=self._timeout,
            )
            response.raise_for_status()
        except requests.RequestException as e:
            raise TransportError(f"SMS to {phone_number} failed: {e}") from e

        try:
            return response.json().get("sid")
        except ValueError:
            return None
