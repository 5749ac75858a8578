"""
Channel selection and delivery for matched publications.

A failed delivery is logged and returned as a result, never raised, so one
subscriber's bad address or a provider outage cannot affect anyone else.
"""

from datetime import datetime
from typing import Protocol

from models import DispatchResult, DispatchStatus, Publication, SubscriberPreferences
from notifications.message_builder import build_message
from shared.error_logger import log_notification_error
from shared.errors import TransportError

SMS = "sms"
EMAIL = "email"


class SmsSender(Protocol):
    def send(self, phone_number: str, text: str) -> str | None: ...


class EmailSender(Protocol):
    def send(
        self, address: str, subject: str, text_body: str, html_body: str
    ) -> str | None: ...


class NotificationDispatcher:
    """Formats and sends one notification per matched subscriber."""

    def __init__(
        self,
        sms_sender: SmsSender,
        email_sender: EmailSender,
        dry_run: bool = False,
    ):
        self._sms_sender = sms_sender
        self._email_sender = email_sender
        self._dry_run = dry_run

    def dispatch(
        self,
        preferences: SubscriberPreferences,
        publication: Publication,
        matched_fields: list[str],
        detected_at: datetime | None = None,
    ) -> DispatchResult:
        """
        Notify a subscriber over their chosen channel.

        Args:
            preferences: Recipient preferences (channel, address, name, timezone)
            publication: The matched publication
            matched_fields: Matched dimension descriptions from the evaluator
            detected_at: Detection time shown in the message (defaults to now)

        Returns:
            DispatchResult: SENT, SKIPPED (missing address / unsupported channel) or FAILED
        """
        subscriber_id = preferences.subscriber_id
        method = preferences.contact_method
        address = (preferences.contact_address or "").strip()

        if method == SMS and not address:
            return self._skip(subscriber_id, method, "missing phone")
        if method == EMAIL and not address:
            return self._skip(subscriber_id, method, "missing address")
        if method not in (SMS, EMAIL):
            return self._skip(subscriber_id, method or None, "unsupported channel")

        message = build_message(preferences, publication, matched_fields, detected_at)

        if self._dry_run:
            print(
                f"  [DRY RUN] Would send {method} to subscriber {subscriber_id} "
                f"for publication {publication.publication_number}"
            )
            return DispatchResult(
                subscriber_id=subscriber_id, status=DispatchStatus.SENT, channel=method
            )

        try:
            if method == SMS:
                message_id = self._sms_sender.send(address, message["text"])
            else:
                message_id = self._email_sender.send(
                    address, message["subject"], message["text"], message["html"]
                )
        except TransportError as e:
            error_file = log_notification_error(
                error_type="sending",
                error_message=str(e),
                context={
                    "subscriber_id": subscriber_id,
                    "channel": method,
                    "publication_number": publication.publication_number,
                },
            )
            print(f"  ✗ Failed to notify subscriber {subscriber_id} ({method}): {e}")
            print(f"    Error details logged to: {error_file}")
            return DispatchResult(
                subscriber_id=subscriber_id,
                status=DispatchStatus.FAILED,
                channel=method,
                reason=str(e),
            )

        print(f"  ✓ Sent {method} to subscriber {subscriber_id}")
        return DispatchResult(
            subscriber_id=subscriber_id,
            status=DispatchStatus.SENT,
            channel=method,
            message_id=message_id,
        )

    @staticmethod
    def _skip(subscriber_id: str, channel: str | None, reason: str) -> DispatchResult:
        print(f"  ⊘ Skipping subscriber {subscriber_id}: {reason}")
        return DispatchResult(
            subscriber_id=subscriber_id,
            status=DispatchStatus.SKIPPED,
            channel=channel,
            reason=reason,
        )
