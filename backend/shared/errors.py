"""
Error taxonomy for publication ingestion and notification dispatch.

Every error is caught and classified at the smallest scope that owns it, so one
bad record or subscriber never blocks the others.
"""


class AlertsError(Exception):
    """Base class for all errors raised by this package."""


class PublicationValidationError(AlertsError):
    """A record is missing its identifier or cannot be decoded."""


class ConflictError(AlertsError):
    """A publication with the same publication number is already stored."""

    def __init__(self, publication_number: int):
        super().__init__(f"Publication {publication_number} already exists")
        self.publication_number = publication_number


class StoreError(AlertsError):
    """The record store rejected or failed a request."""


class TransportError(AlertsError):
    """An SMS or email provider failed to accept a message."""


class PaginationError(AlertsError):
    """The subscriber preference set could not be read completely."""
