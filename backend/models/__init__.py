"""Pydantic models for data validation and type checking."""

from models.notification import (
    DispatchResult,
    DispatchStatus,
    IngestResult,
    IngestStatus,
    IngestSummary,
    MatchResult,
    ProcessResult,
    SweepSummary,
)
from models.publication import Decision, Lawyer, Party, Publication
from models.subscriber import DEFAULT_DISPLAY_NAME, SubscriberPreferences

__all__ = [
    "Publication",
    "Decision",
    "Party",
    "Lawyer",
    "SubscriberPreferences",
    "DEFAULT_DISPLAY_NAME",
    "MatchResult",
    "IngestStatus",
    "IngestResult",
    "IngestSummary",
    "DispatchStatus",
    "DispatchResult",
    "SweepSummary",
    "ProcessResult",
]
