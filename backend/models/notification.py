"""Pydantic models for matching and dispatch outcomes."""

from enum import Enum

from pydantic import BaseModel, Field

from models.publication import Publication
from models.types import MatchedFields, PublicationNumber, SubscriberID


class IngestStatus(str, Enum):
    INSERTED = "inserted"
    ALREADY_EXISTS = "already_exists"
    SKIPPED = "skipped"


class IngestResult(BaseModel):
    """Outcome of storing one publication."""

    status: IngestStatus
    publication_number: PublicationNumber | None = None
    publication: Publication | None = None
    reason: str | None = None

    @property
    def inserted(self) -> bool:
        return self.status == IngestStatus.INSERTED


class IngestSummary(BaseModel):
    """Counts for a batch of ingested publications."""

    inserted: list[Publication] = Field(default_factory=list)
    duplicates: int = 0
    skipped: int = 0
    failed: int = 0


class MatchResult(BaseModel):
    """
    Matched dimensions for one (publication, subscriber) pair.

    decision_type_failed is set when the subscriber asked for specific decision
    types and the publication is none of them; that vetoes any other match.
    """

    matched_fields: MatchedFields = Field(default_factory=list)
    decision_type_failed: bool = False

    @property
    def match_found(self) -> bool:
        return bool(self.matched_fields) and not self.decision_type_failed


class DispatchStatus(str, Enum):
    SENT = "sent"
    SKIPPED = "skipped"
    FAILED = "failed"


class DispatchResult(BaseModel):
    """Outcome of notifying one subscriber."""

    subscriber_id: SubscriberID
    status: DispatchStatus
    channel: str | None = None
    reason: str | None = None
    message_id: str | None = None


class SweepSummary(BaseModel):
    """Outcome of matching one publication against every subscriber."""

    publication_number: PublicationNumber
    evaluated: int = 0
    matched: int = 0
    sent: int = 0
    skipped: int = 0
    failed: int = 0
    aborted: bool = False
    results: list[DispatchResult] = Field(default_factory=list)

    def record(self, result: DispatchResult) -> None:
        self.results.append(result)
        if result.status == DispatchStatus.SENT:
            self.sent += 1
        elif result.status == DispatchStatus.SKIPPED:
            self.skipped += 1
        else:
            self.failed += 1


class ProcessResult(BaseModel):
    """Outcome of one pass through the publication pipeline."""

    ingest: IngestResult
    sweep: SweepSummary | None = None
    failed: bool = False
