"""
Idempotent storage of publications discovered on the portal.

The publications table has a unique constraint on publication_number, so a
plain insert is the put-if-absent: concurrent ingestions of the same number
resolve to one insert and a unique-violation for everyone else.
"""

from typing import Any, Iterable

from postgrest.exceptions import APIError
from supabase import Client

from config import settings
from models import IngestResult, IngestStatus, IngestSummary, Publication
from models.types import RawRecord
from shared.error_logger import log_notification_error
from shared.errors import ConflictError, PublicationValidationError, StoreError
from shared.text import normalize

UNIQUE_VIOLATION = "23505"


class PublicationStore:
    """Writes publications to Supabase at most once per publication number."""

    def __init__(self, supabase: Client, table: str = settings.PUBLICATIONS_TABLE):
        self._supabase = supabase
        self._table = table

    def ingest(self, raw: RawRecord) -> IngestResult:
        """
        Normalize, decode and store one raw portal item.

        Returns:
            IngestResult with status INSERTED, ALREADY_EXISTS or SKIPPED
            (the item had no usable publication number)

        Raises:
            StoreError: the store failed for a reason other than a duplicate
        """
        try:
            publication = Publication.from_portal_payload(normalize(raw))
        except PublicationValidationError as e:
            print(f"  ⊘ Skipped invalid publication: {e}")
            return IngestResult(status=IngestStatus.SKIPPED, reason=str(e))

        number = publication.publication_number
        try:
            self._insert(publication)
        except ConflictError:
            print(f"  ⊘ Duplicate: publication {number}")
            return IngestResult(
                status=IngestStatus.ALREADY_EXISTS,
                publication_number=number,
                publication=publication,
            )

        print(f"  ✓ Stored publication {number}")
        return IngestResult(
            status=IngestStatus.INSERTED,
            publication_number=number,
            publication=publication,
        )

    def ingest_batch(self, items: Iterable[RawRecord]) -> IngestSummary:
        """
        Ingest every item, isolating failures per item.

        Returns:
            IngestSummary with the newly inserted publications and counts
        """
        summary = IngestSummary()

        for item in items:
            try:
                result = self.ingest(item)
            except StoreError as e:
                summary.failed += 1
                error_file = log_notification_error(
                    error_type="ingestion",
                    error_message=str(e),
                    context={"publication_number": _raw_number(item)},
                )
                print(f"  ✗ Store error. Details logged to: {error_file}")
                continue

            if result.status == IngestStatus.INSERTED:
                summary.inserted.append(result.publication)
            elif result.status == IngestStatus.ALREADY_EXISTS:
                summary.duplicates += 1
            else:
                summary.skipped += 1

        return summary

    def _insert(self, publication: Publication) -> None:
        try:
            self._supabase.table(self._table).insert(
                publication.to_record(), returning="minimal"
            ).execute()
        except APIError as e:
            if _is_duplicate(e):
                raise ConflictError(publication.publication_number) from e
            raise StoreError(
                f"Insert of publication {publication.publication_number} failed: {e.message}"
            ) from e
        except Exception as e:
            raise StoreError(
                f"Insert of publication {publication.publication_number} failed: {e}"
            ) from e


def _is_duplicate(error: APIError) -> bool:
    if error.code == UNIQUE_VIOLATION:
        return True
    error_str = str(error.message or error).lower()
    return "duplicate" in error_str or "unique" in error_str


def _raw_number(item: Any) -> Any:
    if isinstance(item, dict):
        return item.get("numeroPublicacao")
    return None
