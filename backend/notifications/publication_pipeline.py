"""
Publication pipeline: ingest a publication, then notify matching subscribers.

Flow per publication:
1) Normalize and store (put-if-absent on publication_number)
2) Only for a new insert: fetch every subscriber's preferences
3) Evaluate and dispatch per subscriber on a bounded worker pool

Duplicates and invalid records end the run after step 1, so an already-seen
publication never triggers a second round of notifications.
"""

import time
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone
from typing import Any, Iterable

from config import settings
from ingest.publication_store import PublicationStore
from models import (
    DispatchResult,
    DispatchStatus,
    IngestResult,
    IngestStatus,
    ProcessResult,
    Publication,
    SubscriberPreferences,
    SweepSummary,
)
from models.types import RawRecord
from notifications.dispatcher import NotificationDispatcher
from notifications.match_evaluator import build_name_pool, evaluate, extract_keywords
from notifications.preference_repository import PreferenceRepository
from shared.error_logger import log_notification_error
from shared.errors import PaginationError, PublicationValidationError, StoreError

INSERT_EVENT = "INSERT"


class PublicationPipeline:
    """Wires the store, the preference repository and the dispatcher together."""

    def __init__(
        self,
        store: PublicationStore,
        repository: PreferenceRepository,
        dispatcher: NotificationDispatcher,
        max_workers: int = settings.NOTIFICATION_WORKERS,
        dispatch_timeout: float = settings.DISPATCH_TIMEOUT_SECONDS,
    ):
        self._store = store
        self._repository = repository
        self._dispatcher = dispatcher
        self._max_workers = max(1, max_workers)
        self._dispatch_timeout = dispatch_timeout

    def process_publication(self, raw: RawRecord) -> ProcessResult:
        """
        Ingest one raw portal item and, if it is new, run the matching sweep.

        Store errors are logged here; the caller only sees the result.
        """
        try:
            ingest_result = self._store.ingest(raw)
        except StoreError as e:
            number = raw.get("numeroPublicacao") if isinstance(raw, dict) else None
            error_file = log_notification_error(
                error_type="ingestion",
                error_message=str(e),
                context={"publication_number": number},
            )
            print(f"  ✗ Store error. Details logged to: {error_file}")
            return ProcessResult(
                ingest=IngestResult(status=IngestStatus.SKIPPED, reason=str(e)),
                failed=True,
            )

        if ingest_result.status != IngestStatus.INSERTED:
            return ProcessResult(ingest=ingest_result)

        sweep = self.run_matching_sweep(ingest_result.publication)
        return ProcessResult(ingest=ingest_result, sweep=sweep)

    def process_collection(self, payload: Any) -> list[ProcessResult]:
        """
        Process a portal search response ({"collection": [...]}) or a bare list.

        Each item is independent: an error on one never stops the rest.
        """
        items = _collection_items(payload)
        if items is None:
            print("No 'collection' array found in payload.")
            return []

        results = []
        for i, item in enumerate(items, 1):
            print(f"\n[{i}/{len(items)}] Processing publication...")
            results.append(self.process_publication(item))
        return results

    def handle_change_events(self, events: Iterable[dict[str, Any]]) -> list[SweepSummary]:
        """
        Run the matching sweep for database-webhook insert events.

        Each event carries the row exactly as persisted:
            {"type": "INSERT", "table": "publications", "record": {...}, "old_record": null}

        Non-insert events are ignored. A record that cannot be decoded is logged
        and skipped.
        """
        summaries = []
        for event in events:
            if not isinstance(event, dict) or event.get("type") != INSERT_EVENT:
                continue

            try:
                publication = Publication.from_record(event.get("record") or {})
            except PublicationValidationError as e:
                error_file = log_notification_error(
                    error_type="events",
                    error_message=str(e),
                    context={"table": event.get("table"), "record": event.get("record")},
                )
                print(f"  ⚠️  Undecodable insert event. Details logged to: {error_file}")
                continue

            print(f"\nProcessing new publication: {publication.publication_number}")
            summaries.append(self.run_matching_sweep(publication))
        return summaries

    def run_matching_sweep(self, publication: Publication) -> SweepSummary:
        """
        Match one publication against every subscriber and notify the matches.

        The full preference set is fetched before any matching starts; if that
        fails the sweep is aborted, since a partial set would silently miss
        subscribers.

        Every task shares one dispatch deadline. A matched subscriber whose
        send has not started by then is reported as FAILED("timeout") and is
        never contacted; sends already in flight are bounded by the transport
        timeouts. The pool is joined before the summary is built, so every
        result is final when this returns.

        Returns:
            SweepSummary with per-subscriber results
        """
        summary = SweepSummary(publication_number=publication.publication_number)

        try:
            subscribers = self._repository.fetch_all()
        except PaginationError as e:
            error_file = log_notification_error(
                error_type="preferences",
                error_message=str(e),
                context={"publication_number": publication.publication_number},
            )
            print(f"  ✗ Could not load subscribers, sweep aborted. Details logged to: {error_file}")
            summary.aborted = True
            return summary

        print(f"  Matching against {len(subscribers)} subscribers")
        summary.evaluated = len(subscribers)
        if not subscribers:
            return summary

        keyword_pool = extract_keywords(publication.body_text)
        name_pool = build_name_pool(publication)
        detected_at = datetime.now(timezone.utc)
        deadline = time.monotonic() + self._dispatch_timeout

        with ThreadPoolExecutor(max_workers=self._max_workers) as executor:
            futures = [
                executor.submit(
                    self._notify_subscriber,
                    publication,
                    preferences,
                    keyword_pool,
                    name_pool,
                    detected_at,
                    deadline,
                )
                for preferences in subscribers
            ]

        for future in futures:
            result = future.result()
            if result is None:
                continue
            summary.matched += 1
            summary.record(result)

        print(
            f"  Sweep for publication {publication.publication_number}: "
            f"{summary.matched} matched, {summary.sent} sent, "
            f"{summary.skipped} skipped, {summary.failed} failed"
        )
        return summary

    def _notify_subscriber(
        self,
        publication: Publication,
        preferences: SubscriberPreferences,
        keyword_pool: set[str],
        name_pool: list[str],
        detected_at: datetime,
        deadline: float,
    ) -> DispatchResult | None:
        """Evaluate and dispatch for one subscriber; None means no match."""
        try:
            match = evaluate(publication, preferences, keyword_pool, name_pool)
            if not match.match_found:
                return None

            print(
                f"  Match for subscriber {preferences.subscriber_id}: "
                f"{', '.join(match.matched_fields)}"
            )
            if time.monotonic() >= deadline:
                return self._timed_out(publication, preferences)
            return self._dispatcher.dispatch(
                preferences, publication, match.matched_fields, detected_at
            )
        except Exception as e:
            error_file = log_notification_error(
                error_type="matching",
                error_message=str(e),
                context={
                    "subscriber_id": preferences.subscriber_id,
                    "publication_number": publication.publication_number,
                },
            )
            print(f"  ✗ Error notifying subscriber {preferences.subscriber_id}: {e}")
            print(f"    Error details logged to: {error_file}")
            return DispatchResult(
                subscriber_id=preferences.subscriber_id,
                status=DispatchStatus.FAILED,
                channel=preferences.contact_method or None,
                reason=str(e),
            )

    def _timed_out(
        self, publication: Publication, preferences: SubscriberPreferences
    ) -> DispatchResult:
        error_file = log_notification_error(
            error_type="sending",
            error_message="Dispatch deadline passed before sending",
            context={
                "subscriber_id": preferences.subscriber_id,
                "publication_number": publication.publication_number,
                "timeout_seconds": self._dispatch_timeout,
            },
        )
        print(f"  ✗ Timed out notifying subscriber {preferences.subscriber_id}")
        print(f"    Error details logged to: {error_file}")
        return DispatchResult(
            subscriber_id=preferences.subscriber_id,
            status=DispatchStatus.FAILED,
            channel=preferences.contact_method or None,
            reason="timeout",
        )


def _collection_items(payload: Any) -> list[Any] | None:
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict) and isinstance(payload.get("collection"), list):
        return payload["collection"]
    return None
