"""
Legal Publication Alerts

Usage:
    Run from the backend/ directory:

    # Store publications captured from the portal (file or '-' for stdin)
    $ uv run python main.py ingest publications.json

    # Store and immediately notify matching subscribers
    $ uv run python main.py ingest publications.json --notify

    # Notify for database-webhook insert events
    $ uv run python main.py events events.json

    # Show which subscribers a stored publication would match (sends nothing)
    $ uv run python main.py match publication.json

Required environment variables (.env file):
    - SUPABASE_URL: Supabase project URL
    - SUPABASE_SERVICE_KEY: Supabase service role key

Optional environment variables:
    - ENABLE_NOTIFICATIONS=true: run the matching sweep after ingest (default: false)
    - RESEND_API_KEY, NOTIFICATION_FROM_EMAIL: email delivery
    - TWILIO_ACCOUNT_SID, TWILIO_AUTH_TOKEN, TWILIO_FROM_NUMBER: SMS delivery
    - NOTIFICATION_WORKERS, DISPATCH_TIMEOUT_SECONDS, DEFAULT_TIMEZONE
"""

import argparse
import json
import sys
from datetime import datetime
from typing import Any

from config import settings
from ingest.publication_store import PublicationStore
from models import IngestStatus, Publication
from notifications.dispatcher import NotificationDispatcher
from notifications.email_sender import ResendEmailSender
from notifications.match_evaluator import build_name_pool, evaluate, extract_keywords
from notifications.preference_repository import PreferenceRepository
from notifications.publication_pipeline import PublicationPipeline
from notifications.sms_sender import TwilioSmsSender
from shared.db import get_supabase_client
from shared.errors import PaginationError, PublicationValidationError
from shared.utils import print_summary


def build_pipeline(dry_run: bool = False) -> PublicationPipeline:
    """Construct every collaborator once and wire them into the pipeline."""
    supabase = get_supabase_client()
    return PublicationPipeline(
        store=PublicationStore(supabase),
        repository=PreferenceRepository(supabase),
        dispatcher=NotificationDispatcher(
            sms_sender=TwilioSmsSender(),
            email_sender=ResendEmailSender(),
            dry_run=dry_run,
        ),
    )


def _load_json(path: str) -> Any:
    if path == "-":
        return json.load(sys.stdin)
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def run_ingest(path: str, notify: bool, dry_run: bool) -> dict[str, int]:
    """Ingest a portal payload; optionally run the matching sweep for new inserts."""
    print(f"[{datetime.now()}] Starting publication ingestion...")
    payload = _load_json(path)
    stats = {"inserted": 0, "duplicates": 0, "skipped": 0, "failed": 0}

    if notify:
        for result in build_pipeline(dry_run=dry_run).process_collection(payload):
            if result.failed:
                stats["failed"] += 1
            elif result.ingest.status == IngestStatus.INSERTED:
                stats["inserted"] += 1
            elif result.ingest.status == IngestStatus.ALREADY_EXISTS:
                stats["duplicates"] += 1
            else:
                stats["skipped"] += 1
    else:
        items = payload.get("collection") if isinstance(payload, dict) else payload
        if not isinstance(items, list):
            print("No 'collection' array found in payload.")
            return stats
        summary = PublicationStore(get_supabase_client()).ingest_batch(items)
        stats = {
            "inserted": len(summary.inserted),
            "duplicates": summary.duplicates,
            "skipped": summary.skipped,
            "failed": summary.failed,
        }

    print_summary(stats["inserted"], stats["duplicates"], stats["skipped"], stats["failed"])
    return stats


def run_events(path: str, dry_run: bool) -> None:
    """Handle a database-webhook payload (one event, a list, or {"events": [...]})."""
    payload = _load_json(path)
    if isinstance(payload, dict):
        events = payload.get("events", [payload])
    else:
        events = payload

    pipeline = build_pipeline(dry_run=dry_run)
    summaries = pipeline.handle_change_events(events)
    print(f"\n[{datetime.now()}] Handled {len(summaries)} insert event(s)")


def run_match(path: str) -> int:
    """Print the subscribers a stored publication would match, without sending."""
    try:
        publication = Publication.from_record(_load_json(path))
    except PublicationValidationError as e:
        print(f"✗ Invalid publication record: {e}")
        return 1

    try:
        subscribers = PreferenceRepository(get_supabase_client()).fetch_all()
    except PaginationError as e:
        print(f"✗ Could not load subscribers: {e}")
        return 1

    keyword_pool = extract_keywords(publication.body_text)
    name_pool = build_name_pool(publication)
    matched = 0
    for preferences in subscribers:
        result = evaluate(publication, preferences, keyword_pool, name_pool)
        if result.match_found:
            matched += 1
            print(f"✓ {preferences.subscriber_id}: {', '.join(result.matched_fields)}")

    print(f"\n{matched} of {len(subscribers)} subscribers match publication {publication.publication_number}")
    return 0


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(description="Legal publication alerts")
    subparsers = parser.add_subparsers(dest="command", required=True)

    ingest_parser = subparsers.add_parser("ingest", help="Store portal publications")
    ingest_parser.add_argument("path", help="Portal JSON file, or '-' for stdin")
    ingest_parser.add_argument(
        "--notify",
        action="store_true",
        help="Notify matching subscribers for new publications (or set ENABLE_NOTIFICATIONS=true)",
    )
    ingest_parser.add_argument(
        "--dry-run", action="store_true", help="Dry run mode (don't actually send notifications)"
    )

    events_parser = subparsers.add_parser("events", help="Handle database-webhook events")
    events_parser.add_argument("path", help="Webhook JSON file, or '-' for stdin")
    events_parser.add_argument(
        "--dry-run", action="store_true", help="Dry run mode (don't actually send notifications)"
    )

    match_parser = subparsers.add_parser("match", help="Preview matches for a stored publication")
    match_parser.add_argument("path", help="Publication row JSON file, or '-' for stdin")

    args = parser.parse_args()

    if args.command == "ingest":
        run_ingest(
            args.path,
            notify=args.notify or settings.ENABLE_NOTIFICATIONS,
            dry_run=args.dry_run,
        )
    elif args.command == "events":
        run_events(args.path, dry_run=args.dry_run)
    elif args.command == "match":
        sys.exit(run_match(args.path))


if __name__ == "__main__":
    main()
