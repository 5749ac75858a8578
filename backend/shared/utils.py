import re
from datetime import datetime
from dateutil import parser as date_parser

YEAR_FIRST_PATTERN = re.compile(r"^\s*\d{4}[-/]")


def parse_date_string(date_str: str, dayfirst: bool = False) -> str | None:
    """Parse various date formats into ISO format."""
    if not date_str:
        return None
    try:
        dt = date_parser.parse(date_str, fuzzy=True, dayfirst=dayfirst)
        return str(dt.isoformat())  # Explicit cast to satisfy mypy
    except (ValueError, OverflowError, TypeError):
        return None


def format_publication_date(date_str: str | None) -> str:
    """
    Format a publication date as dd/mm/YYYY, falling back to the raw value.

    ISO dates (2026-10-05) are read year-month-day; anything else is read
    day-first, as the portal writes dates (05/10/2026).
    """
    if not date_str:
        return "Data desconhecida"
    dayfirst = not YEAR_FIRST_PATTERN.match(date_str)
    iso = parse_date_string(date_str, dayfirst=dayfirst)
    if not iso:
        return date_str
    return datetime.fromisoformat(iso).strftime("%d/%m/%Y")


def print_summary(inserted: int, duplicates: int, skipped: int, failed: int) -> None:
    """Print ingestion summary."""
    print(f"\n{'=' * 60}")
    print(f"[{datetime.now()}] Ingestion Complete!")
    print(f"{'=' * 60}")
    print(f"✓ Inserted: {inserted}")
    print(f"⊘ Duplicates: {duplicates}")
    print(f"⊘ Skipped (invalid): {skipped}")
    print(f"✗ Failed: {failed}")
    print(f"{'=' * 60}\n")
