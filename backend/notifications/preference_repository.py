"""
Read access to subscriber preferences.

Preferences are owned by the subscription surface; this module only reads
them, always as a complete set.
"""

from typing import Any

from pydantic import ValidationError
from supabase import Client

from config import settings
from models import SubscriberPreferences
from shared.error_logger import log_notification_error
from shared.errors import PaginationError


class PreferenceRepository:
    """Pages through the preferences table until it is exhausted."""

    def __init__(
        self,
        supabase: Client,
        table: str = settings.PREFERENCES_TABLE,
        page_size: int = settings.PREFERENCES_PAGE_SIZE,
    ):
        if page_size < 1:
            raise ValueError("page_size must be at least 1")
        self._supabase = supabase
        self._table = table
        self._page_size = page_size

    def fetch_all(self) -> list[SubscriberPreferences]:
        """
        Fetch every subscriber's preferences.

        Pages are requested in subscriber_id order with .range(); the next
        offset acts as the continuation token. Each response carries the exact
        row count, and paging runs until that many rows have arrived. A page
        shorter than requested (PostgREST caps responses at its max-rows
        setting) just moves the offset forward.

        Returns:
            All decodable preference records (no ordering guarantee)

        Raises:
            PaginationError: any page failed, or rows ran out before the
                reported count; partial results are never returned
        """
        preferences: list[SubscriberPreferences] = []
        offset = 0
        total: int | None = None

        while total is None or offset < total:
            rows, total = self._fetch_page(offset)
            if not rows and offset < total:
                raise PaginationError(
                    f"Preferences ended at offset {offset}, expected {total} rows"
                )
            offset += len(rows)
            for row in rows:
                decoded = self._decode(row)
                if decoded is not None:
                    preferences.append(decoded)

        return preferences

    def _fetch_page(self, offset: int) -> tuple[list[dict[str, Any]], int]:
        try:
            response = (
                self._supabase.table(self._table)
                .select("*", count="exact")
                .order("subscriber_id")
                .range(offset, offset + self._page_size - 1)
                .execute()
            )
        except Exception as e:
            raise PaginationError(
                f"Failed to fetch preferences page at offset {offset}: {e}"
            ) from e

        if not isinstance(response.count, int):
            raise PaginationError(f"No row count in preferences page at offset {offset}")
        return response.data or [], response.count

    def _decode(self, row: dict[str, Any]) -> SubscriberPreferences | None:
        try:
            return SubscriberPreferences.model_validate(row)
        except ValidationError as e:
            error_file = log_notification_error(
                error_type="preferences",
                error_message=f"Invalid preference record: {e.error_count()} error(s)",
                context={"subscriber_id": row.get("subscriber_id"), "errors": str(e)},
            )
            print(f"  ⚠️  Skipping invalid preferences. Details logged to: {error_file}")
            return None
