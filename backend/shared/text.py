"""Accent stripping shared by ingestion and matching."""

import unicodedata
from typing import Any


def remove_accents(text: Any) -> Any:
    """
    Strip diacritics from a string ("Acórdão" -> "Acordao").

    Non-string values are returned unchanged.
    """
    if not isinstance(text, str):
        return text

    decomposed = unicodedata.normalize("NFD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def normalize(value: Any) -> Any:
    """
    Recursively strip accents from every string inside a JSON-like value.

    Lists, tuples and dicts keep their shape; dict keys are left as they are.
    """
    if isinstance(value, str):
        return remove_accents(value)
    if isinstance(value, dict):
        return {key: normalize(item) for key, item in value.items()}
    if isinstance(value, list):
        return [normalize(item) for item in value]
    if isinstance(value, tuple):
        return tuple(normalize(item) for item in value)
    return value


def normalize_for_matching(text: str | None) -> str:
    """Accent-free, lowercased form used for every match comparison."""
    if not text:
        return ""
    return remove_accents(text).lower()
