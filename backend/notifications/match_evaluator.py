"""
Matching logic between a publication and a subscriber's preferences.

Every comparison runs on accent-free, lowercased text. Dimensions are checked
in a fixed order (keyword, client name, lawyer name, decision type) and that
order is the order the matched fields are shown to the subscriber.
"""

import re

from models import MatchResult, Publication, SubscriberPreferences
from shared.text import normalize_for_matching

WORD_PATTERN = re.compile(r"\b\w+\b")


def extract_keywords(body_text: str) -> set[str]:
    """Word tokens of the publication body, normalized for matching."""
    return set(WORD_PATTERN.findall(normalize_for_matching(body_text)))


def build_name_pool(publication: Publication) -> list[str]:
    """Normalized names of every party and every lawyer in the decision."""
    return [normalize_for_matching(name) for name in publication.names()]


def evaluate(
    publication: Publication,
    preferences: SubscriberPreferences,
    keyword_pool: set[str] | None = None,
    name_pool: list[str] | None = None,
) -> MatchResult:
    """
    Check which of a subscriber's preferences a publication satisfies.

    Keyword, client-name and lawyer-name matches are OR-ed. A decision-type
    filter, once the subscriber sets one, must also be satisfied: a publication
    of a different (or unknown) type never matches, whatever else it contains.

    Args:
        publication: The stored publication
        preferences: One subscriber's preferences
        keyword_pool: Precomputed extract_keywords() result, reused across subscribers
        name_pool: Precomputed build_name_pool() result, reused across subscribers

    Returns:
        MatchResult listing at most one entry per dimension
    """
    if not preferences.has_any_preference():
        return MatchResult()

    if keyword_pool is None:
        keyword_pool = extract_keywords(publication.body_text)
    if name_pool is None:
        name_pool = build_name_pool(publication)

    matched_fields: list[str] = []

    keyword = next((k for k in preferences.keywords if k in keyword_pool), None)
    if keyword:
        matched_fields.append(f'Keyword: "{keyword}"')

    client_name = _first_name_match(preferences.client_names, name_pool)
    if client_name:
        matched_fields.append(f'Client Name: "{client_name}"')

    lawyer_name = _first_name_match(preferences.lawyer_names, name_pool)
    if lawyer_name:
        matched_fields.append(f'Lawyer Name: "{lawyer_name}"')

    decision_type_failed = False
    if preferences.decision_types:
        decision_type = _decision_type_match(
            preferences.decision_types, publication.decision.decision_type_name
        )
        if decision_type:
            matched_fields.append(f'Decision Type: "{decision_type.upper()}"')
        else:
            decision_type_failed = True

    return MatchResult(
        matched_fields=matched_fields, decision_type_failed=decision_type_failed
    )


def _first_name_match(wanted: list[str], name_pool: list[str]) -> str | None:
    # Substring match: "joao silva" matches "joao silva neto" but not "joao da silva"
    for name in wanted:
        if any(name in candidate for candidate in name_pool):
            return name
    return None


def _decision_type_match(wanted: list[str], decision_type_name: str | None) -> str | None:
    if not decision_type_name:
        return None
    publication_type = normalize_for_matching(decision_type_name)
    return next((t for t in wanted if t in publication_type), None)
