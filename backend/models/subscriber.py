"""Pydantic models for subscriber preferences."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from models.types import SubscriberID, TermList
from shared.text import normalize_for_matching

DEFAULT_DISPLAY_NAME = "Usuário"


class SubscriberPreferences(BaseModel):
    """
    What a subscriber wants to be notified about, and how.

    Term lists are normalized on load (trimmed, accent-free, lowercased,
    de-duplicated) so matching can compare them directly. An empty list means
    the dimension imposes no constraint.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    subscriber_id: SubscriberID = Field(..., min_length=1)
    display_name: str | None = None
    keywords: TermList = Field(default_factory=list)
    client_names: TermList = Field(default_factory=list)
    lawyer_names: TermList = Field(default_factory=list)
    decision_types: TermList = Field(default_factory=list)
    contact_method: str = ""
    contact_address: str | None = None
    timezone: str | None = None

    @field_validator(
        "keywords", "client_names", "lawyer_names", "decision_types", mode="before"
    )
    @classmethod
    def _normalize_terms(cls, value: Any) -> list[str]:
        if value is None:
            return []
        if isinstance(value, str):
            value = [value]

        terms: list[str] = []
        for term in value:
            normalized = normalize_for_matching(str(term)).strip()
            if normalized and normalized not in terms:
                terms.append(normalized)
        return terms

    @field_validator("contact_method", mode="before")
    @classmethod
    def _lowercase_method(cls, value: Any) -> str:
        return str(value or "").strip().lower()

    @property
    def name_for_greeting(self) -> str:
        return self.display_name or DEFAULT_DISPLAY_NAME

    def has_any_preference(self) -> bool:
        return bool(
            self.keywords or self.client_names or self.lawyer_names or self.decision_types
        )
