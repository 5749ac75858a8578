"""Pydantic models for legal publication records."""

import json
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator

from models.types import PublicationNumber, RawRecord
from shared.errors import PublicationValidationError


class Lawyer(BaseModel):
    """A lawyer representing a party."""

    name: str | None = None
    license_number: str | None = None
    state_acronym: str | None = None


class Party(BaseModel):
    """A party to the decision and its lawyers."""

    name: str | None = None
    lawyers: list[Lawyer] = Field(default_factory=list)


class Decision(BaseModel):
    """The structured part of a decision used for matching."""

    decision_type_name: str | None = None
    court_acronym: str | None = None
    parties: list[Party] = Field(default_factory=list)


class Publication(BaseModel):
    """A legal-decision record discovered on the publication portal."""

    id: int
    publication_number: PublicationNumber
    publication_date: str | None = None
    body_text: str = ""
    decision: Decision = Field(default_factory=Decision)
    source: dict[str, Any] = Field(default_factory=dict)

    @field_validator("body_text", mode="before")
    @classmethod
    def _none_body_is_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("publication_date", mode="before")
    @classmethod
    def _strip_date(cls, value: Any) -> Any:
        # Only the date is trimmed; body_text is stored exactly as published
        return value.strip() if isinstance(value, str) else value

    @classmethod
    def from_portal_payload(cls, item: RawRecord) -> "Publication":
        """
        Decode one item of the portal's search response.

        The portal uses Portuguese keys:
            numeroPublicacao, dataPublicacao, textoPublicacao, id,
            decisao.tipoDecisao.nome, decisao.usuario.instancia.tribunal.sigla,
            decisao.partes[].nome, decisao.partes[].advogados[].{nome, numero, uf.sigla},
            fontePublicacao

        Raises:
            PublicationValidationError: numeroPublicacao is missing or the item is malformed
        """
        if not isinstance(item, dict):
            raise PublicationValidationError(f"Expected an object, got {type(item).__name__}")

        number = item.get("numeroPublicacao")
        if number is None or (isinstance(number, str) and not number.strip()):
            raise PublicationValidationError("Missing 'numeroPublicacao'")

        decisao = item.get("decisao") or {}
        if not isinstance(decisao, dict):
            raise PublicationValidationError("'decisao' must be an object")

        try:
            tribunal = (
                ((decisao.get("usuario") or {}).get("instancia") or {}).get("tribunal")
                or {}
            )
            court = tribunal.get("sigla") or None
            decision_type = (decisao.get("tipoDecisao") or {}).get("nome") or None
            parties = _portal_parties(decisao.get("partes") or [])
        except (AttributeError, TypeError) as e:
            raise PublicationValidationError(f"Malformed 'decisao': {e}") from e

        return cls._validate(
            {
                "id": item.get("id", number),
                "publication_number": number,
                "publication_date": item.get("dataPublicacao"),
                "body_text": item.get("textoPublicacao"),
                "decision": {
                    "decision_type_name": decision_type,
                    "court_acronym": court,
                    "parties": parties,
                },
                "source": item.get("fontePublicacao") or {},
            }
        )

    @classmethod
    def from_record(cls, record: RawRecord) -> "Publication":
        """
        Decode a row of the publications table (as stored or as sent by a
        database webhook).

        Raises:
            PublicationValidationError: publication_number is missing or the row is malformed
        """
        if not isinstance(record, dict) or record.get("publication_number") in (None, ""):
            raise PublicationValidationError("Missing 'publication_number'")

        return cls._validate(
            {
                "id": record.get("id", record["publication_number"]),
                "publication_number": record["publication_number"],
                "publication_date": record.get("publication_date"),
                "body_text": record.get("body_text"),
                "decision": {
                    "decision_type_name": record.get("decision_type"),
                    "court_acronym": record.get("court_acronym"),
                    "parties": _load_json(record.get("parties"), []),
                },
                "source": _load_json(record.get("source"), {}),
            }
        )

    def to_record(self) -> RawRecord:
        """
        Row written to the publications table.

        Optional nested fields are always present (as null) so readers can tell
        "absent" apart from "never populated".
        """
        return {
            "id": self.id,
            "publication_number": self.publication_number,
            "publication_date": self.publication_date,
            "body_text": self.body_text,
            "court_acronym": self.decision.court_acronym,
            "decision_type": self.decision.decision_type_name,
            "parties": [party.model_dump() for party in self.decision.parties],
            "decision": self.decision.model_dump(),
            "source": self.source,
        }

    def names(self) -> list[str]:
        """All non-empty party and lawyer names, in document order."""
        names = []
        for party in self.decision.parties:
            if party.name:
                names.append(party.name)
            names.extend(lawyer.name for lawyer in party.lawyers if lawyer.name)
        return names

    @classmethod
    def _validate(cls, data: dict[str, Any]) -> "Publication":
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise PublicationValidationError(str(e)) from e


def _as_text(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return str(value)


def _load_json(value: Any, default: Any) -> Any:
    """JSON columns may arrive already decoded or as strings."""
    if value is None:
        return default
    if isinstance(value, str):
        try:
            return json.loads(value)
        except json.JSONDecodeError as e:
            raise PublicationValidationError(f"Invalid JSON column: {e}") from e
    return value


def _portal_parties(partes: list[dict[str, Any]]) -> list[dict[str, Any]]:
    parties = []
    for parte in partes:
        lawyers = [
            {
                "name": adv.get("nome") or None,
                "license_number": _as_text(adv.get("numero")),
                "state_acronym": (adv.get("uf") or {}).get("sigla") or None,
            }
            for adv in parte.get("advogados") or []
        ]
        parties.append({"name": parte.get("nome") or None, "lawyers": lawyers})
    return parties
