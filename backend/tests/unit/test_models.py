"""Unit tests for Pydantic models."""

import unittest

from pydantic import ValidationError

from models import (
    DEFAULT_DISPLAY_NAME,
    DispatchResult,
    DispatchStatus,
    MatchResult,
    Publication,
    SubscriberPreferences,
    SweepSummary,
)
from shared.errors import PublicationValidationError
from tests.fixtures.publication_factory import (
    create_portal_item,
    create_portal_lawyer,
    create_portal_party,
)
from tests.fixtures.subscriber_factory import create_test_preferences_row


class TestPublicationFromPortal(unittest.TestCase):
    """Tests for Publication.from_portal_payload()."""

    def test_decodes_full_item(self):
        """All portal fields mapped to the typed model."""
        item = create_portal_item(
            numero_publicacao=555,
            texto_publicacao="Recurso provido",
            tipo_decisao="Acordao",
            tribunal_sigla="TRE-RJ",
            item_id=9,
        )

        publication = Publication.from_portal_payload(item)

        self.assertEqual(publication.id, 9)
        self.assertEqual(publication.publication_number, 555)
        self.assertEqual(publication.body_text, "Recurso provido")
        self.assertEqual(publication.decision.decision_type_name, "Acordao")
        self.assertEqual(publication.decision.court_acronym, "TRE-RJ")
        self.assertEqual(publication.decision.parties[0].name, "João Silva Neto")
        lawyer = publication.decision.parties[0].lawyers[0]
        self.assertEqual(lawyer.name, "Maria Souza")
        self.assertEqual(lawyer.license_number, "12345")
        self.assertEqual(lawyer.state_acronym, "SP")
        self.assertEqual(publication.source, {"nome": "Mural Eletrônico"})

    def test_body_text_kept_verbatim(self):
        """Leading and trailing whitespace in the decision text is preserved."""
        body = "\n  PODER JUDICIÁRIO\n\nProcesso julgado procedente.  \n"
        publication = Publication.from_portal_payload(
            create_portal_item(texto_publicacao=body, data_publicacao=" 2026-10-15 ")
        )

        self.assertEqual(publication.body_text, body)
        self.assertEqual(publication.to_record()["body_text"], body)
        self.assertEqual(publication.publication_date, "2026-10-15")

    def test_numeric_string_number_coerced(self):
        """numeroPublicacao sent as a string is accepted."""
        publication = Publication.from_portal_payload(create_portal_item(numero_publicacao="42"))

        self.assertEqual(publication.publication_number, 42)

    def test_missing_number_raises(self):
        """Missing numeroPublicacao is a validation error."""
        item = create_portal_item()
        del item["numeroPublicacao"]

        with self.assertRaises(PublicationValidationError):
            Publication.from_portal_payload(item)

    def test_empty_number_raises(self):
        """Blank numeroPublicacao is a validation error."""
        with self.assertRaises(PublicationValidationError):
            Publication.from_portal_payload(create_portal_item(numero_publicacao="  "))

    def test_non_numeric_number_raises(self):
        """Non-numeric numeroPublicacao is a validation error."""
        with self.assertRaises(PublicationValidationError):
            Publication.from_portal_payload(create_portal_item(numero_publicacao="abc"))

    def test_malformed_parties_raise(self):
        """A party that is not an object is reported, not crashed on."""
        item = create_portal_item(partes=["not a party"])

        with self.assertRaises(PublicationValidationError):
            Publication.from_portal_payload(item)

    def test_non_dict_item_raises(self):
        with self.assertRaises(PublicationValidationError):
            Publication.from_portal_payload(["a", "list"])

    def test_missing_optional_fields_are_none(self):
        """Absent decision type, court and names decode to None."""
        item = create_portal_item(
            tipo_decisao=None,
            tribunal_sigla=None,
            partes=[create_portal_party(None, [create_portal_lawyer(None, None, None)])],
        )

        publication = Publication.from_portal_payload(item)

        self.assertIsNone(publication.decision.decision_type_name)
        self.assertIsNone(publication.decision.court_acronym)
        self.assertIsNone(publication.decision.parties[0].name)
        lawyer = publication.decision.parties[0].lawyers[0]
        self.assertIsNone(lawyer.name)
        self.assertIsNone(lawyer.license_number)
        self.assertIsNone(lawyer.state_acronym)

    def test_names_skips_empty(self):
        """names() lists party then lawyer names, skipping empty ones."""
        item = create_portal_item(
            partes=[
                create_portal_party("Empresa X", [create_portal_lawyer("Dr. Paulo")]),
                create_portal_party(None, [create_portal_lawyer(None)]),
                create_portal_party("Fulano", []),
            ]
        )

        publication = Publication.from_portal_payload(item)

        self.assertEqual(publication.names(), ["Empresa X", "Dr. Paulo", "Fulano"])


class TestPublicationRecord(unittest.TestCase):
    """Tests for to_record() / from_record()."""

    def test_to_record_keeps_explicit_nulls(self):
        """Absent nested fields are written as None, never omitted."""
        item = create_portal_item(
            tipo_decisao=None,
            tribunal_sigla=None,
            partes=[create_portal_party(None, [create_portal_lawyer(None, None, None)])],
        )

        record = Publication.from_portal_payload(item).to_record()

        self.assertIn("court_acronym", record)
        self.assertIsNone(record["court_acronym"])
        self.assertIn("decision_type", record)
        self.assertIsNone(record["decision_type"])
        self.assertEqual(
            record["parties"],
            [
                {
                    "name": None,
                    "lawyers": [
                        {"name": None, "license_number": None, "state_acronym": None}
                    ],
                }
            ],
        )

    def test_from_record_reads_stored_row(self):
        """A persisted row decodes back to the same publication."""
        original = Publication.from_portal_payload(create_portal_item(numero_publicacao=77))

        decoded = Publication.from_record(original.to_record())

        self.assertEqual(decoded, original)

    def test_from_record_accepts_json_strings(self):
        """JSON columns delivered as strings are decoded."""
        record = {
            "id": 1,
            "publication_number": 2,
            "body_text": "texto",
            "decision_type": "Sentenca",
            "parties": '[{"name": "Ana", "lawyers": []}]',
            "source": '{"a": 1}',
        }

        publication = Publication.from_record(record)

        self.assertEqual(publication.decision.parties[0].name, "Ana")
        self.assertEqual(publication.source, {"a": 1})

    def test_from_record_missing_number_raises(self):
        with self.assertRaises(PublicationValidationError):
            Publication.from_record({"id": 1, "body_text": "x"})

    def test_from_record_invalid_json_raises(self):
        with self.assertRaises(PublicationValidationError):
            Publication.from_record({"publication_number": 1, "parties": "{not json"})


class TestSubscriberPreferences(unittest.TestCase):
    """Tests for SubscriberPreferences normalization."""

    def test_terms_normalized(self):
        """Terms trimmed, accent-free, lowercased and de-duplicated."""
        prefs = SubscriberPreferences.model_validate(
            create_test_preferences_row(
                keywords=["  Julgado ", "JULGADO", ""],
                client_names=["João Silva"],
                decision_types=["Acórdão"],
            )
        )

        self.assertEqual(prefs.keywords, ["julgado"])
        self.assertEqual(prefs.client_names, ["joao silva"])
        self.assertEqual(prefs.decision_types, ["acordao"])

    def test_missing_dimensions_default_empty(self):
        """Null or absent term lists become empty lists."""
        prefs = SubscriberPreferences.model_validate(
            {"subscriber_id": "u1", "keywords": None, "contact_method": "sms"}
        )

        self.assertEqual(prefs.keywords, [])
        self.assertEqual(prefs.lawyer_names, [])
        self.assertFalse(prefs.has_any_preference())

    def test_default_display_name(self):
        """Greeting falls back to the placeholder name."""
        prefs = SubscriberPreferences.model_validate(
            create_test_preferences_row(display_name=None)
        )

        self.assertEqual(prefs.name_for_greeting, DEFAULT_DISPLAY_NAME)

    def test_contact_method_lowercased(self):
        prefs = SubscriberPreferences.model_validate(
            create_test_preferences_row(contact_method=" EMAIL ")
        )

        self.assertEqual(prefs.contact_method, "email")

    def test_subscriber_id_required(self):
        with self.assertRaises(ValidationError):
            SubscriberPreferences.model_validate({"contact_method": "email"})


class TestResultModels(unittest.TestCase):
    """Tests for MatchResult and SweepSummary."""

    def test_match_found_requires_entries(self):
        self.assertFalse(MatchResult().match_found)
        self.assertTrue(MatchResult(matched_fields=['Keyword: "x"']).match_found)

    def test_decision_type_failure_vetoes_match(self):
        result = MatchResult(matched_fields=['Keyword: "x"'], decision_type_failed=True)

        self.assertFalse(result.match_found)

    def test_sweep_summary_record_counts(self):
        summary = SweepSummary(publication_number=1)

        summary.record(DispatchResult(subscriber_id="a", status=DispatchStatus.SENT))
        summary.record(DispatchResult(subscriber_id="b", status=DispatchStatus.SKIPPED))
        summary.record(DispatchResult(subscriber_id="c", status=DispatchStatus.FAILED))

        self.assertEqual((summary.sent, summary.skipped, summary.failed), (1, 1, 1))
        self.assertEqual(len(summary.results), 3)


if __name__ == "__main__":
    unittest.main()
