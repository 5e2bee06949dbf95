"""
BenriQR - MeCard Tests
========================
Unit tests for the record model and its encoding.
"""

import dataclasses
import itertools

import pytest

from benri_qr.domain.encodable import QREncodable
from benri_qr.domain.models import MeCard
from benri_qr.errors import SourceError


class TestEncode:
    """Test MeCard.encode"""

    def test_name_only(self):
        assert MeCard("John").encode() == "MECARD:N:John;"

    def test_name_and_tel(self, john_card):
        assert john_card.encode() == "MECARD:N:John;TEL:1234-5678;"

    def test_email_added(self, john_card):
        card = dataclasses.replace(john_card, email="john@example.com")
        assert card.encode() == "MECARD:N:John;TEL:1234-5678;EMAIL:john@example.com;"

    def test_all_fields_in_canonical_order(self, full_card):
        assert full_card.encode() == (
            "MECARD:N:Yamada Taro;"
            "SOUND:ヤマダタロウ;"
            "TEL:03-1234-5678;"
            "EMAIL:taro@example.com;"
            "NOTE:Sales;"
            "BDAY:19900102;"
            "ADR:Tokyo;"
            "URL:https://example.com;"
            "NICKNAME:Taro;"
        )

    def test_field_order_invariance(self):
        """Keyword order at construction never changes the output"""
        fields = [
            ("nickname", "Nick"),
            ("url", "https://example.com"),
            ("tel", "000"),
            ("reading", "Jon"),
        ]
        outputs = {
            MeCard(name="John", **dict(order)).encode()
            for order in itertools.permutations(fields)
        }
        assert outputs == {
            "MECARD:N:John;SOUND:Jon;TEL:000;URL:https://example.com;NICKNAME:Nick;"
        }

    def test_from_dict_key_order_invariance(self):
        a = MeCard.from_dict({"Name": "A", "URL": "u", "TEL": "t", "Memo": "m"})
        b = MeCard.from_dict({"Memo": "m", "TEL": "t", "Name": "A", "URL": "u"})
        assert a.encode() == b.encode() == "MECARD:N:A;TEL:t;NOTE:m;URL:u;"

    def test_absent_fields_have_no_placeholder(self):
        encoded = MeCard("John", url="https://example.com").encode()
        assert "TEL" not in encoded
        assert "SOUND" not in encoded

    def test_empty_string_is_absent(self):
        card = MeCard("John", tel="", email="john@example.com")
        assert card.tel is None
        assert card.encode() == "MECARD:N:John;EMAIL:john@example.com;"

    def test_deterministic(self, full_card):
        assert full_card.encode() == full_card.encode()
        assert MeCard(**dataclasses.asdict(full_card)).encode() == full_card.encode()

    def test_no_newlines(self, full_card):
        assert "\n" not in full_card.encode()
        assert "\r" not in full_card.encode()

    def test_delimiters_are_not_escaped(self):
        """Values go in verbatim, delimiters included"""
        assert MeCard("A;B", memo="x:y").encode() == "MECARD:N:A;B;NOTE:x:y;"


class TestMeCard:
    """Test MeCard model"""

    def test_is_encodable(self, john_card):
        assert isinstance(john_card, QREncodable)

    def test_display_is_name(self, john_card):
        assert john_card.display() == "John"

    def test_immutable(self, john_card):
        with pytest.raises(dataclasses.FrozenInstanceError):
            john_card.tel = "0000"

    def test_defaults_absent(self):
        card = MeCard("John")
        assert card.reading is None
        assert card.nickname is None

    def test_equality_by_value(self):
        assert MeCard("John", tel="1") == MeCard("John", tel="1")

    def test_from_dict(self):
        card = MeCard.from_dict({
            "Name": "John",
            "TEL": "1234-5678",
            "EMail": "john@example.com",
            "Birthday": None,
            "Unknown": "ignored",
        })
        assert card == MeCard("John", tel="1234-5678", email="john@example.com")

    def test_from_dict_missing_name(self):
        with pytest.raises(SourceError) as exc_info:
            MeCard.from_dict({"TEL": "1234"})
        assert exc_info.value.details["field"] == "Name"
        assert exc_info.value.stage == "load"

    def test_from_dict_null_name(self):
        with pytest.raises(SourceError):
            MeCard.from_dict({"Name": None})

    def test_from_dict_non_string(self):
        with pytest.raises(SourceError) as exc_info:
            MeCard.from_dict({"Name": "John", "TEL": 1234})
        assert exc_info.value.details["field"] == "TEL"

    def test_field_names_are_case_sensitive(self):
        card = MeCard.from_dict({"Name": "John", "tel": "1234", "Email": "x"})
        assert card.tel is None
        assert card.email is None

    def test_to_dict(self, john_card):
        data = john_card.to_dict()
        assert data["Name"] == "John"
        assert data["TEL"] == "1234-5678"
        assert data["EMail"] is None
        assert MeCard.from_dict(data) == john_card
