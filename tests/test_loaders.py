"""
BenriQR - Loader Tests
========================
Unit tests for JSON and workbook loading.
"""

import json
from datetime import datetime

import pytest

from benri_qr.domain.models import MeCard
from benri_qr.errors import SourceError
from benri_qr.io.loaders import cell_to_text, load_excel, load_json


class TestLoadJson:
    """Test load_json"""

    def test_load(self, make_json):
        path = make_json(json.dumps({
            "Name": "John",
            "TEL": "1234-5678",
            "EMail": "john@example.com",
            "Memo": None,
        }))
        card = load_json(path)
        assert card == MeCard("John", tel="1234-5678", email="john@example.com")

    def test_classmethod(self, make_json):
        path = make_json('{"Name": "John"}')
        assert MeCard.from_json(path) == MeCard("John")

    def test_utf8(self, make_json):
        path = make_json(json.dumps({"Name": "山田太郎", "Reading": "ヤマダタロウ"}, ensure_ascii=False))
        assert load_json(path).encode() == "MECARD:N:山田太郎;SOUND:ヤマダタロウ;"

    def test_missing_file(self, temp_data_dir):
        with pytest.raises(SourceError) as exc_info:
            load_json(temp_data_dir / "missing.json")
        assert exc_info.value.code == "SOURCE_UNREADABLE"

    def test_invalid_json(self, make_json):
        with pytest.raises(SourceError) as exc_info:
            load_json(make_json('{"Name": '))
        assert exc_info.value.code == "INVALID_JSON"

    def test_not_an_object(self, make_json):
        with pytest.raises(SourceError):
            load_json(make_json('[{"Name": "John"}]'))

    def test_missing_name(self, make_json):
        with pytest.raises(SourceError) as exc_info:
            load_json(make_json('{"TEL": "1234"}'))
        assert exc_info.value.code == "MISSING_FIELD"


class TestLoadExcel:
    """Test load_excel"""

    def test_rows_in_order(self, make_workbook):
        path = make_workbook([
            ["Name", "TEL", "EMail"],
            ["Carol", "333", None],
            ["Alice", None, "alice@example.com"],
            ["Bob", "222", None],
        ])
        cards = load_excel(path)
        assert [c.name for c in cards] == ["Carol", "Alice", "Bob"]
        assert cards[1] == MeCard("Alice", email="alice@example.com")
        assert cards[0].email is None

    def test_unknown_columns_ignored(self, make_workbook):
        path = make_workbook([
            ["Department", "Name", "Nickname", "name"],
            ["Sales", "John", "Johnny", "other"],
        ])
        assert load_excel(path) == [MeCard("John", nickname="Johnny")]

    def test_cell_types(self, make_workbook):
        path = make_workbook([
            ["Name", "TEL", "Birthday", "Memo"],
            ["John", 12345678, datetime(1990, 1, 2), 1.5],
        ])
        card = load_excel(path)[0]
        assert card.tel == "12345678"
        assert card.birthday == "1990-01-02"
        assert card.memo == "1.5"

    def test_blank_rows_skipped(self, make_workbook):
        path = make_workbook([
            ["Name", "TEL"],
            ["Alice", "1"],
            [None, None],
            ["Bob", "2"],
        ])
        assert [c.name for c in load_excel(path)] == ["Alice", "Bob"]

    def test_header_only(self, make_workbook):
        assert load_excel(make_workbook([["Name", "TEL"]])) == []

    def test_first_sheet_only(self, make_workbook):
        path = make_workbook(
            [["Name"], ["Alice"]],
            extra_sheets=[("Other", [["Name"], ["Mallory"]])],
        )
        assert [c.name for c in load_excel(path)] == ["Alice"]

    def test_missing_name_column(self, make_workbook):
        path = make_workbook([["TEL", "EMail"], ["1234", "a@example.com"]])
        with pytest.raises(SourceError) as exc_info:
            load_excel(path)
        assert exc_info.value.code == "INVALID_HEADER"
        assert exc_info.value.details["missing"] == ["Name"]

    def test_duplicate_header(self, make_workbook):
        path = make_workbook([
            ["Name", "TEL", "Name"],
            ["Alice", "1", "Alicia"],
        ])
        with pytest.raises(SourceError) as exc_info:
            load_excel(path)
        assert exc_info.value.code == "INVALID_HEADER"
        assert exc_info.value.details["duplicate"] == "Name"
        assert exc_info.value.details["column"] == 3

    def test_row_without_name(self, make_workbook):
        path = make_workbook([
            ["Name", "TEL"],
            ["Alice", "1"],
            [None, "2"],
        ])
        with pytest.raises(SourceError) as exc_info:
            load_excel(path)
        assert exc_info.value.details["row"] == 3
        assert "Row 3" in exc_info.value.message

    def test_bytes_source(self, make_workbook):
        path = make_workbook([["Name", "URL"], ["John", "https://example.com"]])
        cards = load_excel(path.read_bytes())
        assert cards == [MeCard("John", url="https://example.com")]

    def test_file_object_source(self, make_workbook):
        path = make_workbook([["Name"], ["John"]])
        with open(path, "rb") as f:
            assert MeCard.from_excel(f) == [MeCard("John")]

    def test_not_a_workbook(self):
        with pytest.raises(SourceError) as exc_info:
            load_excel(b"not a zip file")
        assert exc_info.value.code == "INVALID_WORKBOOK"

    def test_missing_file(self, temp_data_dir):
        with pytest.raises(SourceError):
            load_excel(temp_data_dir / "missing.xlsx")


class TestCellToText:
    """Test cell_to_text"""

    @pytest.mark.parametrize("value,expected", [
        (None, None),
        ("", None),
        ("   ", None),
        (" Tokyo ", "Tokyo"),
        (42, "42"),
        (42.0, "42"),
        (0.25, "0.25"),
        (datetime(2000, 2, 29), "2000-02-29"),
        (datetime(2000, 2, 29, 12, 30), "2000-02-29T12:30:00"),
    ])
    def test_conversion(self, value, expected):
        assert cell_to_text(value) == expected
