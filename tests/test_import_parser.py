"""
Tests for bulk student upload parsing
"""

import io

import pytest
from openpyxl import Workbook

from careernest.errors import ValidationFailed
from careernest.services.import_parser import StudentImportParser


def xlsx_bytes(rows):
    workbook = Workbook()
    sheet = workbook.active
    for row in rows:
        sheet.append(row)
    buffer = io.BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


class TestCsv:

    def test_basic_rows(self):
        content = (
            "Name,Email,Roll Number,Course,Year\n"
            "Asha Rao,Asha@Example.com,CS001,B.Tech,2\n"
            "Ben Li,ben@example.com,CS002,B.Tech,3rd Year\n"
        ).encode("utf-8")
        rows = StudentImportParser.parse("students.csv", content)
        assert rows == [
            {"row": 2, "name": "Asha Rao", "email": "asha@example.com", "roll_number": "CS001",
             "course": "B.Tech", "year": "2nd Year"},
            {"row": 3, "name": "Ben Li", "email": "ben@example.com", "roll_number": "CS002",
             "course": "B.Tech", "year": "3rd Year"},
        ]

    def test_byte_order_mark_and_blank_lines(self):
        content = "\ufeffStudent Name,Email Address\nAsha,asha@example.com\n,\n\nBen,ben@example.com\n".encode("utf-8")
        rows = StudentImportParser.parse_csv(content)
        assert [r["name"] for r in rows] == ["Asha", "Ben"]
        assert [r["row"] for r in rows] == [2, 5]

    def test_username_column_is_not_the_name(self):
        content = b"Username,Full Name,Email\nasha1,Asha Rao,asha@example.com\n"
        rows = StudentImportParser.parse_csv(content)
        assert rows[0]["name"] == "Asha Rao"

    def test_exact_header_wins(self):
        content = b"Course Name,Name,Email\nB.Tech,Asha,asha@example.com\n"
        rows = StudentImportParser.parse_csv(content)
        assert rows[0]["name"] == "Asha"

    def test_latin1_fallback(self):
        content = "Name,Email\nJos\xe9,jose@example.com\n".encode("latin-1")
        assert StudentImportParser.parse_csv(content)[0]["name"] == "Jos\xe9"

    def test_missing_required_column(self):
        with pytest.raises(ValidationFailed) as exc:
            StudentImportParser.parse_csv(b"Name,Roll\nAsha,1\n")
        assert "email" in exc.value.message

    def test_empty_file(self):
        with pytest.raises(ValidationFailed):
            StudentImportParser.parse_csv(b"")

    def test_headers_only(self):
        with pytest.raises(ValidationFailed):
            StudentImportParser.parse_csv(b"Name,Email\n")


class TestXlsx:

    def test_rows(self):
        content = xlsx_bytes([
            ["Name", "Email", "Roll No", "Year"],
            ["Asha", "asha@example.com", 101, 1],
            [None, None, None, None],
            ["Ben", "BEN@example.com", "CS-2", "fourth"],
        ])
        rows = StudentImportParser.parse("upload.XLSX", content)
        assert rows[0] == {"row": 2, "name": "Asha", "email": "asha@example.com", "roll_number": "101", "year": "1st Year"}
        assert rows[1]["row"] == 4
        assert rows[1]["email"] == "ben@example.com"
        assert rows[1]["year"] == "4th Year"

    def test_corrupt_workbook(self):
        with pytest.raises(ValidationFailed):
            StudentImportParser.parse_xlsx(b"not a workbook")


def test_unsupported_extension():
    with pytest.raises(ValidationFailed):
        StudentImportParser.parse("students.xls", b"")


@pytest.mark.parametrize("value,expected", [
    ("1", "1st Year"),
    ("2nd year", "2nd Year"),
    ("Third", "3rd Year"),
    ("Final", "Final"),
    ("", ""),
    (None, None),
])
def test_normalize_year(value, expected):
    assert StudentImportParser.normalize_year(value) == expected
