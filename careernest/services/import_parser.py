"""
Student Import Parser
Reads bulk student uploads (CSV or XLSX) into normalized rows
"""

import csv
import io
from typing import Dict, Iterable, List, Optional

from openpyxl import load_workbook

from careernest.errors import ValidationFailed


class StudentImportParser:
    """Utility for parsing bulk student uploads"""

    # Column keyword -> output field; headers match when they contain the keyword
    COLUMN_KEYWORDS = {
        "name": "name",
        "email": "email",
        "roll": "roll_number",
        "course": "course",
        "year": "year",
    }
    REQUIRED_FIELDS = ("name", "email")

    YEAR_ALIASES = {
        "1": "1st Year", "1st": "1st Year", "first": "1st Year",
        "2": "2nd Year", "2nd": "2nd Year", "second": "2nd Year",
        "3": "3rd Year", "3rd": "3rd Year", "third": "3rd Year",
        "4": "4th Year", "4th": "4th Year", "fourth": "4th Year",
    }

    SUPPORTED_EXTENSIONS = (".csv", ".xlsx")

    @staticmethod
    def _normalize_header(header) -> str:
        if header is None:
            return ""
        return str(header).strip().lstrip("\ufeff").lower()

    @classmethod
    def _map_headers(cls, headers: List[str]) -> Dict[str, int]:
        """Map output fields to column positions; an exact match beats a substring match"""
        normalized = [cls._normalize_header(h) for h in headers]
        mapped = {}
        for keyword, field in cls.COLUMN_KEYWORDS.items():
            if keyword in normalized:
                mapped[field] = normalized.index(keyword)
                continue
            for index, header in enumerate(normalized):
                if keyword in header and not (keyword == "name" and "user" in header):
                    mapped[field] = index
                    break
        return mapped

    @classmethod
    def normalize_year(cls, value: Optional[str]) -> Optional[str]:
        if not value:
            return value
        key = value.lower().replace("year", "").replace(" ", "")
        return cls.YEAR_ALIASES.get(key, value)

    @staticmethod
    def _cell(value) -> str:
        if value is None:
            return ""
        if isinstance(value, float) and value.is_integer():
            value = int(value)
        return str(value).strip()

    @classmethod
    def _rows_from_table(cls, table: Iterable[Iterable]) -> List[dict]:
        table = iter(table)
        headers = next(table, None)
        if not headers or not any(cls._normalize_header(h) for h in headers):
            raise ValidationFailed("File is empty or has no headers")

        header_map = cls._map_headers(list(headers))
        missing = [field for field in cls.REQUIRED_FIELDS if field not in header_map]
        if missing:
            raise ValidationFailed(f"Missing required columns: {', '.join(missing)}")

        rows = []
        # Row numbers are 1-based and count the header line
        for line_number, values in enumerate(table, start=2):
            values = list(values or [])
            if not any(cls._cell(v) for v in values):
                continue
            record = {"row": line_number}
            for field, index in header_map.items():
                record[field] = cls._cell(values[index]) if index < len(values) else ""
            record["email"] = record["email"].lower()
            record["year"] = cls.normalize_year(record.get("year"))
            rows.append(record)

        if not rows:
            raise ValidationFailed("No data rows found in file")
        return rows

    @classmethod
    def parse_csv(cls, file_content: bytes) -> List[dict]:
        try:
            text = file_content.decode("utf-8-sig")
        except UnicodeDecodeError:
            text = file_content.decode("latin-1")
        return cls._rows_from_table(csv.reader(io.StringIO(text)))

    @classmethod
    def parse_xlsx(cls, file_content: bytes) -> List[dict]:
        try:
            workbook = load_workbook(io.BytesIO(file_content), read_only=True, data_only=True)
        except Exception as e:
            raise ValidationFailed(f"Could not read Excel file: {e}")
        try:
            sheet = workbook.worksheets[0]
            return cls._rows_from_table(sheet.iter_rows(values_only=True))
        finally:
            workbook.close()

    @classmethod
    def parse(cls, filename: str, file_content: bytes) -> List[dict]:
        """Dispatch on the file extension"""
        name = (filename or "").lower()
        if name.endswith(".csv"):
            return cls.parse_csv(file_content)
        if name.endswith(".xlsx"):
            return cls.parse_xlsx(file_content)
        raise ValidationFailed("Unsupported file format. Please upload CSV (.csv) or Excel (.xlsx) files")
