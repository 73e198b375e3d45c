"""
Shared fixtures: in-memory workbook builders and settings isolation.
"""
from io import BytesIO

import pytest
from openpyxl import Workbook

from core.config import reset_settings

SETTINGS_ENV = ["APP_NAME", "HOST", "PORT", "LOG_LEVEL", "CSV_FILENAME", "MAX_UPLOAD_MB"]

HEADER = ["Datum", "Beschreibung", "Betrag"]


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Give every test default settings."""
    for name in SETTINGS_ENV:
        monkeypatch.delenv(name, raising=False)
    reset_settings()
    yield
    reset_settings()


def build_xlsx(rows, hidden=(), sheets=1) -> bytes:
    """
    Build an .xlsx payload.

    Args:
        rows: Row values for the first sheet, starting at A1
        hidden: Zero-based indexes of rows to hide
        sheets: Total number of sheets
    """
    wb = Workbook()
    ws = wb.active
    ws.title = "Umsätze"
    for row in rows:
        ws.append(list(row))
    for idx in hidden:
        ws.row_dimensions[idx + 1].hidden = True
    for n in range(1, sheets):
        wb.create_sheet(f"Sheet{n + 1}")

    buffer = BytesIO()
    wb.save(buffer)
    return buffer.getvalue()


@pytest.fixture
def make_xlsx():
    return build_xlsx


@pytest.fixture
def statement_rows():
    """Typical export: title block, header on row 3, three bookings."""
    return [
        ["Kreditkartenabrechnung"],
        [],
        HEADER,
        ["05.01.2024", "Supermarket", "12,34 €"],
        ["06.01.2024 10:15", 'Café "Zur Post"', "-4,50 €"],
        ["31.01.2024", "Gutschrift", "+100,00 €"],
    ]


@pytest.fixture
def statement_xlsx(statement_rows):
    return build_xlsx(statement_rows)
