"""
End-to-end tests for the conversion pipeline.
"""
import asyncio

import pytest

from core.exceptions import DataNotFoundError
from core.schema import ProcessResult, RawTransaction
from services.statement_service import StatementService

HEADER = ["Datum", "Beschreibung", "Betrag"]


@pytest.fixture
def service():
    return StatementService()


def test_end_to_end(service, make_xlsx):
    content = make_xlsx([
        ["Kreditkartenabrechnung"],
        [],
        HEADER,
        ["05.01.2024", "Supermarket", "12,34 €"],
    ])
    result = service.process(content)

    assert result.ok
    assert result.errors == []
    assert result.transactions == [
        RawTransaction(date="01/05/2024", payee="Supermarket", amount="12.34")
    ]
    assert result.csv.filename == "amazon_visa.csv"
    assert result.csv.media_type == "text/csv"
    assert result.csv.text == (
        '"Date","Payee","Memo","Amount"\n'
        '"01/05/2024","Supermarket","",12.34"\n'
    )


def test_valid_rows_produce_no_errors(service, statement_xlsx, statement_rows):
    result = service.process(statement_xlsx)

    assert result.errors == []
    assert len(result.transactions) == len(statement_rows) - 3
    assert [t.amount for t in result.transactions] == ["12.34", "-4.50", "100.00"]
    assert result.transactions[1].payee == 'Café "Zur Post"'
    assert '"Café ""Zur Post"""' in result.csv.text


def test_row_errors_are_collected(service, make_xlsx):
    content = make_xlsx([
        HEADER,
        ["05.01.2024", "Supermarket", "12,34 €"],
        ["05.01.2024", "Wrong separator", "12.34 €"],
        [45296, "Date as number", "1,00 €"],
        ["07.01.2024", "Bakery", "-2,10 €"],
    ])
    result = service.process(content)

    assert result.ok
    assert [t.payee for t in result.transactions] == ["Supermarket", "Bakery"]
    assert result.errors == ["Invalid amount at C3", "Expected string at A4"]
    assert result.csv.text.count("\n") == 3


def test_hidden_rows_are_skipped(service, make_xlsx):
    content = make_xlsx(
        [
            HEADER,
            ["05.01.2024", "First", "1,00 €"],
            ["Zwischensumme", None, 99],
            ["07.01.2024", "Third", "3,00 €"],
        ],
        hidden=[2],
    )
    result = service.process(content)

    assert result.errors == []
    assert [t.payee for t in result.transactions] == ["First", "Third"]


def test_header_only_gives_empty_csv(service, make_xlsx):
    result = service.process(make_xlsx([HEADER]))

    assert result.ok
    assert result.transactions == []
    assert result.errors == []
    assert result.csv.content == b'"Date","Payee","Memo","Amount"\n'


@pytest.mark.parametrize(
    "kwargs, message",
    [
        ({"rows": [HEADER, ["05.01.2024", "x", "1,00 €"]], "sheets": 2}, "Must have exactly one sheet."),
        ({"rows": []}, "Sheet has no range."),
        ({"rows": [["Date", "Payee", "Amount"], ["05.01.2024", "x", "1,00 €"]]}, "Failed to find header row."),
    ],
)
def test_sheet_level_failures(service, make_xlsx, kwargs, message):
    result = service.process(make_xlsx(**kwargs))

    assert not result.ok
    assert result.csv is None
    assert result.transactions is None
    assert result.errors == [message]


def test_unreadable_file(service):
    result = service.process(b"definitely not a spreadsheet")

    assert result.csv is None
    assert result.transactions is None
    assert len(result.errors) == 1
    assert "expected an .xlsx or .xls workbook" in result.errors[0]


def test_unexpected_error_becomes_sheet_failure(service, statement_xlsx, monkeypatch):
    def boom(raw, at=None):
        raise RuntimeError("decoder bug")

    monkeypatch.setattr("core.parsing.transform_amount", boom)
    result = service.process(statement_xlsx)

    assert result == ProcessResult.failure("decoder bug")


def test_process_is_idempotent(service, statement_xlsx):
    first = service.process(statement_xlsx)
    second = service.process(statement_xlsx)

    assert first.csv.content == second.csv.content
    assert first.transactions == second.transactions
    assert first.errors == second.errors


def test_custom_csv_filename(statement_xlsx):
    result = StatementService(csv_filename="visa.csv").process(statement_xlsx)
    assert result.csv.filename == "visa.csv"


def test_configured_csv_filename(monkeypatch, statement_xlsx):
    monkeypatch.setenv("CSV_FILENAME", "card.csv")
    result = StatementService().process(statement_xlsx)
    assert result.csv.filename == "card.csv"


def test_process_async(service, statement_xlsx):
    result = asyncio.run(service.process_async(statement_xlsx))
    assert result == service.process(statement_xlsx)


def test_process_file(service, statement_xlsx, tmp_path):
    path = tmp_path / "statement.xlsx"
    path.write_bytes(statement_xlsx)

    result = service.process_file(str(path))
    assert len(result.transactions) == 3


def test_process_file_missing(service, tmp_path):
    with pytest.raises(DataNotFoundError):
        service.process_file(str(tmp_path / "missing.xlsx"))


def test_result_requires_joint_presence():
    with pytest.raises(ValueError):
        ProcessResult(csv=None, transactions=[], errors=[])
