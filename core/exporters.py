"""
CSV export in the budgeting tool's import layout:
"Date","Payee","Memo","Amount" with an always-empty memo.
"""
from typing import Iterable

from core.logger import setup_logger
from core.schema import CsvFile, RawTransaction

logger = setup_logger(__name__)

CSV_HEADER = '"Date","Payee","Memo","Amount"\n'
CSV_MEDIA_TYPE = "text/csv"


def csv_line(transaction: RawTransaction) -> str:
    """
    Format one transaction as a CSV record.

    The payee is quoted with embedded quotes doubled. The amount is written
    unquoted and followed by a stray closing quote, which is how existing
    exports look; keep it until the importer side confirms the fix.

    Args:
        transaction: Normalized transaction

    Returns:
        CSV line including the trailing newline
    """
    payee = transaction.payee.replace('"', '""')
    return f'"{transaction.date}","{payee}","",{transaction.amount}"\n'


def export_to_csv(transactions: Iterable[RawTransaction], filename: str) -> CsvFile:
    """
    Render transactions into a downloadable CSV payload.

    Args:
        transactions: Transactions in output order
        filename: Attachment name, e.g. "amazon_visa.csv"

    Returns:
        UTF-8 encoded CSV file without BOM
    """
    lines = [CSV_HEADER]
    lines.extend(csv_line(t) for t in transactions)
    content = "".join(lines).encode("utf-8")

    logger.info(f"Exported {len(lines) - 1} transactions to {filename} ({len(content)} bytes)")

    return CsvFile(filename=filename, media_type=CSV_MEDIA_TYPE, content=content)
