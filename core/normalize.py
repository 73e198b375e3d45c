"""
Field normalization for German bank statement exports.
Dates DD.MM.YYYY become MM/DD/YYYY, amounts "1234,56 €" become "1234.56".
"""
import re
from typing import Optional

from core.exceptions import InvalidAmountError, InvalidDateError
from core.grid import CellAddress

# Day, month, year; anything after the year (e.g. a time) is ignored
DATE_PATTERN = re.compile(r"([0-9]{2})\.([0-9]{2})\.([0-9]{4})")

# Optional sign, euros, comma, two cent digits, optional whitespace, euro sign.
# \s also covers the non-breaking space spreadsheet tools put before "€".
AMOUNT_PATTERN = re.compile(r"(?:(-)?|\+)([0-9]+),([0-9]{2})\s*€")


def transform_date(raw: str, at: Optional[CellAddress] = None) -> str:
    """
    Convert a DD.MM.YYYY date prefix to MM/DD/YYYY.

    No calendar validation is done: "32.13.2024" becomes "13/32/2024".

    Args:
        raw: Cell text
        at: Cell address for error reporting

    Returns:
        Normalized date string

    Raises:
        InvalidDateError: If raw does not start with DD.MM.YYYY
    """
    match = DATE_PATTERN.match(raw)
    if match is None:
        raise InvalidDateError(at)
    day, month, year = match.groups()
    return f"{month}/{day}/{year}"


def transform_amount(raw: str, at: Optional[CellAddress] = None) -> str:
    """
    Convert a euro amount such as "-1234,56 €" to "-1234.56".

    A leading "+" is accepted and dropped.

    Args:
        raw: Cell text
        at: Cell address for error reporting

    Returns:
        Normalized amount string

    Raises:
        InvalidAmountError: If raw is not a comma-decimal euro amount
    """
    match = AMOUNT_PATTERN.fullmatch(raw)
    if match is None:
        raise InvalidAmountError(at)
    minus, euros, cents = match.groups()
    return f"{minus or ''}{euros}.{cents}"
