"""
Custom exceptions for better error handling.

Sheet-level errors invalidate a whole statement; cell errors are confined
to a single row and carry the offending cell address.
"""
from typing import Any, Dict, Iterable, Optional

from core.grid import CellAddress
from core.schema import RowError, RowErrorKind


class StatementConverterException(Exception):
    """Base exception for all statement conversion errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        """
        Initialize exception.

        Args:
            message: Error message
            details: Additional error details
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


class SheetError(StatementConverterException):
    """Raised when the workbook as a whole cannot be converted."""
    pass


class UnreadableFileError(SheetError):
    """Raised when the payload is not a readable spreadsheet."""
    pass


class MultipleSheetsError(SheetError):
    """Raised when the workbook does not have exactly one sheet."""

    def __init__(self, sheet_count: int):
        super().__init__("Must have exactly one sheet.", details={"sheet_count": sheet_count})


class NoRangeError(SheetError):
    """Raised when the sheet has no addressable range."""

    def __init__(self, sheet_name: Optional[str] = None):
        super().__init__("Sheet has no range.", details={"sheet_name": sheet_name})


class HeaderNotFoundError(SheetError):
    """Raised when no row carries all expected column labels."""

    def __init__(self, labels: Optional[Iterable[str]] = None):
        super().__init__(
            "Failed to find header row.",
            details={"labels": sorted(labels)} if labels else None
        )


class CellError(StatementConverterException):
    """
    Raised when a single cell of a data row is unusable.

    The string form includes the cell reference, e.g. "Invalid amount at C7".
    """
    kind: RowErrorKind
    reason: str

    def __init__(self, at: Optional[CellAddress] = None):
        self.at = at
        super().__init__(str(self.to_row_error()))

    def to_row_error(self) -> RowError:
        return RowError(kind=self.kind, message=self.reason, at=self.at)


class ExpectedStringError(CellError):
    kind = RowErrorKind.EXPECTED_STRING
    reason = "Expected string"


class InvalidDateError(CellError):
    kind = RowErrorKind.INVALID_DATE
    reason = "Invalid date"


class InvalidAmountError(CellError):
    kind = RowErrorKind.INVALID_AMOUNT
    reason = "Invalid amount"


class DataNotFoundError(StatementConverterException):
    """Raised when required data is not found."""
    pass


class ConfigurationError(StatementConverterException):
    """Raised when configuration is invalid."""
    pass
