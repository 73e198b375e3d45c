"""
Pydantic models for pipeline inputs and outputs.
"""
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from core.grid import CellAddress, encode_cell


class RawTransaction(BaseModel):
    """Normalized transaction produced from one statement row."""
    model_config = ConfigDict(frozen=True)

    date: str = Field(..., description="MM/DD/YYYY")
    payee: str
    amount: str = Field(..., description="[-]digits.digits without currency")


class HeaderLocation(BaseModel):
    """Header row index and the column of each tracked field."""
    model_config = ConfigDict(frozen=True)

    row: int = Field(..., ge=0)
    date: int = Field(..., ge=0)
    payee: int = Field(..., ge=0)
    amount: int = Field(..., ge=0)


class RowErrorKind(str, Enum):
    EXPECTED_STRING = "ExpectedString"
    INVALID_DATE = "InvalidDate"
    INVALID_AMOUNT = "InvalidAmount"


class RowError(BaseModel):
    """Diagnostic for a row that was dropped from the output."""
    model_config = ConfigDict(frozen=True)

    kind: RowErrorKind
    message: str
    at: Optional[CellAddress] = None

    def __str__(self) -> str:
        if self.at is None:
            return self.message
        return f"{self.message} at {encode_cell(self.at)}"


class CsvFile(BaseModel):
    """CSV payload named for download."""
    model_config = ConfigDict(frozen=True)

    filename: str
    media_type: str = "text/csv"
    content: bytes

    @property
    def text(self) -> str:
        return self.content.decode("utf-8")


class ProcessResult(BaseModel):
    """
    Outcome of converting one statement.

    csv and transactions are both set or both None; None means the whole
    file was rejected and errors holds the reason.
    """
    csv: Optional[CsvFile] = None
    transactions: Optional[List[RawTransaction]] = None
    errors: List[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_joint_presence(self):
        if (self.csv is None) != (self.transactions is None):
            raise ValueError("csv and transactions must be present or absent together")
        return self

    @property
    def ok(self) -> bool:
        return self.csv is not None

    @classmethod
    def failure(cls, message: str) -> "ProcessResult":
        return cls(csv=None, transactions=None, errors=[message])
