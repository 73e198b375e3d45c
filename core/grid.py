"""
Immutable cell grid decoded from a single worksheet.
Cells are a tagged variant so string checks are explicit.
"""
from typing import FrozenSet, Iterator, Literal, Optional, Sequence, Tuple, Union

from openpyxl.utils import get_column_letter
from pydantic import BaseModel, ConfigDict, Field


class StringCell(BaseModel):
    """Cell holding a string value."""
    model_config = ConfigDict(frozen=True)

    tag: Literal["string"] = "string"
    value: str


class OtherCell(BaseModel):
    """Any non-string cell: number, date, boolean, error or empty."""
    model_config = ConfigDict(frozen=True)

    tag: Literal["other"] = "other"
    kind: str = "empty"


CellValue = Union[StringCell, OtherCell]

EMPTY_CELL = OtherCell()


class CellAddress(BaseModel):
    """Zero-based (row, column) coordinate."""
    model_config = ConfigDict(frozen=True)

    row: int = Field(..., ge=0)
    col: int = Field(..., ge=0)


class CellRange(BaseModel):
    """Inclusive rectangular range of a sheet."""
    model_config = ConfigDict(frozen=True)

    min_row: int = Field(..., ge=0)
    max_row: int = Field(..., ge=0)
    min_col: int = Field(..., ge=0)
    max_col: int = Field(..., ge=0)

    def rows(self) -> range:
        return range(self.min_row, self.max_row + 1)

    def cols(self) -> range:
        return range(self.min_col, self.max_col + 1)


def encode_cell(address: CellAddress) -> str:
    """
    Format a zero-based address the way a spreadsheet user sees it.

    Args:
        address: Cell coordinate

    Returns:
        A1-style reference, e.g. (6, 2) -> "C7"
    """
    return f"{get_column_letter(address.col + 1)}{address.row + 1}"


class Grid:
    """
    Dense, read-only cell matrix of one worksheet.

    Rows are addressed by absolute sheet coordinates; anything outside the
    stored cells reads as an empty cell.
    """

    def __init__(
        self,
        rows: Sequence[Sequence[CellValue]],
        cell_range: Optional[CellRange],
        hidden_rows: Sequence[int] = ()
    ):
        self._rows: Tuple[Tuple[CellValue, ...], ...] = tuple(tuple(r) for r in rows)
        self._range = cell_range
        self._hidden: FrozenSet[int] = frozenset(hidden_rows)

    @property
    def range(self) -> Optional[CellRange]:
        return self._range

    @property
    def hidden_rows(self) -> FrozenSet[int]:
        return self._hidden

    def cell(self, address: CellAddress) -> CellValue:
        if address.row >= len(self._rows):
            return EMPTY_CELL
        row = self._rows[address.row]
        if address.col >= len(row):
            return EMPTY_CELL
        return row[address.col]

    def is_hidden(self, row: int) -> bool:
        return row in self._hidden

    def iter_row(self, row: int) -> Iterator[Tuple[int, CellValue]]:
        """Yield (column, cell) pairs of a row across the grid range."""
        if self._range is None:
            return
        for col in self._range.cols():
            yield col, self.cell(CellAddress(row=row, col=col))

    @classmethod
    def from_values(
        cls,
        values: Sequence[Sequence[object]],
        hidden_rows: Sequence[int] = ()
    ) -> "Grid":
        """
        Build a grid from plain Python values starting at A1.

        Strings become string cells, None becomes an empty cell and any
        other value an "other" cell named after its Python type.
        """
        rows = [
            [
                StringCell(value=v) if isinstance(v, str)
                else EMPTY_CELL if v is None
                else OtherCell(kind=type(v).__name__)
                for v in row
            ]
            for row in values
        ]
        width = max((len(r) for r in rows), default=0)
        if not rows or width == 0:
            return cls(rows, None, hidden_rows)
        cell_range = CellRange(min_row=0, max_row=len(rows) - 1, min_col=0, max_col=width - 1)
        return cls(rows, cell_range, hidden_rows)
