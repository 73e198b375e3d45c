"""
Statement grid parsing.
Finds the header row anywhere in the sheet and turns the rows below it
into normalized transactions, collecting per-row errors.
"""
from typing import Dict, Iterator, List

from core.exceptions import CellError, ExpectedStringError, HeaderNotFoundError
from core.grid import CellAddress, Grid, StringCell
from core.logger import setup_logger
from core.normalize import transform_amount, transform_date
from core.schema import HeaderLocation, RawTransaction, RowError

logger = setup_logger(__name__)

# Column label in the export -> transaction field
HEADER_LABELS: Dict[str, str] = {
    "Datum": "date",
    "Beschreibung": "payee",
    "Betrag": "amount",
}


def find_header_row(grid: Grid) -> HeaderLocation:
    """
    Locate the first row that carries every expected column label.

    Labels must be string cells matching exactly. If a label appears more
    than once in a row, its rightmost column is used.

    Args:
        grid: Decoded sheet

    Returns:
        Header row index and field columns

    Raises:
        HeaderNotFoundError: If no row contains all labels
    """
    cell_range = grid.range
    if cell_range is not None:
        for row in cell_range.rows():
            columns: Dict[str, int] = {}
            for col, cell in grid.iter_row(row):
                if isinstance(cell, StringCell) and cell.value in HEADER_LABELS:
                    columns[HEADER_LABELS[cell.value]] = col
            if len(columns) == len(HEADER_LABELS):
                logger.debug(f"Header found in row {row + 1}: {columns}")
                return HeaderLocation(row=row, **columns)

    raise HeaderNotFoundError(HEADER_LABELS.keys())


def get_string(grid: Grid, at: CellAddress) -> str:
    """
    Read a string cell.

    Raises:
        ExpectedStringError: If the cell is empty or not a string
    """
    cell = grid.cell(at)
    if not isinstance(cell, StringCell):
        raise ExpectedStringError(at)
    return cell.value


def parse_transaction(grid: Grid, row: int, header: HeaderLocation) -> RawTransaction:
    """
    Build a transaction from one data row.

    Raises:
        CellError: If any of the three cells is missing or malformed
    """
    date_at = CellAddress(row=row, col=header.date)
    date = transform_date(get_string(grid, date_at), date_at)
    payee = get_string(grid, CellAddress(row=row, col=header.payee))
    amount_at = CellAddress(row=row, col=header.amount)
    amount = transform_amount(get_string(grid, amount_at), amount_at)
    return RawTransaction(date=date, payee=payee, amount=amount)


def iter_transactions(
    grid: Grid,
    header: HeaderLocation,
    errors: List[RowError]
) -> Iterator[RawTransaction]:
    """
    Lazily parse every visible row below the header.

    Rows with a bad cell are skipped and their error appended to errors.
    Any other exception propagates.

    Args:
        grid: Decoded sheet
        header: Located header row
        errors: Receives one RowError per rejected row

    Yields:
        Transactions in sheet order
    """
    cell_range = grid.range
    if cell_range is None:
        return

    for row in range(header.row + 1, cell_range.max_row + 1):
        if grid.is_hidden(row):
            continue
        try:
            transaction = parse_transaction(grid, row, header)
        except CellError as e:
            logger.debug(f"Skipping row {row + 1}: {e}")
            errors.append(e.to_row_error())
            continue
        yield transaction
