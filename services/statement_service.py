"""
Statement conversion service.
Runs the pipeline: decode workbook -> locate header -> parse rows -> export CSV.
"""
import asyncio
from pathlib import Path
from typing import List, Optional

from core.config import get_settings
from core.exceptions import DataNotFoundError, MultipleSheetsError, NoRangeError, SheetError
from core.exporters import export_to_csv
from core.grid import Grid
from core.logger import setup_logger
from core.parsing import find_header_row, iter_transactions
from core.reader import read_workbook
from core.schema import HeaderLocation, ProcessResult, RowError

logger = setup_logger(__name__)


class StatementService:
    """Service converting bank statement workbooks into budget CSV files."""

    def __init__(self, csv_filename: Optional[str] = None):
        """
        Initialize statement service.

        Args:
            csv_filename: Attachment name for the CSV (defaults to configured value)
        """
        self.settings = get_settings()
        self.csv_filename = csv_filename or self.settings.csv_filename

    def load_sheet(self, content: bytes) -> Grid:
        """
        Decode the workbook and return its only sheet.

        Raises:
            UnreadableFileError: If the payload cannot be decoded
            MultipleSheetsError: If there is not exactly one sheet
            NoRangeError: If the sheet is empty
        """
        grids = read_workbook(content)
        if len(grids) != 1:
            raise MultipleSheetsError(len(grids))
        name, grid = next(iter(grids.items()))
        if grid.range is None:
            raise NoRangeError(name)
        return grid

    def generate_csv(self, grid: Grid, header: HeaderLocation) -> ProcessResult:
        """
        Parse data rows and export the accepted ones.

        Args:
            grid: Sheet to convert
            header: Located header row

        Returns:
            Result with CSV, transactions and row-level errors
        """
        row_errors: List[RowError] = []
        transactions = list(iter_transactions(grid, header, row_errors))
        csv = export_to_csv(transactions, self.csv_filename)

        if row_errors:
            logger.warning(f"{len(row_errors)} row(s) skipped due to invalid cells")
        logger.info(f"Converted {len(transactions)} transactions")

        return ProcessResult(
            csv=csv,
            transactions=transactions,
            errors=[str(e) for e in row_errors]
        )

    def process(self, content: bytes) -> ProcessResult:
        """
        Convert a statement workbook.

        Never raises: a file that cannot be converted at all yields a result
        without CSV and transactions and a single error message.

        Args:
            content: Raw workbook bytes

        Returns:
            Processing result
        """
        try:
            grid = self.load_sheet(content)
            header = find_header_row(grid)
            logger.info(f"Header row at {header.row + 1}")
            return self.generate_csv(grid, header)

        except SheetError as e:
            logger.error(f"Error during parsing: {e.message}")
            if e.details:
                logger.debug(f"Details: {e.details}")
            return ProcessResult.failure(e.message)

        except Exception as e:
            logger.error(f"Unexpected error during parsing: {e}", exc_info=True)
            return ProcessResult.failure(str(e) or type(e).__name__)

    async def process_async(self, content: bytes) -> ProcessResult:
        """
        Run process() in the default executor so the event loop stays free.

        Args:
            content: Raw workbook bytes

        Returns:
            Processing result
        """
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self.process, content)

    def process_file(self, file_path: str) -> ProcessResult:
        """
        Convert a statement workbook stored on disk.

        Args:
            file_path: Path to .xlsx or .xls file

        Returns:
            Processing result

        Raises:
            DataNotFoundError: If file doesn't exist
        """
        path = Path(file_path)
        if not path.is_file():
            raise DataNotFoundError(
                f"File not found: {file_path}",
                details={"file_path": file_path}
            )
        logger.info(f"Processing statement file: {path.name}")
        return self.process(path.read_bytes())
