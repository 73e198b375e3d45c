"""
Workbook decoding into cell grids.
Supports .xlsx through openpyxl and legacy .xls through xlrd.
"""
from io import BytesIO
from typing import Dict, List

import xlrd
from openpyxl import load_workbook
from openpyxl.worksheet.worksheet import Worksheet

from core.exceptions import UnreadableFileError
from core.grid import EMPTY_CELL, CellRange, CellValue, Grid, OtherCell, StringCell
from core.logger import setup_logger

logger = setup_logger(__name__)

ZIP_MAGIC = b"PK\x03\x04"
OLE2_MAGIC = b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1"


def detect_engine(content: bytes) -> str:
    """
    Pick the decoding engine from the file signature.

    Raises:
        UnreadableFileError: If the payload is neither xlsx nor xls
    """
    if content.startswith(ZIP_MAGIC):
        return "openpyxl"
    if content.startswith(OLE2_MAGIC):
        return "xlrd"
    raise UnreadableFileError(
        "Unsupported file format, expected an .xlsx or .xls workbook",
        details={"size": len(content), "signature": content[:8].hex()}
    )


def _openpyxl_grid(ws: Worksheet) -> Grid:
    rows: List[List[CellValue]] = []
    has_values = False
    for row in ws.iter_rows(min_row=1, min_col=1, max_row=ws.max_row, max_col=ws.max_column):
        cells: List[CellValue] = []
        for cell in row:
            if cell.value is None:
                cells.append(EMPTY_CELL)
                continue
            has_values = True
            if cell.data_type == "s" and isinstance(cell.value, str):
                cells.append(StringCell(value=cell.value))
            else:
                cells.append(OtherCell(kind=cell.data_type))
        rows.append(cells)

    # openpyxl reports A1:A1 for an empty sheet
    if not has_values:
        return Grid([], None)

    cell_range = CellRange(
        min_row=ws.min_row - 1,
        max_row=ws.max_row - 1,
        min_col=ws.min_column - 1,
        max_col=ws.max_column - 1,
    )
    hidden = [idx - 1 for idx, dim in ws.row_dimensions.items() if dim.hidden]
    return Grid(rows, cell_range, hidden)


def _xlrd_grid(sheet: "xlrd.sheet.Sheet") -> Grid:
    if sheet.nrows == 0 or sheet.ncols == 0:
        return Grid([], None)

    rows: List[List[CellValue]] = []
    for r in range(sheet.nrows):
        cells: List[CellValue] = []
        for c in range(sheet.ncols):
            ctype = sheet.cell_type(r, c)
            if ctype == xlrd.XL_CELL_TEXT:
                cells.append(StringCell(value=sheet.cell_value(r, c)))
            elif ctype in (xlrd.XL_CELL_EMPTY, xlrd.XL_CELL_BLANK):
                cells.append(EMPTY_CELL)
            else:
                cells.append(OtherCell(kind=xlrd.sheet.ctype_text.get(ctype, "unknown")))
        rows.append(cells)

    cell_range = CellRange(min_row=0, max_row=sheet.nrows - 1, min_col=0, max_col=sheet.ncols - 1)
    hidden = [r for r, info in sheet.rowinfo_map.items() if info.hidden]
    return Grid(rows, cell_range, hidden)


def read_workbook(content: bytes) -> Dict[str, Grid]:
    """
    Decode a workbook into one grid per sheet.

    Args:
        content: Raw .xlsx or .xls bytes

    Returns:
        Sheet name -> grid, in workbook order

    Raises:
        UnreadableFileError: If the payload cannot be decoded
    """
    engine = detect_engine(content)
    logger.info(f"Reading workbook ({len(content)} bytes, engine={engine})")

    try:
        if engine == "openpyxl":
            wb = load_workbook(BytesIO(content), data_only=True)
            try:
                grids = {ws.title: _openpyxl_grid(ws) for ws in wb.worksheets}
            finally:
                wb.close()
        else:
            book = xlrd.open_workbook(file_contents=content, formatting_info=True)
            grids = {sheet.name: _xlrd_grid(sheet) for sheet in book.sheets()}
    except UnreadableFileError:
        raise
    except Exception as e:
        logger.error(f"Failed to decode workbook with {engine}: {e}")
        raise UnreadableFileError(
            "Could not read the spreadsheet file",
            details={"engine": engine, "error": str(e)}
        )

    logger.info(f"Decoded {len(grids)} sheet(s): {list(grids)}")
    return grids
