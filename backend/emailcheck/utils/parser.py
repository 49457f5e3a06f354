# backend/emailcheck/utils/parser.py
import io
import logging
from typing import Any, List, Optional

import xlrd
from openpyxl import load_workbook

from ..errors import EmptySheetError, ParseError
from .helpers import cell_text

logger = logging.getLogger("emailcheck.parser")


def _clean(value: Any) -> Any:
    return "" if value is None else value


def _xls_value(cell: xlrd.sheet.Cell) -> Any:
    # xlrd hands every number back as a float
    if cell.ctype == xlrd.XL_CELL_NUMBER and float(cell.value).is_integer():
        return int(cell.value)
    return _clean(cell.value)


def _trim_trailing_blank(rows: List[list]) -> List[list]:
    while rows and all(v == "" for v in rows[-1]):
        rows.pop()
    return rows


def parse_xlsx_bytes(content: bytes) -> List[list]:
    try:
        workbook = load_workbook(io.BytesIO(content), read_only=True, data_only=True)
    except Exception as e:
        logger.warning("openpyxl could not open upload: %s", e)
        raise ParseError() from e

    try:
        if not workbook.sheetnames:
            raise EmptySheetError("No sheets found in the uploaded file.")
        sheet = workbook[workbook.sheetnames[0]]
        rows = [[_clean(v) for v in row] for row in sheet.iter_rows(values_only=True)]
    finally:
        workbook.close()

    return _trim_trailing_blank(rows)


def parse_xls_bytes(content: bytes) -> List[list]:
    try:
        workbook = xlrd.open_workbook(file_contents=content)
    except Exception as e:
        logger.warning("xlrd could not open upload: %s", e)
        raise ParseError() from e

    if workbook.nsheets == 0:
        raise EmptySheetError("No sheets found in the uploaded file.")
    sheet = workbook.sheet_by_index(0)
    rows = [[_xls_value(cell) for cell in sheet.row(i)] for i in range(sheet.nrows)]
    return _trim_trailing_blank(rows)


def normalize_rows(rows: List[list]) -> List[list]:
    """Header cells become trimmed strings, data rows are padded to the header width."""
    header = [cell_text(h) for h in rows[0]]
    width = len(header)
    out = [header]
    for row in rows[1:]:
        row = list(row)
        if len(row) < width:
            row.extend([""] * (width - len(row)))
        out.append(row)
    return out


def read_rows(content: bytes, filename: Optional[str] = None) -> List[list]:
    """
    Parse the first sheet of an uploaded workbook.

    Returns the header row followed by the data rows. Raises ParseError for
    unreadable input and EmptySheetError when nothing is left to read.
    """
    fname = (filename or "").lower()
    if fname.endswith(".xls"):
        rows = parse_xls_bytes(content)
    else:
        rows = parse_xlsx_bytes(content)

    if not rows:
        raise EmptySheetError()

    return normalize_rows(rows)
