# backend/emailcheck/services/writer.py
import io
from typing import Sequence

from openpyxl import Workbook

from .merger import SCORE_COLUMN, STATUS_COLUMN

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
SHEET_TITLE = "Validated"


def write_xlsx(header: Sequence, rows: Sequence[Sequence]) -> bytes:
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = SHEET_TITLE

    sheet.append(list(header) + [STATUS_COLUMN, SCORE_COLUMN])
    for row in rows:
        sheet.append(list(row))

    buf = io.BytesIO()
    workbook.save(buf)
    return buf.getvalue()
