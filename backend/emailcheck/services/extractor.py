# backend/emailcheck/services/extractor.py
from typing import List, Sequence

from ..errors import NoEmailsFoundError
from ..utils.helpers import cell_text, normalize_email


def find_email_column(header: Sequence) -> int:
    """
    Exact "email" header (any case) wins, then the first header containing
    "email", then column 0.
    """
    names = [cell_text(h).lower() for h in header]
    for i, name in enumerate(names):
        if name == "email":
            return i
    for i, name in enumerate(names):
        if "email" in name:
            return i
    return 0


def email_at(row: Sequence, index: int) -> str:
    if index >= len(row):
        return ""
    return normalize_email(row[index])


def extract_emails(data_rows: Sequence[Sequence], index: int) -> List[str]:
    emails = [email_at(r, index) for r in data_rows]
    # dict preserves first-seen order
    unique = list(dict.fromkeys(e for e in emails if e))
    if not unique:
        raise NoEmailsFoundError()
    return unique


def column_label(header: Sequence, index: int) -> str:
    name = cell_text(header[index]) if index < len(header) else ""
    return name or f"(Column {index + 1})"
