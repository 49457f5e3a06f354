# backend/emailcheck/utils/helpers.py
from typing import Any


def normalize_email(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def cell_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()
