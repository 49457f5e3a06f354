# backend/emailcheck/errors.py
from typing import Optional


class EmailCheckError(Exception):
    """Base class for failures surfaced to the caller of a single action."""

    default_message = "Something went wrong."

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ParseError(EmailCheckError):
    default_message = "Could not read the file. Please upload a valid Excel (.xlsx/.xls)."


class EmptySheetError(EmailCheckError):
    default_message = "The sheet is empty."


class NoEmailsFoundError(EmailCheckError):
    default_message = "No emails found in the sheet."


class RequestError(EmailCheckError):
    """Upstream answered with a non-2xx status."""

    def __init__(self, status: int, message: Optional[str] = None):
        self.status = status
        super().__init__(message or f"Request failed ({status})")


class NetworkError(EmailCheckError):
    default_message = "Could not reach the validation service."
