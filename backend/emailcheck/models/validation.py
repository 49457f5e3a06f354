# backend/emailcheck/models/validation.py
import enum
import math
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ValidationStatus(str, enum.Enum):
    VALID = "VALID"
    INVALID = "INVALID"
    RISKY = "RISKY"
    UNKNOWN = "UNKNOWN"


class Validations(BaseModel):
    model_config = ConfigDict(extra="ignore")

    syntax: Optional[bool] = None
    domain_exists: Optional[bool] = None
    mx_records: Optional[bool] = None
    mailbox_exists: Optional[bool] = None
    is_disposable: Optional[bool] = None
    is_role_based: Optional[bool] = None

    @field_validator("*", mode="before")
    @classmethod
    def _flag(cls, value: Any) -> Optional[bool]:
        return value if isinstance(value, bool) else None


class ValidationResult(BaseModel):
    # status stays a plain string: unexpected upstream values must still be
    # counted as "other" by the merger
    model_config = ConfigDict(extra="ignore")

    email: str = ""
    status: str = ""
    score: Optional[Union[int, float]] = None
    validations: Validations = Field(default_factory=Validations)

    @field_validator("email", "status", mode="before")
    @classmethod
    def _text(cls, value: Any) -> str:
        return "" if value is None else str(value)

    @field_validator("score", mode="before")
    @classmethod
    def _number(cls, value: Any) -> Optional[Union[int, float]]:
        # anything that is not a number becomes a blank score
        if isinstance(value, bool) or value is None:
            return None
        if isinstance(value, (int, float)):
            return value if math.isfinite(value) else None
        try:
            number = float(str(value).strip())
        except ValueError:
            return None
        if not math.isfinite(number):
            return None
        return int(number) if number.is_integer() else number

    @field_validator("validations", mode="before")
    @classmethod
    def _checks(cls, value: Any) -> Any:
        return value if isinstance(value, dict) else {}


class BatchSummary(BaseModel):
    total_rows: int
    unique_emails: int
    valid_count: int
    invalid_count: int
    other_count: int
    email_column_used: str


class BatchResponse(BaseModel):
    filename: str
    summary: BatchSummary
    download_url: str


class BatchStatus(BaseModel):
    running: bool
    filename: Optional[str] = None
    summary: Optional[BatchSummary] = None
    download_ready: bool = False


Row = List[Any]
ResultMap = Dict[str, ValidationResult]
