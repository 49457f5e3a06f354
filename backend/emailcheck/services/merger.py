# backend/emailcheck/services/merger.py
from dataclasses import dataclass, field
from typing import List, Mapping, Sequence

from ..models.validation import ValidationResult, ValidationStatus
from .extractor import email_at

STATUS_COLUMN = "Validation Status"
SCORE_COLUMN = "Score"


@dataclass
class MergeOutcome:
    rows: List[list] = field(default_factory=list)
    valid_count: int = 0
    invalid_count: int = 0
    other_count: int = 0


def merge_results(
    data_rows: Sequence[Sequence],
    index: int,
    results: Mapping[str, ValidationResult],
) -> MergeOutcome:
    """
    Append (status, score) to every data row.

    Rows without an email get ("", ""), rows whose email is missing from the
    results get ("UNKNOWN", ""). Blank statuses are never counted.
    """
    outcome = MergeOutcome()

    for row in data_rows:
        email = email_at(row, index)
        hit = results.get(email) if email else None

        if hit is not None and hit.status:
            status = hit.status
        elif email:
            status = ValidationStatus.UNKNOWN.value
        else:
            status = ""

        score = hit.score if hit is not None and hit.score is not None else ""

        if status == ValidationStatus.VALID.value:
            outcome.valid_count += 1
        elif status == ValidationStatus.INVALID.value:
            outcome.invalid_count += 1
        elif status:
            outcome.other_count += 1

        outcome.rows.append(list(row) + [status, score])

    return outcome
