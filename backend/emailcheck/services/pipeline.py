# backend/emailcheck/services/pipeline.py
import logging
from dataclasses import dataclass
from typing import Optional

from ..models.validation import BatchSummary
from ..utils.parser import read_rows
from .client import ValidationClient
from .extractor import column_label, extract_emails, find_email_column
from .merger import merge_results
from .writer import write_xlsx

logger = logging.getLogger("emailcheck.pipeline")


@dataclass
class BatchRun:
    summary: BatchSummary
    workbook: bytes


async def run_batch(
    content: bytes,
    filename: Optional[str],
    client: ValidationClient,
) -> BatchRun:
    """
    Spreadsheet in, validated spreadsheet out.

    read -> pick email column -> dedupe -> one batch call -> merge -> write.
    Errors from any stage propagate to the caller unchanged.
    """
    rows = read_rows(content, filename)
    header, data_rows = rows[0], rows[1:]

    index = find_email_column(header)
    emails = extract_emails(data_rows, index)

    results = await client.validate_batch(emails)

    merged = merge_results(data_rows, index, results)
    workbook = write_xlsx(header, merged.rows)

    summary = BatchSummary(
        total_rows=len(data_rows),
        unique_emails=len(emails),
        valid_count=merged.valid_count,
        invalid_count=merged.invalid_count,
        other_count=merged.other_count,
        email_column_used=column_label(header, index),
    )
    logger.info(
        "Batch %s: rows=%d unique=%d valid=%d invalid=%d other=%d column=%r",
        filename, summary.total_rows, summary.unique_emails,
        summary.valid_count, summary.invalid_count, summary.other_count,
        summary.email_column_used,
    )
    return BatchRun(summary=summary, workbook=workbook)
