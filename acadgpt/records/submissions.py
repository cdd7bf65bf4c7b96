"""
Submission ledger - marks assignments as submitted in assignment.xlsx.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from acadgpt.config import (
    ASSIGNMENT_FILENAME,
    ASSIGNMENT_REGNO_COLUMN,
    ASSIGNMENT_SUBMITTED_COLUMN,
    LIBRARY_DIR,
    SUBMISSION_ERROR_MESSAGE,
    SUBMISSION_NOT_FOUND_MESSAGE,
    SUBMISSION_OK_MESSAGE,
    SUBMISSION_SHEET_MISSING_MESSAGE,
    SUBMITTED_FLAG,
)
from acadgpt.records.workbook import WorkbookTable, cell_text

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SubmissionResult:
    success: bool
    message: str


class SubmissionLedger:
    """
    Flips the submitted flag for a registration number and saves the sheet.

    Example:
        ledger = SubmissionLedger()
        result = ledger.mark_submitted("21BCE1234")
        print(result.message)
    """

    def __init__(self, path: str | Path | None = None):
        self.table = WorkbookTable(path or LIBRARY_DIR / ASSIGNMENT_FILENAME)

    def mark_submitted(self, registration_number: str) -> SubmissionResult:
        """
        Set submitted="true" on every row whose regno matches (case-insensitive).

        The sheet is only rewritten when at least one row matched.
        """
        if not self.table.exists():
            return SubmissionResult(False, SUBMISSION_SHEET_MISSING_MESSAGE)

        wanted = registration_number.strip().lower()
        try:
            with self.table.transaction() as txn:
                for row in txn.rows:
                    if cell_text(row.get(ASSIGNMENT_REGNO_COLUMN)).lower() == wanted:
                        row[ASSIGNMENT_SUBMITTED_COLUMN] = SUBMITTED_FLAG
                        txn.mark_dirty()
        except Exception:
            logger.exception("Error updating %s", self.table.path)
            return SubmissionResult(False, SUBMISSION_ERROR_MESSAGE)

        if not txn.dirty:
            return SubmissionResult(False, SUBMISSION_NOT_FOUND_MESSAGE)

        logger.info("Marked assignment submitted for %s", registration_number)
        return SubmissionResult(True, SUBMISSION_OK_MESSAGE)
