"""
Grade book - roll number -> CGPA lookups against marksheet.xlsx.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from acadgpt.config import (
    LIBRARY_DIR,
    MARKSHEET_CGPA_COLUMN,
    MARKSHEET_FILENAME,
    MARKSHEET_NAME_COLUMN,
    MARKSHEET_ROLL_COLUMN,
)
from acadgpt.records.workbook import WorkbookTable, cell_text

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GradeRecord:
    """
    One student's row in the marksheet.

    Attributes:
        roll_number: Roll number as written in the sheet
        cgpa: Cumulative grade point average
        name: Student name, if the sheet has one
    """
    roll_number: str
    cgpa: float | str
    name: str | None = None

    @property
    def cgpa_text(self) -> str:
        return cell_text(self.cgpa)


class GradeBook:
    """
    Looks students up in the marksheet, re-reading the file on every call.

    Example:
        book = GradeBook()
        record = book.lookup("21CS101")
        if record is None:
            print("not in the marksheet")
    """

    def __init__(self, path: str | Path | None = None):
        self.table = WorkbookTable(path or LIBRARY_DIR / MARKSHEET_FILENAME)

    def lookup(self, roll_number: str) -> GradeRecord | None:
        """
        Find a student by roll number (case-insensitive exact match).

        Returns None when the sheet is missing, unreadable, or has no such row.
        """
        if not self.table.exists():
            return None

        try:
            rows = self.table.read_rows()
        except Exception:
            logger.exception("Error reading %s", self.table.path)
            return None

        wanted = roll_number.strip().lower()
        for row in rows:
            if cell_text(row.get(MARKSHEET_ROLL_COLUMN)).lower() != wanted:
                continue
            name = row.get(MARKSHEET_NAME_COLUMN)
            return GradeRecord(
                roll_number=cell_text(row.get(MARKSHEET_ROLL_COLUMN)),
                cgpa=_as_number(row.get(MARKSHEET_CGPA_COLUMN)),
                name=cell_text(name) or None,
            )
        return None


def _as_number(value) -> float | str:
    if isinstance(value, (int, float)):
        return float(value)
    try:
        return float(str(value).strip())
    except (TypeError, ValueError):
        return cell_text(value)
