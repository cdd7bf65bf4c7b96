"""
Records module - the library folder and its spreadsheets.

This module is responsible for:
1. Indexing downloadable files and resolving download paths safely
2. Looking up CGPA by roll number in the marksheet
3. Marking assignments submitted by registration number
"""

from .library import FileEntry, Library
from .workbook import WorkbookTable
from .grades import GradeBook, GradeRecord
from .submissions import SubmissionLedger, SubmissionResult

__all__ = [
    "FileEntry",
    "Library",
    "WorkbookTable",
    "GradeBook",
    "GradeRecord",
    "SubmissionLedger",
    "SubmissionResult",
]
