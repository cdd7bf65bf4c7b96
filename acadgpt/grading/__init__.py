"""
Grading module - SGPA from uploaded marksheets.
"""

from .sgpa import (
    AggregateMetric,
    SubjectRecord,
    compute_sgpa,
    extract_subject_records,
    format_sgpa_report,
)

__all__ = [
    "AggregateMetric",
    "SubjectRecord",
    "compute_sgpa",
    "extract_subject_records",
    "format_sgpa_report",
]
