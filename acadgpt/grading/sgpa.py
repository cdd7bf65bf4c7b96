"""
SGPA - Pulls per-subject records out of marksheet text and averages them.

Marksheet PDFs and OCR output tend to glue the credit, grade point and
credit point columns of a row into one token. For example, a 4-credit
subject graded 8.50 with 34 credit points comes out as:

    48.5034   ->   4 | 8.50 | 34

Every number-like token in the text is tried against that layout. A token
is accepted only if the three parts agree with each other
(credit * grade_point ~= credit_point), which filters out roll numbers,
dates, marks and other stray digits. Rejected tokens are dropped silently.
"""

import logging
import re
from dataclasses import dataclass

from acadgpt.config import SGPA_REPORT_TEMPLATE
from acadgpt.errors import NoSubjectsDetectedError

logger = logging.getLogger(__name__)

# Any integer or decimal run in the text
_NUMBER_TOKEN = re.compile(r"\d+\.\d+|\d+")

# 1-digit credit, grade point with two decimals, 2-digit credit point
_SUBJECT_TOKEN = re.compile(r"(\d)(\d{1,2}\.\d{2})(\d{2})")

# credit * grade_point must land within this distance of credit_point
CREDIT_POINT_TOLERANCE = 0.5


@dataclass(frozen=True)
class SubjectRecord:
    """
    One subject row recovered from a marksheet.

    Attributes:
        credit: Credits for the subject (1-9)
        grade_point: Grade point on a 10-point scale
        credit_point: credit * grade_point as printed on the sheet
    """
    credit: int
    grade_point: float
    credit_point: float


@dataclass(frozen=True)
class AggregateMetric:
    """Credit-weighted average over a set of subject records."""
    total_credits: int
    total_credit_points: float
    value: float

    @property
    def value_text(self) -> str:
        return f"{self.value:.2f}"


def parse_subject_token(token: str) -> SubjectRecord | None:
    """
    Interpret one numeric token as a subject record.

    Returns None if the token does not have the fixed layout or its parts
    are inconsistent.
    """
    match = _SUBJECT_TOKEN.fullmatch(token)
    if not match:
        return None

    credit = int(match.group(1))
    grade_point = float(match.group(2))
    credit_point = float(match.group(3))

    if abs(credit * grade_point - credit_point) >= CREDIT_POINT_TOLERANCE:
        return None
    return SubjectRecord(credit=credit, grade_point=grade_point, credit_point=credit_point)


def extract_subject_records(text: str) -> list[SubjectRecord]:
    """
    Find every subject record in raw marksheet text.

    Records come back in order of appearance; duplicates are kept.

    Example:
        records = extract_subject_records("CS101 48.5034 MA102 39.0027")
        # -> credit 4 / 8.50 / 34 and credit 3 / 9.00 / 27
    """
    records = []
    for token in _NUMBER_TOKEN.findall(text):
        record = parse_subject_token(token)
        if record is not None:
            records.append(record)

    logger.debug("Accepted %d subject records", len(records))
    return records


def compute_sgpa(records: list[SubjectRecord]) -> AggregateMetric:
    """
    Credit-weighted average of the records, rounded to 2 decimals.

    Raises:
        NoSubjectsDetectedError: If records is empty.
    """
    if not records:
        raise NoSubjectsDetectedError("Cannot compute SGPA without subject records")

    total_credits = sum(record.credit for record in records)
    total_credit_points = sum(record.credit_point for record in records)
    return AggregateMetric(
        total_credits=total_credits,
        total_credit_points=total_credit_points,
        value=round(total_credit_points / total_credits, 2),
    )


def _format_number(value: float) -> str:
    return f"{value:g}"


def format_sgpa_report(metric: AggregateMetric, subject_count: int) -> str:
    return SGPA_REPORT_TEMPLATE.format(
        sgpa=metric.value_text,
        subjects=subject_count,
        credit_points=_format_number(metric.total_credit_points),
        credits=metric.total_credits,
    )
