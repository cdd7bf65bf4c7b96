"""Tests for subject-record extraction and SGPA aggregation."""

import pytest

from acadgpt.errors import NoSubjectsDetectedError
from acadgpt.grading.sgpa import (
    CREDIT_POINT_TOLERANCE,
    SubjectRecord,
    compute_sgpa,
    extract_subject_records,
    format_sgpa_report,
    parse_subject_token,
)


# ── Token parsing ────────────────────────────────────────────────────────────


class TestParseSubjectToken:
    def test_splits_credit_grade_point_and_credit_point(self):
        record = parse_subject_token("48.5034")
        assert record == SubjectRecord(credit=4, grade_point=8.5, credit_point=34.0)

    def test_two_digit_grade_point(self):
        record = parse_subject_token("410.0040")
        assert record == SubjectRecord(credit=4, grade_point=10.0, credit_point=40.0)

    def test_rejects_inconsistent_credit_point(self):
        # 8 * 9.50 = 76, printed 75
        assert parse_subject_token("89.5075") is None

    def test_rejects_wildly_inconsistent_token(self):
        # 4 * 8.00 = 32, printed 80
        assert parse_subject_token("48.0080") is None

    def test_accepts_small_rounding_noise(self):
        # 3 * 9.10 = 27.3
        assert parse_subject_token("39.1027") is not None

    def test_rejects_noise_at_or_beyond_tolerance(self):
        # 3 * 9.20 = 27.6
        assert parse_subject_token("39.2027") is None

    @pytest.mark.parametrize("token", ["2024", "8.50", "48.534", "448.5034", "48.50345"])
    def test_rejects_wrong_layout(self, token):
        assert parse_subject_token(token) is None


# ── Extraction from text ─────────────────────────────────────────────────────


class TestExtractSubjectRecords:
    def test_keeps_order_of_appearance(self):
        records = extract_subject_records("CS1 39.0027\nMA2 48.5034")
        assert [r.credit for r in records] == [3, 4]

    def test_duplicates_are_kept(self):
        records = extract_subject_records("48.5034 48.5034")
        assert len(records) == 2

    def test_ignores_surrounding_noise(self):
        text = "Roll 21BCE1234 | 48.5034 | 89.5075 | date 12.05.2024 | 39.0027,"
        records = extract_subject_records(text)
        assert [(r.credit, r.credit_point) for r in records] == [(4, 34.0), (3, 27.0)]

    def test_no_numbers_gives_empty_list(self):
        assert extract_subject_records("no digits here") == []

    def test_every_accepted_record_is_consistent(self):
        text = " ".join(
            f"{c}{gp:.2f}{cp:02d}"
            for c in range(1, 10)
            for gp in (4.0, 6.5, 8.25, 9.0)
            for cp in (20, 27, 33, 45, 60)
        )
        records = extract_subject_records(text)
        assert records
        for record in records:
            assert abs(record.credit * record.grade_point - record.credit_point) < CREDIT_POINT_TOLERANCE


# ── Aggregation ──────────────────────────────────────────────────────────────


class TestComputeSgpa:
    def test_weighted_average(self):
        records = [
            SubjectRecord(credit=4, grade_point=8.5, credit_point=34),
            SubjectRecord(credit=3, grade_point=9.0, credit_point=27),
        ]
        metric = compute_sgpa(records)
        assert metric.total_credits == 7
        assert metric.total_credit_points == 61
        assert metric.value == 8.71

    def test_value_matches_rounded_ratio(self):
        records = extract_subject_records("48.5034 39.0027 27.0014 110.0010")
        metric = compute_sgpa(records)
        expected = round(sum(r.credit_point for r in records) / sum(r.credit for r in records), 2)
        assert metric.value == expected

    def test_empty_records_refused(self):
        with pytest.raises(NoSubjectsDetectedError):
            compute_sgpa([])

    def test_empty_records_error_is_a_value_error(self):
        with pytest.raises(ValueError):
            compute_sgpa([])


class TestReport:
    def test_report_shows_totals_and_result(self):
        metric = compute_sgpa(extract_subject_records("48.5034 39.0027"))
        report = format_sgpa_report(metric, 2)
        assert report.startswith("Your SGPA is 8.71")
        assert "Total Credit Points = 61\n" in report
        assert "Total Credits = 7\n" in report
        assert "SGPA = 61 / 7 = 8.71" in report
        assert "2 subjects detected" in report
