from datetime import date

import pytest

from lms_api.core.eligibility import (
    STATUS_PENDING,
    STATUS_REQUIREMENTS_MET,
    attendance_percentage,
    evaluate,
    round_half_up,
    submission_percentage,
    training_day,
)


def test_no_sessions_means_zero_attendance():
    assert attendance_percentage(0, 0) == 0


def test_no_assignments_means_full_submission():
    assert submission_percentage(0, 0) == 100


def test_eight_of_ten_sessions_meets_attendance():
    result = evaluate(attendance_percentage(8, 10), 100)
    assert result.attendance_percentage == 80
    assert result.attendance_met is True


def test_three_of_five_submissions_stays_pending_even_with_full_attendance():
    result = evaluate(100, submission_percentage(3, 5))
    assert result.submission_percentage == 60
    assert result.assignments_met is False
    assert result.all_met is False
    assert result.status == STATUS_PENDING


@pytest.mark.parametrize(
    "attendance, submissions, expected",
    [
        (80, 80, STATUS_REQUIREMENTS_MET),
        (79.999, 100, STATUS_PENDING),
        (100, 79.999, STATUS_PENDING),
        (0, 0, STATUS_PENDING),
    ],
)
def test_status_threshold_boundary(attendance, submissions, expected):
    assert evaluate(attendance, submissions).status == expected


@pytest.mark.parametrize(
    "attendance, submissions, overall",
    [
        (80, 60, 70),
        (0, 100, 50),
        (100, 100, 100),
        (0, 0, 0),
        (66.66666, 100, 83),
        (75, 100, 88),  # 87.5 rounds up
    ],
)
def test_overall_completion_is_rounded_average(attendance, submissions, overall):
    result = evaluate(attendance, submissions)
    assert result.overall_completion == overall
    assert 0 <= result.overall_completion <= 100


def test_percentages_are_clamped():
    result = evaluate(130, -5)
    assert result.attendance_percentage == 100
    assert result.submission_percentage == 0
    assert result.overall_completion == 50


def test_breakdown_mirrors_requirement_flags():
    assert evaluate(90, 50).breakdown() == {"attendance": True, "assignments": False}


def test_round_half_up():
    assert round_half_up(0.5) == 1
    assert round_half_up(2.5) == 3
    assert round_half_up(2.49) == 2


def test_training_day_is_one_indexed():
    day = training_day(date(2025, 3, 10), date(2025, 3, 14), date(2025, 3, 10))
    assert day.day_number == 1
    assert day.total_days == 5


def test_training_day_is_not_clamped():
    before = training_day(date(2025, 3, 10), date(2025, 3, 14), date(2025, 3, 8))
    after = training_day(date(2025, 3, 10), date(2025, 3, 14), date(2025, 3, 20))
    assert before.day_number == -1
    assert after.day_number == 11
    assert after.total_days == 5
