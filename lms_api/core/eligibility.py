# lms_api/core/eligibility.py
"""
Pure certificate-eligibility arithmetic.

Nothing here touches the database: the crud layer collects the counts and
hands them over, which keeps the thresholds and rounding rules testable on
their own.
"""
import math
from dataclasses import dataclass
from datetime import date

ATTENDANCE_THRESHOLD = 80
ASSIGNMENTS_THRESHOLD = 80

STATUS_PENDING = "pending"
STATUS_REQUIREMENTS_MET = "requirements_met"


@dataclass(frozen=True)
class TrainingDay:
    day_number: int
    total_days: int


def training_day(start_date: date, end_date: date, today: date) -> TrainingDay:
    """1-indexed day of the training and its length in days.

    Not clamped: before the start the day number is <= 0, after the end it
    exceeds ``total_days``.
    """
    return TrainingDay(
        day_number=(today - start_date).days + 1,
        total_days=(end_date - start_date).days + 1,
    )


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _clamp(value: float) -> float:
    return min(max(value, 0.0), 100.0)


def attendance_percentage(attended: int, total: int) -> float:
    # no scheduled sessions counts as failing
    if total > 0:
        return attended * 100 / total
    return 0.0


def submission_percentage(submitted: int, total: int) -> float:
    # no linked assignments counts as satisfied
    if total > 0:
        return submitted * 100 / total
    return 100.0


@dataclass(frozen=True)
class Eligibility:
    attendance_percentage: float
    submission_percentage: float
    attendance_met: bool
    assignments_met: bool
    overall_completion: int

    @property
    def all_met(self) -> bool:
        return self.attendance_met and self.assignments_met

    @property
    def status(self) -> str:
        return STATUS_REQUIREMENTS_MET if self.all_met else STATUS_PENDING

    def breakdown(self) -> dict:
        return {"attendance": self.attendance_met, "assignments": self.assignments_met}


def evaluate(attendance_pct: float, submission_pct: float) -> Eligibility:
    attendance_pct = _clamp(attendance_pct)
    submission_pct = _clamp(submission_pct)
    return Eligibility(
        attendance_percentage=attendance_pct,
        submission_percentage=submission_pct,
        attendance_met=attendance_pct >= ATTENDANCE_THRESHOLD,
        assignments_met=submission_pct >= ASSIGNMENTS_THRESHOLD,
        overall_completion=round_half_up((attendance_pct + submission_pct) / 2),
    )
