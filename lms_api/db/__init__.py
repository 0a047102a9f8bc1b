# lms_api/db/__init__.py
# Importing lms_api.db registers every model on Base.metadata

from lms_api.db.base import Base
from lms_api.db.models import (
    User,
    Cohort,
    CohortMember,
    ScheduledSession,
    AttendanceRecord,
    Assignment,
    AssignmentLink,
    Submission,
    Certificate,
    CourseMaterial,
    QuickNote,
)

__all__ = [
    "Base",
    "User",
    "Cohort",
    "CohortMember",
    "ScheduledSession",
    "AttendanceRecord",
    "Assignment",
    "AssignmentLink",
    "Submission",
    "Certificate",
    "CourseMaterial",
    "QuickNote",
]
