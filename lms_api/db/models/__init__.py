from lms_api.db.base import Base
from lms_api.db.models.user import User
from lms_api.db.models.cohort import Cohort, CohortMember
from lms_api.db.models.schedule import ScheduledSession
from lms_api.db.models.attendance import AttendanceRecord
from lms_api.db.models.assignment import Assignment, AssignmentLink, Submission
from lms_api.db.models.certificate import Certificate
from lms_api.db.models.material import CourseMaterial
from lms_api.db.models.note import QuickNote

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
