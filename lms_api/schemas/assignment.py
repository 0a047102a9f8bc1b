from datetime import datetime
from typing import Optional

from lms_api.schemas.base import CamelModel


class AssignmentCreate(CamelModel):
    title: str
    description: Optional[str] = None
    deadline: Optional[datetime] = None
    max_points: int = 100


class AssignmentOut(AssignmentCreate):
    id: int
    created_by: int


class AssignmentLinkCreate(CamelModel):
    assignment_id: int


class AssignmentLinkOut(CamelModel):
    id: int
    class_id: int
    assignment_id: int


class StudentAssignmentOut(AssignmentOut):
    submitted: bool
    submission_status: Optional[str] = None
    score: Optional[int] = None
    feedback: Optional[str] = None


class SubmissionCreate(CamelModel):
    content: Optional[str] = None


class SubmissionGrade(CamelModel):
    score: int
    feedback: Optional[str] = None


class SubmissionOut(CamelModel):
    id: int
    assignment_id: int
    user_id: int
    content: Optional[str] = None
    status: str
    score: Optional[int] = None
    feedback: Optional[str] = None
    submitted_at: Optional[datetime] = None
    graded_at: Optional[datetime] = None
