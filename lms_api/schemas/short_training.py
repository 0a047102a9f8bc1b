# lms_api/schemas/short_training.py
from datetime import date, datetime, time
from typing import Dict, List, Optional

from lms_api.schemas.base import CamelModel
from lms_api.schemas.cohort import CohortInfo


class CheckInRequest(CamelModel):
    schedule_id: int


class AttendanceRecordOut(CamelModel):
    id: int
    user_id: int
    class_id: int
    schedule_id: int
    status: str
    check_in_time: datetime


class CheckInOut(CamelModel):
    success: bool
    attendance_record: AttendanceRecordOut
    message: str


class ScheduleItemOut(CamelModel):
    id: int
    title: str
    description: Optional[str] = None
    day_number: int
    schedule_date: Optional[date] = None
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    module_type: Optional[str] = None
    order_index: int
    attended: bool
    attendance_status: Optional[str] = None
    check_in_time: Optional[datetime] = None


class TodayScheduleOut(CamelModel):
    has_active_cohort: bool
    cohort_info: Optional[CohortInfo] = None
    current_day: Optional[int] = None
    total_days: Optional[int] = None
    schedule: List[ScheduleItemOut] = []


class DayTrackingOut(CamelModel):
    has_active_cohort: bool
    current_day: Optional[int] = None
    total_modules: Optional[int] = None
    completed_modules: Optional[int] = None
    remaining_modules: Optional[int] = None
    completion_percentage: Optional[int] = None


class CertificateOut(CamelModel):
    id: int
    user_id: int
    class_id: int
    certificate_code: str
    status: str
    completion_percentage: int
    requirements_met: Optional[Dict[str, bool]] = None
    created_at: datetime
    updated_at: datetime


class AttendanceRequirement(CamelModel):
    met: bool
    percentage: int
    attended: int
    total: int


class AssignmentsRequirement(CamelModel):
    met: bool
    percentage: int
    submitted: int
    total: int


class Requirements(CamelModel):
    attendance: AttendanceRequirement
    assignments: AssignmentsRequirement


class CertificateStatusOut(CamelModel):
    has_active_cohort: bool
    cohort_name: Optional[str] = None
    certificate: Optional[CertificateOut] = None
    requirements: Optional[Requirements] = None
    overall_completion: Optional[int] = None
    can_download: Optional[bool] = None


class QuickNoteCreate(CamelModel):
    content: Optional[str] = None
    color: Optional[str] = None
    class_id: Optional[int] = None
    schedule_id: Optional[int] = None


class QuickNoteOut(CamelModel):
    id: int
    user_id: int
    class_id: Optional[int] = None
    schedule_id: Optional[int] = None
    content: str
    color: str
    created_at: Optional[datetime] = None
