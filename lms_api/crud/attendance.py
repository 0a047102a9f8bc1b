# lms_api/crud/attendance.py
import logging
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import List, Optional

from sqlalchemy import distinct, func, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from lms_api.core.eligibility import attendance_percentage
from lms_api.core.exceptions import ConflictError, NotFoundError
from lms_api.db.models.attendance import AttendanceRecord
from lms_api.db.models.schedule import ScheduledSession

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AttendanceSummary:
    total: int
    attended: int

    @property
    def percentage(self) -> float:
        return attendance_percentage(self.attended, self.total)


def get_attendance_summary(db: Session, user_id: int, class_id: int) -> AttendanceSummary:
    """Active sessions of the cohort vs. those the learner checked into.

    Late check-ins count as attended.
    """
    total = (
        db.query(func.count(ScheduledSession.id))
        .filter(ScheduledSession.class_id == class_id, ScheduledSession.is_active.is_(True))
        .scalar()
    )
    attended = (
        db.query(func.count(distinct(AttendanceRecord.schedule_id)))
        .join(ScheduledSession, ScheduledSession.id == AttendanceRecord.schedule_id)
        .filter(
            AttendanceRecord.user_id == user_id,
            ScheduledSession.class_id == class_id,
            ScheduledSession.is_active.is_(True),
        )
        .scalar()
    )
    return AttendanceSummary(total=int(total or 0), attended=int(attended or 0))


def attendance_status(start_time: Optional[time], now: datetime) -> str:
    # time-of-day comparison at second precision
    current = now.time().replace(microsecond=0)
    if start_time is not None and current > start_time:
        return "late"
    return "present"


def find_attendance_record(db: Session, user_id: int, schedule_id: int) -> Optional[AttendanceRecord]:
    return db.query(AttendanceRecord).filter(
        AttendanceRecord.user_id == user_id,
        AttendanceRecord.schedule_id == schedule_id
    ).first()


def check_in(db: Session, user_id: int, schedule_id: int, now: datetime) -> AttendanceRecord:
    schedule = db.query(ScheduledSession).filter(ScheduledSession.id == schedule_id).first()
    if not schedule:
        raise NotFoundError("Scheduled session not found", extra={"schedule_id": schedule_id})

    # unique key on (user_id, schedule_id) backs this up at commit
    if find_attendance_record(db, user_id, schedule_id):
        logger.warning(f"Duplicate check-in: user_id={user_id}, schedule_id={schedule_id}")
        raise ConflictError("Already checked in for this session")

    record = AttendanceRecord(
        user_id=user_id,
        class_id=schedule.class_id,
        schedule_id=schedule_id,
        status=attendance_status(schedule.start_time, now),
        check_in_time=now,
    )
    db.add(record)
    try:
        db.commit()
    except IntegrityError:
        # lost the race against a concurrent check-in
        db.rollback()
        logger.warning(f"Concurrent check-in rejected: user_id={user_id}, schedule_id={schedule_id}")
        raise ConflictError("Already checked in for this session")
    db.refresh(record)
    logger.info(f"Check-in: user_id={user_id}, schedule_id={schedule_id}, status={record.status}")
    return record


def get_sessions_for_day(db: Session, class_id: int, day_number: int, today: date) -> List[ScheduledSession]:
    return (
        db.query(ScheduledSession)
        .filter(
            ScheduledSession.class_id == class_id,
            or_(ScheduledSession.day_number == day_number, ScheduledSession.schedule_date == today),
            ScheduledSession.is_active.is_(True),
        )
        .order_by(ScheduledSession.order_index.asc(), ScheduledSession.start_time.asc())
        .all()
    )


def get_records_for_sessions(db: Session, user_id: int, schedule_ids: List[int]) -> dict:
    if not schedule_ids:
        return {}
    records = db.query(AttendanceRecord).filter(
        AttendanceRecord.user_id == user_id,
        AttendanceRecord.schedule_id.in_(schedule_ids)
    ).all()
    return {r.schedule_id: r for r in records}


def get_day_progress(db: Session, user_id: int, class_id: int, day_number: int) -> AttendanceSummary:
    total = (
        db.query(func.count(ScheduledSession.id))
        .filter(
            ScheduledSession.class_id == class_id,
            ScheduledSession.day_number == day_number,
            ScheduledSession.is_active.is_(True),
        )
        .scalar()
    )
    completed = (
        db.query(func.count(distinct(AttendanceRecord.schedule_id)))
        .join(ScheduledSession, ScheduledSession.id == AttendanceRecord.schedule_id)
        .filter(
            AttendanceRecord.user_id == user_id,
            ScheduledSession.class_id == class_id,
            ScheduledSession.day_number == day_number,
            ScheduledSession.is_active.is_(True),
        )
        .scalar()
    )
    return AttendanceSummary(total=int(total or 0), attended=int(completed or 0))
