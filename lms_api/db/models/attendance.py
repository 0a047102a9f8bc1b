# lms_api/db/models/attendance.py
from sqlalchemy import Column, DateTime, Enum, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import relationship

from lms_api.db.base import Base

# "present": checked in before the session started
# "late":    checked in after the start time
# absence has no row at all
ATTENDANCE_STATUSES = ("present", "late")


class AttendanceRecord(Base):
    __tablename__ = "attendance_logs"
    __table_args__ = (
        UniqueConstraint("user_id", "schedule_id", name="uq_attendance_logs_user_schedule"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    class_id = Column(Integer, ForeignKey("classes.id", ondelete="CASCADE"), nullable=False, index=True)
    schedule_id = Column(Integer, ForeignKey("daily_schedules.id", ondelete="CASCADE"), nullable=False, index=True)
    status = Column(Enum(*ATTENDANCE_STATUSES, name="attendance_status"), nullable=False)
    check_in_time = Column(DateTime, nullable=False)

    scheduled_session = relationship("ScheduledSession", back_populates="attendance_records")
