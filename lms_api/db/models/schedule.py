# lms_api/db/models/schedule.py
from sqlalchemy import Boolean, Column, Date, ForeignKey, Integer, String, Text, Time
from sqlalchemy.orm import relationship

from lms_api.db.base import Base


class ScheduledSession(Base):
    __tablename__ = "daily_schedules"

    id = Column(Integer, primary_key=True, index=True)
    class_id = Column(Integer, ForeignKey("classes.id", ondelete="CASCADE"), nullable=False, index=True)
    day_number = Column(Integer, nullable=False)  # 1-based training day
    schedule_date = Column(Date, nullable=True)  # optional pinned calendar date
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    start_time = Column(Time, nullable=True)
    end_time = Column(Time, nullable=True)
    module_type = Column(String, nullable=True)  # lecture, lab, break ...
    order_index = Column(Integer, default=0, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)

    cohort = relationship("Cohort", back_populates="sessions")
    attendance_records = relationship("AttendanceRecord", back_populates="scheduled_session")
