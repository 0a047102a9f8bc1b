from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.sql import func

from lms_api.db.base import Base


class QuickNote(Base):
    __tablename__ = "quick_notes"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    class_id = Column(Integer, ForeignKey("classes.id", ondelete="SET NULL"), nullable=True)
    schedule_id = Column(Integer, ForeignKey("daily_schedules.id", ondelete="SET NULL"), nullable=True)
    content = Column(Text, nullable=False)
    color = Column(String, default="yellow", nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
