# lms_api/db/models/certificate.py
from sqlalchemy import JSON, Column, DateTime, Enum, ForeignKey, Integer, String, UniqueConstraint

from lms_api.db.base import Base

CERTIFICATE_STATUSES = ("pending", "requirements_met")


class Certificate(Base):
    __tablename__ = "certificates"
    __table_args__ = (
        UniqueConstraint("user_id", "class_id", name="uq_certificates_user_class"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    class_id = Column(Integer, ForeignKey("classes.id", ondelete="CASCADE"), nullable=False, index=True)
    certificate_code = Column(String, unique=True, nullable=False)
    status = Column(Enum(*CERTIFICATE_STATUSES, name="certificate_status"), default="pending", nullable=False)
    completion_percentage = Column(Integer, default=0, nullable=False)
    # {"attendance": bool, "assignments": bool} from the latest evaluation
    requirements_met = Column(JSON, nullable=True)
    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=False)
