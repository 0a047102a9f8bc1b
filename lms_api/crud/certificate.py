# lms_api/crud/certificate.py
"""
Certificate records: one row per (learner, cohort).

The row is created lazily on the first status check and overwritten by every
check after that. Status is recomputed from scratch each time, so it can go
back from ``requirements_met`` to ``pending``.
"""
import logging
import secrets
from datetime import datetime

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from lms_api.core.eligibility import STATUS_PENDING, Eligibility, evaluate, round_half_up
from lms_api.crud.assignment import get_submission_summary
from lms_api.crud.attendance import get_attendance_summary
from lms_api.crud.cohort import get_active_cohort
from lms_api.db.models.certificate import Certificate

logger = logging.getLogger(__name__)


def generate_certificate_code(user_id: int, now: datetime) -> str:
    millis = int(now.timestamp() * 1000)
    return f"CERT-{millis}-{user_id}-{secrets.token_hex(2).upper()}"


def _find_certificate(db: Session, user_id: int, class_id: int):
    return db.query(Certificate).filter(
        Certificate.user_id == user_id,
        Certificate.class_id == class_id
    ).first()


def get_or_create_certificate(db: Session, user_id: int, class_id: int, now: datetime) -> Certificate:
    certificate = _find_certificate(db, user_id, class_id)
    if certificate:
        return certificate

    certificate = Certificate(
        user_id=user_id,
        class_id=class_id,
        certificate_code=generate_certificate_code(user_id, now),
        status=STATUS_PENDING,
        completion_percentage=0,
        created_at=now,
        updated_at=now,
    )
    db.add(certificate)
    try:
        db.commit()
    except IntegrityError:
        # another request created it first
        db.rollback()
        certificate = _find_certificate(db, user_id, class_id)
        if certificate is None:
            raise
        return certificate

    db.refresh(certificate)
    logger.info(
        f"Certificate record created: user_id={user_id}, class_id={class_id}, "
        f"code={certificate.certificate_code}"
    )
    return certificate


def apply_evaluation(db: Session, certificate: Certificate, eligibility: Eligibility, now: datetime) -> Certificate:
    previous = certificate.status
    certificate.status = eligibility.status
    certificate.completion_percentage = eligibility.overall_completion
    certificate.requirements_met = eligibility.breakdown()
    certificate.updated_at = now
    db.commit()
    db.refresh(certificate)

    if previous != certificate.status:
        logger.info(
            f"Certificate {certificate.certificate_code}: {previous} -> {certificate.status}"
        )
    return certificate


def get_certificate_status(db: Session, user_id: int, now: datetime) -> dict:
    cohort = get_active_cohort(db, user_id)
    if cohort is None:
        return {"has_active_cohort": False}

    certificate = get_or_create_certificate(db, user_id, cohort.id, now)

    attendance = get_attendance_summary(db, user_id, cohort.id)
    submissions = get_submission_summary(db, user_id, cohort.id)
    eligibility = evaluate(attendance.percentage, submissions.percentage)

    certificate = apply_evaluation(db, certificate, eligibility, now)

    return {
        "has_active_cohort": True,
        "cohort_name": cohort.name,
        "certificate": certificate,
        "requirements": {
            "attendance": {
                "met": eligibility.attendance_met,
                "percentage": round_half_up(eligibility.attendance_percentage),
                "attended": attendance.attended,
                "total": attendance.total,
            },
            "assignments": {
                "met": eligibility.assignments_met,
                "percentage": round_half_up(eligibility.submission_percentage),
                "submitted": submissions.submitted,
                "total": submissions.total,
            },
        },
        "overall_completion": eligibility.overall_completion,
        "can_download": eligibility.all_met,
    }
