# lms_api/crud/cohort.py
import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from lms_api.core.exceptions import ConflictError, NotFoundError
from lms_api.db.models.cohort import Cohort, CohortMember
from lms_api.db.models.schedule import ScheduledSession
from lms_api.db.models.material import CourseMaterial

logger = logging.getLogger(__name__)


def get_active_cohort(db: Session, user_id: int) -> Optional[Cohort]:
    """The learner's current cohort, or None when they are between programs.

    Nothing stops a learner from sitting in two active cohorts; the one that
    started most recently wins.
    """
    cohort = (
        db.query(Cohort)
        .join(CohortMember, CohortMember.class_id == Cohort.id)
        .filter(CohortMember.user_id == user_id, Cohort.is_active.is_(True))
        .order_by(Cohort.start_date.desc(), Cohort.id.desc())
        .first()
    )
    if cohort is None:
        logger.debug(f"No active cohort for user_id={user_id}")
    return cohort


def get_cohort(db: Session, class_id: int) -> Cohort:
    cohort = db.query(Cohort).filter(Cohort.id == class_id).first()
    if not cohort:
        raise NotFoundError("Cohort not found", extra={"class_id": class_id})
    return cohort


def list_cohorts(db: Session):
    return db.query(Cohort).order_by(Cohort.start_date.desc()).all()


def create_cohort(db: Session, cohort_in) -> Cohort:
    cohort = Cohort(**cohort_in.model_dump())
    db.add(cohort)
    db.commit()
    db.refresh(cohort)
    logger.info(f"Cohort created: id={cohort.id} name={cohort.name!r}")
    return cohort


def add_member(db: Session, class_id: int, user_id: int) -> CohortMember:
    get_cohort(db, class_id)
    member = CohortMember(class_id=class_id, user_id=user_id)
    db.add(member)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("User is already a member of this cohort")
    db.refresh(member)
    return member


def add_scheduled_session(db: Session, class_id: int, session_in) -> ScheduledSession:
    get_cohort(db, class_id)
    session = ScheduledSession(class_id=class_id, **session_in.model_dump())
    db.add(session)
    db.commit()
    db.refresh(session)
    return session


def add_material(db: Session, class_id: int, material_in, uploaded_by: int) -> CourseMaterial:
    get_cohort(db, class_id)
    material = CourseMaterial(class_id=class_id, uploaded_by=uploaded_by, **material_in.model_dump())
    db.add(material)
    db.commit()
    db.refresh(material)
    return material


def get_public_materials(db: Session, class_id: int):
    return (
        db.query(CourseMaterial)
        .filter(CourseMaterial.class_id == class_id, CourseMaterial.is_public.is_(True))
        .order_by(CourseMaterial.order_index.asc(), CourseMaterial.created_at.desc())
        .all()
    )
