# lms_api/api/admin.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from lms_api.api.deps import get_db, require_admin
from lms_api.crud import assignment as crud_assignment
from lms_api.crud import cohort as crud_cohort
from lms_api.crud import user as crud_user
from lms_api.db.models.user import User
from lms_api.schemas.assignment import AssignmentLinkCreate, AssignmentLinkOut
from lms_api.schemas.cohort import (
    CohortCreate,
    CohortOut,
    MaterialCreate,
    MaterialOut,
    MemberCreate,
    MemberOut,
    ScheduledSessionCreate,
    ScheduledSessionOut,
)
from lms_api.schemas.user import UserOut

router = APIRouter()


@router.get("/users", response_model=List[UserOut])
def list_users(
    role: str | None = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    query = db.query(User)
    if role:
        query = query.filter(User.role == role)
    return query.order_by(User.id).all()


@router.get("/classes", response_model=List[CohortOut])
def list_classes(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    return crud_cohort.list_cohorts(db)


@router.post("/classes", response_model=CohortOut)
def create_class(
    cohort_in: CohortCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    if cohort_in.end_date < cohort_in.start_date:
        raise HTTPException(status_code=400, detail="End date must not precede start date")
    return crud_cohort.create_cohort(db, cohort_in)


@router.post("/classes/{class_id}/members", response_model=MemberOut)
def add_class_member(
    class_id: int,
    member_in: MemberCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    user = crud_user.get_user_by_id(db, member_in.user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return crud_cohort.add_member(db, class_id, user.id)


@router.post("/classes/{class_id}/schedule", response_model=ScheduledSessionOut)
def add_schedule_item(
    class_id: int,
    session_in: ScheduledSessionCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    if session_in.start_time and session_in.end_time and session_in.end_time < session_in.start_time:
        raise HTTPException(status_code=400, detail="End time must not precede start time")
    return crud_cohort.add_scheduled_session(db, class_id, session_in)


@router.post("/classes/{class_id}/assignments", response_model=AssignmentLinkOut)
def link_class_assignment(
    class_id: int,
    link_in: AssignmentLinkCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    crud_cohort.get_cohort(db, class_id)
    return crud_assignment.link_assignment(db, class_id, link_in.assignment_id)


@router.post("/classes/{class_id}/materials", response_model=MaterialOut)
def add_class_material(
    class_id: int,
    material_in: MaterialCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    return crud_cohort.add_material(db, class_id, material_in, uploaded_by=current_user.id)
