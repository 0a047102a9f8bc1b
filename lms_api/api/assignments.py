# lms_api/api/assignments.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from lms_api.api.deps import get_current_user, get_db, require_trainer
from lms_api.core.clock import Clock, get_clock
from lms_api.crud import assignment as crud_assignment
from lms_api.crud.cohort import get_active_cohort
from lms_api.db.models.user import User
from lms_api.schemas.assignment import (
    AssignmentCreate,
    AssignmentOut,
    StudentAssignmentOut,
    SubmissionCreate,
    SubmissionGrade,
    SubmissionOut,
)

router = APIRouter()


# trainers create, students submit
@router.post("/", response_model=AssignmentOut)
def create_assignment(
    assignment_in: AssignmentCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_trainer)
):
    return crud_assignment.create_assignment(db, assignment_in, created_by=current_user.id)


@router.get("/mine", response_model=List[AssignmentOut])
def read_own_assignments(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_trainer)
):
    return crud_assignment.get_assignments_by_creator(db, current_user.id)


@router.get("/", response_model=List[StudentAssignmentOut])
def read_cohort_assignments(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Assignments of the caller's active cohort with their submission state."""
    cohort = get_active_cohort(db, current_user.id)
    if cohort is None:
        return []

    assignments = crud_assignment.get_cohort_assignments(db, cohort.id)
    submissions = crud_assignment.get_user_submissions(db, current_user.id, [a.id for a in assignments])

    result = []
    for a in assignments:
        s = submissions.get(a.id)
        result.append({
            "id": a.id,
            "title": a.title,
            "description": a.description,
            "deadline": a.deadline,
            "max_points": a.max_points,
            "created_by": a.created_by,
            "submitted": s is not None,
            "submission_status": s.status if s else None,
            "score": s.score if s else None,
            "feedback": s.feedback if s else None,
        })
    return result


@router.post("/{assignment_id}/submit", response_model=SubmissionOut)
def submit_assignment(
    assignment_id: int,
    submission_in: SubmissionCreate,
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
    current_user: User = Depends(get_current_user)
):
    if current_user.role != "student":
        raise HTTPException(status_code=403, detail="Students only")
    return crud_assignment.submit_assignment(
        db, assignment_id, current_user.id, submission_in.content, now=clock.now()
    )


@router.get("/{assignment_id}/submissions", response_model=List[SubmissionOut])
def read_submissions(
    assignment_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_trainer)
):
    return crud_assignment.get_submissions_for_assignment(db, assignment_id)


@router.put("/submissions/{submission_id}/grade", response_model=SubmissionOut)
def grade_submission(
    submission_id: int,
    grade_in: SubmissionGrade,
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
    current_user: User = Depends(require_trainer)
):
    if grade_in.score < 0:
        raise HTTPException(status_code=400, detail="Score must be non-negative")
    return crud_assignment.grade_submission(
        db, submission_id, grade_in.score, grade_in.feedback, now=clock.now()
    )
