# lms_api/crud/assignment.py
import logging
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import distinct, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from lms_api.core.eligibility import submission_percentage
from lms_api.core.exceptions import ConflictError, NotFoundError
from lms_api.db.models.assignment import Assignment, AssignmentLink, Submission

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SubmissionSummary:
    total: int
    submitted: int

    @property
    def percentage(self) -> float:
        return submission_percentage(self.submitted, self.total)


def get_submission_summary(db: Session, user_id: int, class_id: int) -> SubmissionSummary:
    """Assignments linked to the cohort vs. those the learner submitted, graded or not."""
    total = (
        db.query(func.count(distinct(AssignmentLink.assignment_id)))
        .filter(AssignmentLink.class_id == class_id)
        .scalar()
    )
    submitted = (
        db.query(func.count(distinct(Submission.assignment_id)))
        .join(AssignmentLink, AssignmentLink.assignment_id == Submission.assignment_id)
        .filter(AssignmentLink.class_id == class_id, Submission.user_id == user_id)
        .scalar()
    )
    return SubmissionSummary(total=int(total or 0), submitted=int(submitted or 0))


def create_assignment(db: Session, assignment_in, created_by: int) -> Assignment:
    assignment = Assignment(**assignment_in.model_dump(), created_by=created_by)
    db.add(assignment)
    db.commit()
    db.refresh(assignment)
    return assignment


def get_assignment(db: Session, assignment_id: int) -> Assignment:
    assignment = db.query(Assignment).filter(Assignment.id == assignment_id).first()
    if not assignment:
        raise NotFoundError("Assignment not found", extra={"assignment_id": assignment_id})
    return assignment


def get_assignments_by_creator(db: Session, user_id: int):
    return db.query(Assignment).filter(Assignment.created_by == user_id).order_by(Assignment.id.desc()).all()


def get_cohort_assignments(db: Session, class_id: int):
    return (
        db.query(Assignment)
        .join(AssignmentLink, AssignmentLink.assignment_id == Assignment.id)
        .filter(AssignmentLink.class_id == class_id)
        .order_by(Assignment.deadline.asc(), Assignment.id.asc())
        .all()
    )


def get_user_submissions(db: Session, user_id: int, assignment_ids) -> dict:
    if not assignment_ids:
        return {}
    rows = db.query(Submission).filter(
        Submission.user_id == user_id,
        Submission.assignment_id.in_(assignment_ids)
    ).all()
    return {s.assignment_id: s for s in rows}


def link_assignment(db: Session, class_id: int, assignment_id: int) -> AssignmentLink:
    get_assignment(db, assignment_id)
    link = AssignmentLink(class_id=class_id, assignment_id=assignment_id)
    db.add(link)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("Assignment is already linked to this cohort")
    db.refresh(link)
    return link


def find_submission(db: Session, assignment_id: int, user_id: int):
    return db.query(Submission).filter(
        Submission.assignment_id == assignment_id,
        Submission.user_id == user_id
    ).first()


def _mark_submitted(submission: Submission, content, now: datetime) -> None:
    # score and feedback survive a resubmission until the trainer grades again
    submission.content = content
    submission.status = "submitted"
    submission.submitted_at = now


def submit_assignment(db: Session, assignment_id: int, user_id: int, content, now: datetime) -> Submission:
    """Create or overwrite the learner's submission for an assignment."""
    get_assignment(db, assignment_id)

    submission = find_submission(db, assignment_id, user_id)
    if submission is None:
        submission = Submission(assignment_id=assignment_id, user_id=user_id)
        _mark_submitted(submission, content, now)
        db.add(submission)
        try:
            db.commit()
        except IntegrityError:
            # a concurrent first submission won; update that row instead
            db.rollback()
            submission = find_submission(db, assignment_id, user_id)
            if submission is None:
                raise
            _mark_submitted(submission, content, now)
            db.commit()
    else:
        _mark_submitted(submission, content, now)
        db.commit()

    db.refresh(submission)
    logger.info(f"Submission saved: assignment_id={assignment_id}, user_id={user_id}")
    return submission


def get_submissions_for_assignment(db: Session, assignment_id: int):
    get_assignment(db, assignment_id)
    return (
        db.query(Submission)
        .filter(Submission.assignment_id == assignment_id)
        .order_by(Submission.submitted_at.desc())
        .all()
    )


def grade_submission(db: Session, submission_id: int, score: int, feedback, now: datetime) -> Submission:
    submission = db.query(Submission).filter(Submission.id == submission_id).first()
    if not submission:
        raise NotFoundError("Submission not found", extra={"submission_id": submission_id})
    submission.score = score
    submission.feedback = feedback
    submission.status = "graded"
    submission.graded_at = now
    db.commit()
    db.refresh(submission)
    return submission
