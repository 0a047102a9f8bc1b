from sqlalchemy.orm import Session

from lms_api.core.exceptions import NotFoundError
from lms_api.db.models.note import QuickNote

DEFAULT_NOTE_COLOR = "yellow"


def get_notes(db: Session, user_id: int):
    return (
        db.query(QuickNote)
        .filter(QuickNote.user_id == user_id)
        .order_by(QuickNote.created_at.desc(), QuickNote.id.desc())
        .all()
    )


def create_note(db: Session, user_id: int, note_in) -> QuickNote:
    note = QuickNote(
        user_id=user_id,
        class_id=note_in.class_id,
        schedule_id=note_in.schedule_id,
        content=note_in.content,
        color=note_in.color or DEFAULT_NOTE_COLOR,
    )
    db.add(note)
    db.commit()
    db.refresh(note)
    return note


def delete_note(db: Session, user_id: int, note_id: int) -> None:
    # another learner's note is indistinguishable from a missing one
    note = db.query(QuickNote).filter(QuickNote.id == note_id, QuickNote.user_id == user_id).first()
    if not note:
        raise NotFoundError("Note not found", extra={"note_id": note_id})
    db.delete(note)
    db.commit()
