# lms_api/api/short_training.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from lms_api.api.deps import get_current_user, get_db
from lms_api.core.clock import Clock, get_clock
from lms_api.core.eligibility import round_half_up, training_day
from lms_api.crud import attendance as crud_attendance
from lms_api.crud import note as crud_note
from lms_api.crud.certificate import get_certificate_status
from lms_api.crud.cohort import get_active_cohort, get_public_materials
from lms_api.db.models.user import User
from lms_api.schemas.cohort import MaterialOut
from lms_api.schemas.short_training import (
    CertificateStatusOut,
    CheckInOut,
    CheckInRequest,
    DayTrackingOut,
    QuickNoteCreate,
    QuickNoteOut,
    TodayScheduleOut,
)

router = APIRouter()


@router.get("/today-schedule", response_model=TodayScheduleOut)
def read_today_schedule(
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
    current_user: User = Depends(get_current_user)
):
    cohort = get_active_cohort(db, current_user.id)
    if cohort is None:
        return {"has_active_cohort": False, "schedule": []}

    today = clock.today()
    day = training_day(cohort.start_date, cohort.end_date, today)

    sessions = crud_attendance.get_sessions_for_day(db, cohort.id, day.day_number, today)
    records = crud_attendance.get_records_for_sessions(db, current_user.id, [s.id for s in sessions])

    schedule = []
    for s in sessions:
        record = records.get(s.id)
        schedule.append({
            "id": s.id,
            "title": s.title,
            "description": s.description,
            "day_number": s.day_number,
            "schedule_date": s.schedule_date,
            "start_time": s.start_time,
            "end_time": s.end_time,
            "module_type": s.module_type,
            "order_index": s.order_index,
            "attended": record is not None,
            "attendance_status": record.status if record else None,
            "check_in_time": record.check_in_time if record else None,
        })

    return {
        "has_active_cohort": True,
        "cohort_info": cohort,
        "current_day": day.day_number,
        "total_days": day.total_days,
        "schedule": schedule,
    }


@router.get("/day-tracking", response_model=DayTrackingOut, response_model_exclude_none=True)
def read_day_tracking(
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
    current_user: User = Depends(get_current_user)
):
    cohort = get_active_cohort(db, current_user.id)
    if cohort is None:
        return {"has_active_cohort": False}

    day = training_day(cohort.start_date, cohort.end_date, clock.today())
    progress = crud_attendance.get_day_progress(db, current_user.id, cohort.id, day.day_number)
    completion = round_half_up(progress.attended / progress.total * 100) if progress.total > 0 else 0

    return {
        "has_active_cohort": True,
        "current_day": day.day_number,
        "total_modules": progress.total,
        "completed_modules": progress.attended,
        "remaining_modules": progress.total - progress.attended,
        "completion_percentage": completion,
    }


@router.get("/materials", response_model=List[MaterialOut])
def read_materials(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    cohort = get_active_cohort(db, current_user.id)
    if cohort is None:
        return []
    return get_public_materials(db, cohort.id)


@router.get("/certificate-status", response_model=CertificateStatusOut, response_model_exclude_none=True)
def read_certificate_status(
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
    current_user: User = Depends(get_current_user)
):
    # recomputed and persisted on every call
    return get_certificate_status(db, current_user.id, now=clock.now())


@router.post("/check-in", response_model=CheckInOut)
def check_in(
    request: CheckInRequest,
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
    current_user: User = Depends(get_current_user)
):
    record = crud_attendance.check_in(db, current_user.id, request.schedule_id, now=clock.now())
    return {
        "success": True,
        "attendance_record": record,
        "message": "You are late!" if record.status == "late" else "Checked in successfully",
    }


@router.get("/quick-notes", response_model=List[QuickNoteOut])
def read_quick_notes(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return crud_note.get_notes(db, current_user.id)


@router.post("/quick-notes", response_model=QuickNoteOut)
def create_quick_note(
    note_in: QuickNoteCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    if not note_in.content or not note_in.content.strip():
        raise HTTPException(status_code=400, detail="Note content is required")
    return crud_note.create_note(db, current_user.id, note_in)


@router.delete("/quick-notes/{note_id}")
def delete_quick_note(
    note_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    crud_note.delete_note(db, current_user.id, note_id)
    return {"success": True}
