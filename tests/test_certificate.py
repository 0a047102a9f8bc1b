from datetime import date, datetime

from lms_api.crud import certificate as crud_certificate
from lms_api.crud.assignment import get_submission_summary
from lms_api.crud.attendance import get_attendance_summary
from lms_api.crud.certificate import get_certificate_status, get_or_create_certificate
from lms_api.crud.cohort import get_active_cohort
from lms_api.db.models import Certificate, Submission

NOW = datetime(2025, 3, 12, 8, 30, 0)


def test_no_active_cohort_short_circuits(db, make_user, make_cohort):
    student = make_user()
    make_cohort(is_active=False, members=[student])

    status = get_certificate_status(db, student.id, NOW)

    assert status == {"has_active_cohort": False}
    assert db.query(Certificate).count() == 0


def test_most_recent_active_cohort_wins(db, make_user, make_cohort):
    student = make_user()
    make_cohort(name="Old", start=date(2025, 1, 6), end=date(2025, 1, 10), members=[student])
    make_cohort(name="New", start=date(2025, 3, 10), end=date(2025, 3, 14), members=[student])

    assert get_active_cohort(db, student.id).name == "New"


def test_attendance_summary_counts_late_as_attended(db, make_user, make_cohort, make_sessions, attend):
    student = make_user()
    cohort = make_cohort(members=[student])
    sessions = make_sessions(cohort, 10)
    attend(student, sessions[:6], status="present")
    attend(student, sessions[6:8], status="late")

    summary = get_attendance_summary(db, student.id, cohort.id)

    assert (summary.attended, summary.total) == (8, 10)
    assert summary.percentage == 80


def test_attendance_ignores_inactive_sessions_and_other_learners(db, make_user, make_cohort, make_sessions, attend):
    student, other = make_user(), make_user()
    cohort = make_cohort(members=[student, other])
    active = make_sessions(cohort, 2)
    inactive = make_sessions(cohort, 2, is_active=False)
    attend(student, inactive)
    attend(other, active)

    summary = get_attendance_summary(db, student.id, cohort.id)

    assert (summary.attended, summary.total) == (0, 2)


def test_zero_sessions_fails_attendance(db, make_user, make_cohort):
    student = make_user()
    cohort = make_cohort(members=[student])

    summary = get_attendance_summary(db, student.id, cohort.id)

    assert summary.percentage == 0


def test_submission_summary_ignores_grading(db, make_user, make_cohort, make_assignments, submit):
    student = make_user()
    cohort = make_cohort(members=[student])
    assignments = make_assignments(cohort, 5)
    submit(student, assignments[:2])
    submit(student, assignments[2:3], status="graded")

    summary = get_submission_summary(db, student.id, cohort.id)

    assert (summary.submitted, summary.total) == (3, 5)
    assert summary.percentage == 60


def test_zero_assignments_satisfies_submissions(db, make_user, make_cohort):
    student = make_user()
    cohort = make_cohort(members=[student])

    assert get_submission_summary(db, student.id, cohort.id).percentage == 100


def test_status_is_persisted(db, make_user, make_cohort, make_sessions, attend, make_assignments, submit):
    student = make_user()
    cohort = make_cohort(members=[student])
    sessions = make_sessions(cohort, 10)
    attend(student, sessions[:8])
    assignments = make_assignments(cohort, 5)
    submit(student, assignments[:4])

    status = get_certificate_status(db, student.id, NOW)

    assert status["can_download"] is True
    assert status["overall_completion"] == 80
    certificate = db.query(Certificate).one()
    assert certificate.status == "requirements_met"
    assert certificate.completion_percentage == 80
    assert certificate.requirements_met == {"attendance": True, "assignments": True}
    assert certificate.certificate_code.startswith("CERT-")


def test_repeated_checks_do_not_duplicate(db, make_user, make_cohort, make_sessions, attend):
    student = make_user()
    cohort = make_cohort(members=[student])
    sessions = make_sessions(cohort, 4)
    attend(student, sessions[:3])

    first = get_certificate_status(db, student.id, NOW)
    code = first["certificate"].certificate_code
    second = get_certificate_status(db, student.id, NOW)

    assert db.query(Certificate).count() == 1
    assert second["certificate"].certificate_code == code
    assert second["overall_completion"] == first["overall_completion"]
    assert second["certificate"].status == "pending"


def test_status_can_regress(db, make_user, make_cohort, make_sessions, attend, make_assignments, submit):
    student = make_user()
    cohort = make_cohort(members=[student])
    attend(student, make_sessions(cohort, 5))
    assignments = make_assignments(cohort, 2)
    submit(student, assignments)

    assert get_certificate_status(db, student.id, NOW)["certificate"].status == "requirements_met"

    db.query(Submission).filter(Submission.assignment_id == assignments[0].id).delete()
    db.commit()

    status = get_certificate_status(db, student.id, NOW)
    assert status["certificate"].status == "pending"
    assert status["can_download"] is False


def test_get_or_create_returns_existing_record(db, make_user, make_cohort):
    student = make_user()
    cohort = make_cohort(members=[student])

    created = get_or_create_certificate(db, student.id, cohort.id, NOW)
    again = get_or_create_certificate(db, student.id, cohort.id, NOW)

    assert created.id == again.id
    assert created.status == "pending"
    assert created.completion_percentage == 0


def test_certificate_insert_race_returns_existing_record(db, make_user, make_cohort, monkeypatch):
    student = make_user()
    cohort = make_cohort(members=[student])
    existing_id = get_or_create_certificate(db, student.id, cohort.id, NOW).id

    real_find = crud_certificate._find_certificate
    calls = {"n": 0}

    def miss_first_lookup(*args, **kwargs):
        calls["n"] += 1
        if calls["n"] == 1:
            return None
        return real_find(*args, **kwargs)

    monkeypatch.setattr(crud_certificate, "_find_certificate", miss_first_lookup)

    certificate = crud_certificate.get_or_create_certificate(db, student.id, cohort.id, NOW)

    assert certificate.id == existing_id
    assert calls["n"] == 2
    assert db.query(Certificate).count() == 1
