import os
from datetime import date, datetime, time

import pytest

os.environ.setdefault("DATABASE_URL", "sqlite://")

from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from lms_api.api.deps import get_db  # noqa: E402
from lms_api.core.clock import Clock, get_clock  # noqa: E402
from lms_api.core.security import create_access_token  # noqa: E402
from lms_api.db import Base  # noqa: E402
from lms_api.db.models import (  # noqa: E402
    Assignment,
    AssignmentLink,
    AttendanceRecord,
    Cohort,
    CohortMember,
    ScheduledSession,
    Submission,
    User,
)
from lms_api.main import app  # noqa: E402


class FixedClock(Clock):
    def __init__(self, moment: datetime):
        self.moment = moment

    def now(self) -> datetime:
        return self.moment


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(engine):
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    yield session
    session.close()


@pytest.fixture
def clock():
    # day 3 of a cohort starting 2025-03-10
    return FixedClock(datetime(2025, 3, 12, 8, 30, 0))


@pytest.fixture
def client(db, clock):
    app.dependency_overrides[get_db] = lambda: db
    app.dependency_overrides[get_clock] = lambda: clock
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


# ---- factories ----

@pytest.fixture
def make_user(db):
    counter = {"n": 0}

    def _make(role="student", email=None, full_name="Test User"):
        counter["n"] += 1
        user = User(
            email=email or f"{role}{counter['n']}@lms.local",
            hashed_password="not-a-real-hash",
            full_name=full_name,
            role=role,
            is_active=True,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make


@pytest.fixture
def make_cohort(db):
    def _make(name="Python Bootcamp", start=date(2025, 3, 10), end=date(2025, 3, 14), is_active=True, members=()):
        cohort = Cohort(name=name, start_date=start, end_date=end, is_active=is_active)
        db.add(cohort)
        db.commit()
        for user in members:
            db.add(CohortMember(class_id=cohort.id, user_id=user.id))
        db.commit()
        db.refresh(cohort)
        return cohort

    return _make


@pytest.fixture
def make_sessions(db):
    def _make(cohort, count, day_number=1, start_time=time(9, 0, 0), is_active=True):
        sessions = []
        for i in range(count):
            s = ScheduledSession(
                class_id=cohort.id,
                day_number=day_number,
                title=f"Module {i + 1}",
                start_time=start_time,
                end_time=time(17, 0, 0),
                order_index=i,
                is_active=is_active,
            )
            db.add(s)
            sessions.append(s)
        db.commit()
        for s in sessions:
            db.refresh(s)
        return sessions

    return _make


@pytest.fixture
def attend(db):
    def _attend(user, sessions, status="present"):
        for s in sessions:
            db.add(AttendanceRecord(
                user_id=user.id,
                class_id=s.class_id,
                schedule_id=s.id,
                status=status,
                check_in_time=datetime(2025, 3, 10, 9, 0, 0),
            ))
        db.commit()

    return _attend


@pytest.fixture
def make_assignments(db, make_user):
    def _make(cohort, count):
        trainer = make_user(role="trainer")
        assignments = []
        for i in range(count):
            a = Assignment(title=f"Homework {i + 1}", created_by=trainer.id)
            db.add(a)
            db.commit()
            db.add(AssignmentLink(class_id=cohort.id, assignment_id=a.id))
            db.commit()
            db.refresh(a)
            assignments.append(a)
        return assignments

    return _make


@pytest.fixture
def submit(db):
    def _submit(user, assignments, status="submitted"):
        for a in assignments:
            db.add(Submission(
                assignment_id=a.id,
                user_id=user.id,
                content="done",
                status=status,
                submitted_at=datetime(2025, 3, 11, 12, 0, 0),
            ))
        db.commit()

    return _submit


@pytest.fixture
def auth_headers():
    def _headers(user):
        token = create_access_token(user.email, role=user.role)
        return {"Authorization": f"Bearer {token}"}

    return _headers
