from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from src.campus_events.campus_events.colleges.model import College
from src.campus_events.campus_events.container import Container, build_services
from src.campus_events.campus_events.core.enums import EventStatus, EventType
from src.campus_events.campus_events.events.model import Event
from src.campus_events.campus_events.main import create_app
from src.campus_events.campus_events.students.model import Student
from tests.fakes import (
    InMemoryAttendance,
    InMemoryColleges,
    InMemoryEvents,
    InMemoryFeedback,
    InMemoryRegistrations,
    InMemoryReports,
    InMemoryStore,
    InMemoryStudents,
)

ADMIN_TOKEN = "test-admin-token"


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 3, 2, 9, 0, 0)


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def container(store: InMemoryStore) -> Container:
    return build_services(
        conn=None,
        colleges_repo=InMemoryColleges(store),
        students_repo=InMemoryStudents(store),
        events_repo=InMemoryEvents(store),
        registrations_repo=InMemoryRegistrations(store),
        attendance_repo=InMemoryAttendance(store),
        feedback_repo=InMemoryFeedback(store),
        reports_repo=InMemoryReports(store),
        transaction=store.transaction,
        public_base_url="http://testserver",
    )


@pytest.fixture
def college(store: InMemoryStore, fixed_now: datetime) -> College:
    c = College(college_id="COL_A", name="Tech University", created_at=fixed_now - timedelta(days=30))
    store.colleges[c.college_id] = c
    return c


@pytest.fixture
def make_event(store: InMemoryStore, college: College, fixed_now: datetime):
    counter = {"n": 0}

    def _make(
        *,
        capacity: int = 100,
        status: EventStatus = EventStatus.SCHEDULED,
        starts_in: timedelta = timedelta(days=7),
        type: EventType = EventType.WORKSHOP,
        title: str = "",
    ) -> Event:
        counter["n"] += 1
        start = fixed_now + starts_in
        event = Event(
            event_id=f"EVENT_{counter['n']}",
            college_id=college.college_id,
            title=title or f"Event {counter['n']}",
            type=type,
            start_time=start,
            end_time=start + timedelta(hours=3),
            capacity=capacity,
            status=status,
            created_at=fixed_now - timedelta(days=10) + timedelta(minutes=counter["n"]),
        )
        store.events[event.event_id] = event
        return event

    return _make


@pytest.fixture
def make_student(store: InMemoryStore, college: College, fixed_now: datetime):
    counter = {"n": 0}

    def _make(name: str = "", email: str = "") -> Student:
        counter["n"] += 1
        n = counter["n"]
        student = Student(
            student_id=f"STUD_{n}",
            college_id=college.college_id,
            name=name or f"Student {n}",
            email=email or f"student{n}@campus.edu",
            roll_no=f"21CS{n:03d}",
            phone=None,
            created_at=fixed_now - timedelta(days=5),
        )
        store.students[student.student_id] = student
        return student

    return _make


@pytest.fixture
def app(container: Container):
    return create_app(
        settings_override={"ADMIN_TOKEN": ADMIN_TOKEN, "DEBUG": False, "LOG_LEVEL": "WARNING"},
        container=container,
    )


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_headers() -> dict:
    return {"X-Admin-Token": ADMIN_TOKEN}


@pytest.fixture
def frozen_clock(monkeypatch, fixed_now: datetime) -> datetime:
    """Pin ``now_utc()`` in the services so HTTP tests see ``fixed_now``."""

    from src.campus_events.campus_events.attendance import service as attendance_service
    from src.campus_events.campus_events.events import service as event_service
    from src.campus_events.campus_events.feedback import service as feedback_service
    from src.campus_events.campus_events.registrations import service as registration_service

    for module in (attendance_service, event_service, feedback_service, registration_service):
        monkeypatch.setattr(module, "now_utc", lambda: fixed_now)
    return fixed_now
