from __future__ import annotations

from datetime import timedelta

import pytest

from src.campus_events.campus_events.core.enums import EventStatus
from src.campus_events.campus_events.core.exceptions import (
    AlreadyRegisteredError,
    DuplicateEmailError,
    EventCancelledError,
    EventFullError,
    NotFoundError,
    RegistrationClosedError,
    ValidationError,
)


def _new_student(svc, event_id, n, now, **overrides):
    fields = dict(student_id="new", name=f"New Student {n}", email=f"new{n}@campus.edu", now=now)
    fields.update(overrides)
    return svc.register(event_id, **fields)


def test_capacity_accepts_exactly_capacity_registrations(container, store, make_event, fixed_now):
    event = make_event(capacity=3)
    svc = container.registration_service

    for n in range(3):
        _new_student(svc, event.event_id, n, fixed_now)

    for n in range(3, 5):
        with pytest.raises(EventFullError):
            _new_student(svc, event.event_id, n, fixed_now)

    assert len(store.registered_for_event(event.event_id)) == 3
    # rejected attempts leave no student behind
    assert len(store.students) == 3


def test_cancelled_event_rejects_before_capacity(container, store, make_event, make_student, fixed_now):
    event = make_event(capacity=1)
    a, b, c = make_student(), make_student(), make_student()
    svc = container.registration_service
    events = container.event_service

    reg = svc.register(event.event_id, student_id=a.student_id, now=fixed_now)
    assert reg.student_id == a.student_id

    with pytest.raises(EventFullError):
        svc.register(event.event_id, student_id=b.student_id, now=fixed_now)

    events.cancel_event(event.event_id)
    assert store.events[event.event_id].status == EventStatus.CANCELLED

    with pytest.raises(EventCancelledError):
        svc.register(event.event_id, student_id=c.student_id, now=fixed_now)


def test_registration_closes_at_start_time(container, make_event, make_student, fixed_now):
    event = make_event(starts_in=timedelta(hours=1))
    student = make_student()

    with pytest.raises(RegistrationClosedError):
        container.registration_service.register(
            event.event_id, student_id=student.student_id, now=event.start_time
        )


def test_reregistering_returns_existing_registration(container, store, make_event, make_student, fixed_now):
    event = make_event()
    student = make_student()
    svc = container.registration_service

    first = svc.register(event.event_id, student_id=student.student_id, now=fixed_now)
    with pytest.raises(AlreadyRegisteredError) as exc:
        svc.register(event.event_id, student_id=student.student_id, now=fixed_now + timedelta(minutes=5))

    assert exc.value.registration.registration_id == first.registration_id
    assert exc.value.payload["registration"]["id"] == first.registration_id
    assert len(store.registrations) == 1


def test_duplicate_registration_wins_over_full_event(container, make_event, make_student, fixed_now):
    event = make_event(capacity=1)
    student = make_student()
    svc = container.registration_service
    svc.register(event.event_id, student_id=student.student_id, now=fixed_now)

    with pytest.raises(AlreadyRegisteredError):
        svc.register(event.event_id, student_id=student.student_id, now=fixed_now)


def test_new_student_is_created_in_event_college(container, store, make_event, fixed_now):
    event = make_event()
    reg = container.registration_service.register(
        event.event_id,
        student_id="new",
        name="  Jane Doe ",
        email="Jane.Doe@Campus.EDU",
        roll_no="21CS100",
        phone="+91 98765 43210",
        now=fixed_now,
    )

    student = store.students[reg.student_id]
    assert student.name == "Jane Doe"
    assert student.email == "jane.doe@campus.edu"
    assert student.college_id == event.college_id
    assert reg.registered_at == fixed_now


def test_new_student_with_taken_email_is_rejected(container, store, make_event, fixed_now):
    event_a = make_event()
    event_b = make_event()
    svc = container.registration_service

    svc.register(event_a.event_id, student_id="new", name="Jane Doe", email="jane@x.edu", now=fixed_now)
    before = dict(store.registrations)

    with pytest.raises(DuplicateEmailError):
        svc.register(event_b.event_id, student_id=None, name="Jane Again", email="JANE@x.edu", now=fixed_now)

    assert store.registrations == before
    assert len(store.students) == 1


def test_failed_registration_rolls_back_new_student(container, store, make_event, fixed_now, monkeypatch):
    event = make_event()
    registrations = container.registrations_repo

    def boom(**kwargs):
        raise RuntimeError("insert failed")

    monkeypatch.setattr(registrations, "create", boom)

    with pytest.raises(RuntimeError):
        _new_student(container.registration_service, event.event_id, 1, fixed_now)

    assert store.students == {}
    assert store.rollbacks == 1


def test_concurrent_duplicate_insert_reports_existing(container, store, make_event, make_student, fixed_now, monkeypatch):
    event = make_event()
    student = make_student()
    svc = container.registration_service
    first = svc.register(event.event_id, student_id=student.student_id, now=fixed_now)

    registrations = container.registrations_repo
    real_lookup = registrations.get_for_event_and_student
    calls = {"n": 0}

    def stale_lookup(event_id, student_id):
        # The first read happens "before" the other writer commits.
        calls["n"] += 1
        return None if calls["n"] == 1 else real_lookup(event_id, student_id)

    monkeypatch.setattr(registrations, "get_for_event_and_student", stale_lookup)

    with pytest.raises(AlreadyRegisteredError) as exc:
        svc.register(event.event_id, student_id=student.student_id, now=fixed_now)

    assert exc.value.registration.registration_id == first.registration_id
    assert len(store.registrations) == 1


def test_unknown_event_and_student(container, make_event, fixed_now):
    svc = container.registration_service
    with pytest.raises(NotFoundError):
        svc.register("missing", student_id="new", name="Jane Doe", email="jane@x.edu", now=fixed_now)

    event = make_event()
    with pytest.raises(NotFoundError):
        svc.register(event.event_id, student_id="STUD_404", now=fixed_now)


def test_existing_student_ignores_contact_fields(container, store, make_event, make_student, fixed_now):
    event = make_event()
    student = make_student()

    container.registration_service.register(
        event.event_id, student_id=student.student_id, name="x", email="not-an-email", now=fixed_now
    )

    assert store.students[student.student_id].email == student.email


@pytest.mark.parametrize(
    "fields,expected",
    [
        ({"name": "J", "email": "j@x.edu"}, "name: must be at least 2 characters long"),
        ({"name": "Jane", "email": "not-an-email"}, "email: must be a valid email address"),
        ({"name": "Jane"}, "email: is required"),
        ({"name": "Jane", "email": "j@x.edu", "phone": "12ab"}, "phone: must be a valid phone number"),
        ({"name": "Jane", "email": "j@x.edu", "roll_no": "R" * 51}, "roll_no: cannot exceed 50 characters"),
    ],
)
def test_new_student_contact_validation(container, store, make_event, fixed_now, fields, expected):
    event = make_event()

    with pytest.raises(ValidationError) as exc:
        container.registration_service.register(event.event_id, student_id="new", now=fixed_now, **fields)

    assert expected in exc.value.details
    assert store.registrations == {}


def test_unlimited_capacity_never_fills(container, make_event, fixed_now):
    event = make_event(capacity=0)
    svc = container.registration_service

    for n in range(25):
        _new_student(svc, event.event_id, n, fixed_now)

    summary = container.event_service.get_event(event.event_id)
    assert summary.registrations_count == 25
    assert summary.to_dict()["available_spots"] is None
    assert summary.to_dict()["is_full"] is False


def test_registration_locks_event_row(container, make_event, make_student, fixed_now):
    event = make_event()
    student = make_student()

    container.registration_service.register(event.event_id, student_id=student.student_id, now=fixed_now)

    assert container.events_repo.locked == [event.event_id]


def test_search_by_email_and_details(container, make_event, make_student, fixed_now):
    early = make_event(starts_in=timedelta(days=2), title="Early")
    late = make_event(starts_in=timedelta(days=9), title="Late")
    student = make_student(email="arjun@campus.edu")
    svc = container.registration_service
    svc.register(early.event_id, student_id=student.student_id, now=fixed_now)
    reg = svc.register(late.event_id, student_id=student.student_id, now=fixed_now)

    found = svc.search_by_email("  ARJUN@campus.edu ")
    assert [r.event_title for r in found] == ["Late", "Early"]

    details, summary = svc.get_details(reg.registration_id)
    assert details.student_email == "arjun@campus.edu"
    assert summary.event.event_id == late.event_id
    assert summary.college_name == "Tech University"

    with pytest.raises(ValidationError):
        svc.search_by_email("")
    with pytest.raises(NotFoundError):
        svc.get_details("nope")
