from __future__ import annotations

from datetime import timedelta

import pytest

from src.campus_events.campus_events.core.exceptions import (
    AlreadySubmittedError,
    NotFoundError,
    ValidationError,
)


@pytest.fixture
def registration(container, make_event, make_student, fixed_now):
    event = make_event()
    student = make_student()
    return container.registration_service.register(event.event_id, student_id=student.student_id, now=fixed_now)


@pytest.mark.parametrize("rating", [0, 6, -1, 3.5, "abc", True, None])
def test_rating_out_of_range_is_rejected(container, store, registration, rating):
    with pytest.raises(ValidationError):
        container.feedback_service.submit_feedback(registration.registration_id, rating)
    assert store.feedback == {}


@pytest.mark.parametrize("rating", [1, 5, "4", 3.0])
def test_rating_boundaries_are_accepted(container, registration, rating, fixed_now):
    feedback = container.feedback_service.submit_feedback(registration.registration_id, rating, now=fixed_now)
    assert feedback.rating == int(rating)
    assert feedback.submitted_at == fixed_now


def test_second_submission_conflicts_and_keeps_original(container, store, registration, fixed_now):
    svc = container.feedback_service
    original = svc.submit_feedback(registration.registration_id, 4, "Great session", now=fixed_now)

    with pytest.raises(AlreadySubmittedError) as exc:
        svc.submit_feedback(registration.registration_id, 1, "changed my mind", now=fixed_now + timedelta(days=1))

    assert exc.value.feedback == original
    assert exc.value.payload["feedback"]["rating"] == 4
    assert svc.feedback_status(registration.registration_id) == original
    assert len(store.feedback) == 1


def test_concurrent_submission_reports_stored_feedback(container, registration, fixed_now, monkeypatch):
    svc = container.feedback_service
    original = svc.submit_feedback(registration.registration_id, 5, now=fixed_now)

    repo = container.feedback_repo
    real_get = repo.get_by_registration
    calls = {"n": 0}

    def stale_get(registration_id):
        calls["n"] += 1
        return None if calls["n"] == 1 else real_get(registration_id)

    monkeypatch.setattr(repo, "get_by_registration", stale_get)

    with pytest.raises(AlreadySubmittedError) as exc:
        svc.submit_feedback(registration.registration_id, 2, now=fixed_now)
    assert exc.value.feedback.feedback_id == original.feedback_id


def test_comment_is_stripped_and_blank_becomes_none(container, make_event, make_student, fixed_now):
    event = make_event()
    regs = container.registration_service
    r1 = regs.register(event.event_id, student_id=make_student().student_id, now=fixed_now)
    r2 = regs.register(event.event_id, student_id=make_student().student_id, now=fixed_now)

    assert container.feedback_service.submit_feedback(r1.registration_id, 5, "  nice  ").comment == "nice"
    assert container.feedback_service.submit_feedback(r2.registration_id, 5, "   ").comment is None


def test_long_comment_is_rejected_not_truncated(container, store, registration):
    svc = container.feedback_service

    with pytest.raises(ValidationError) as exc:
        svc.submit_feedback(registration.registration_id, 3, "x" * 501)
    assert exc.value.details == ["comment: cannot exceed 500 characters"]
    assert store.feedback == {}

    assert svc.submit_feedback(registration.registration_id, 3, "x" * 500).comment == "x" * 500


def test_unknown_registration(container):
    with pytest.raises(NotFoundError):
        container.feedback_service.submit_feedback("missing", 3)
    assert container.feedback_service.feedback_status("missing") is None
