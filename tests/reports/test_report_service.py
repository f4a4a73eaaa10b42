from __future__ import annotations

from datetime import timedelta

import pytest

from src.campus_events.campus_events.core.enums import EventStatus, EventType
from src.campus_events.campus_events.core.exceptions import NotFoundError, ValidationError
from src.campus_events.campus_events.reports.model import format_percentage, format_rating


@pytest.fixture
def campus(container, make_event, make_student, fixed_now):
    """Three events, four students.

    big:   ana (present), ben (present), cho (absent), dev (not marked)
    small: ana (present)
    empty: no registrations
    """

    big = make_event(title="Big Workshop", starts_in=timedelta(days=1))
    small = make_event(title="Small Seminar", type=EventType.SEMINAR, starts_in=timedelta(days=2))
    empty = make_event(title="Empty Fest", type=EventType.FEST, starts_in=timedelta(days=3))
    ana, ben, cho, dev = (make_student(n) for n in ("Ana", "Ben", "Cho", "Dev"))

    regs = container.registration_service
    att = container.attendance_service
    fb = container.feedback_service

    r = {s.name: regs.register(big.event_id, student_id=s.student_id, now=fixed_now) for s in (ana, ben, cho, dev)}
    small_ana = regs.register(small.event_id, student_id=ana.student_id, now=fixed_now)

    att.mark_attendance(r["Ana"].registration_id, True, now=fixed_now)
    att.mark_attendance(r["Ben"].registration_id, True, now=fixed_now)
    att.mark_attendance(r["Cho"].registration_id, False, now=fixed_now)
    att.check_in(small_ana.registration_id, now=fixed_now)

    fb.submit_feedback(r["Ana"].registration_id, 5, "Loved it", now=fixed_now + timedelta(hours=1))
    fb.submit_feedback(r["Ben"].registration_id, 4, now=fixed_now + timedelta(hours=2))
    fb.submit_feedback(r["Cho"].registration_id, 4, "ok", now=fixed_now + timedelta(hours=3))

    return {"big": big, "small": small, "empty": empty, "students": {"Ana": ana, "Ben": ben, "Cho": cho, "Dev": dev}}


def test_format_helpers():
    assert format_percentage(0, 0) == "0.00"
    assert format_percentage(1, 3) == "33.33"
    assert format_percentage(2, 2) == "100.00"
    assert format_rating(None) is None
    assert format_rating(13 / 3) == "4.33"


def test_popularity_orders_by_registrations(container, campus):
    rows = container.report_service.popularity()
    assert [(r.title, r.registrations_count) for r in rows] == [
        ("Big Workshop", 4),
        ("Small Seminar", 1),
        ("Empty Fest", 0),
    ]

    assert [r.title for r in container.report_service.popularity(limit="1")] == ["Big Workshop"]
    assert [r.title for r in container.report_service.popularity(type="Seminar")] == ["Small Seminar"]


def test_popularity_rejects_bad_arguments(container):
    with pytest.raises(ValidationError):
        container.report_service.popularity(type="Party")
    with pytest.raises(ValidationError):
        container.report_service.popularity(limit="0")


def test_attendance_counts_present_marks_only(container, campus):
    stats = container.report_service.event_attendance(campus["big"].event_id)

    assert stats.registrations == 4
    assert stats.attended == 2
    assert stats.to_dict()["attendance_percentage"] == "50.00"

    empty = container.report_service.event_attendance(campus["empty"].event_id)
    assert empty.to_dict()["attendance_percentage"] == "0.00"

    rows = container.report_service.attendance()
    assert [r.title for r in rows] == ["Empty Fest", "Small Seminar", "Big Workshop"]

    with pytest.raises(NotFoundError):
        container.report_service.event_attendance("missing")


def test_feedback_report(container, campus):
    stats, details = container.report_service.event_feedback(campus["big"].event_id)

    assert stats.rating_count == 3
    assert stats.to_dict()["avg_rating"] == "4.33"
    assert [d.student_name for d in details] == ["Cho", "Ben", "Ana"]

    rows = {r.title: r for r in container.report_service.feedback()}
    assert rows["Small Seminar"].to_dict()["avg_rating"] is None
    assert rows["Small Seminar"].rating_count == 0

    with pytest.raises(NotFoundError):
        container.report_service.event_feedback("missing")


def test_student_participation(container, campus, college):
    ana = campus["students"]["Ana"]
    dev = campus["students"]["Dev"]

    report = container.report_service.student_participation(ana.student_id)
    assert report.events_registered == 2
    assert report.events_attended == 2
    assert [e.title for e in report.events] == ["Small Seminar", "Big Workshop"]
    assert all(e.attended for e in report.events)

    report = container.report_service.student_participation(dev.student_id, college_id=college.college_id)
    assert report.events_attended == 0
    assert report.to_dict()["events"][0]["attended"] is False

    with pytest.raises(NotFoundError):
        container.report_service.student_participation(ana.student_id, college_id="OTHER")
    with pytest.raises(NotFoundError):
        container.report_service.student_participation("missing")


def test_top_active_counts_absent_marks_too(container, campus):
    rows = container.report_service.top_active(limit=10)

    counts = {r.name: r.events_attended for r in rows}
    # Cho was marked absent, yet the row counts as activity. Dev has no row at all.
    assert counts == {"Ana": 2, "Ben": 1, "Cho": 1}
    assert rows[0].name == "Ana"

    assert len(container.report_service.top_active()) == 3
    assert len(container.report_service.top_active(limit=1)) == 1


def test_registrations_per_event_defaults_to_scheduled(container, campus, make_event):
    make_event(title="Cancelled Talk", status=EventStatus.CANCELLED)

    rows = container.report_service.registrations_per_event()
    assert [(r.title, r.registrations) for r in rows] == [
        ("Big Workshop", 4),
        ("Small Seminar", 1),
        ("Empty Fest", 0),
    ]

    rows = container.report_service.registrations_per_event(status="cancelled")
    assert [r.title for r in rows] == ["Cancelled Talk"]

    rows = container.report_service.registrations_per_event(status="")
    assert len(rows) == 4


def test_filter_events_report(container, campus, fixed_now):
    events, filters = container.report_service.filter_events(
        {"date_from": (fixed_now + timedelta(days=2)).isoformat(), "limit": "10"}
    )

    assert [s.event.title for s in events] == ["Empty Fest", "Small Seminar"]
    assert events[1].attendance_count == 1
    assert filters.limit == 10

    events, _ = container.report_service.filter_events({"type": "Workshop"})
    assert [(s.registrations_count, s.attendance_count) for s in events] == [(4, 2)]
