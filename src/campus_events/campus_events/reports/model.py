from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import isoformat


def format_percentage(part: int, whole: int) -> str:
    """``part/whole`` as a percentage with two decimals; ``"0.00"`` for an empty whole."""

    if whole <= 0:
        return "0.00"
    return f"{part / whole * 100:.2f}"


def format_rating(avg: Optional[float]) -> Optional[str]:
    return f"{avg:.2f}" if avg is not None else None


@dataclass(frozen=True)
class EventPopularity:
    event_id: str
    title: str
    type: str
    start_time: datetime
    capacity: int
    college_name: Optional[str]
    registrations_count: int

    def to_dict(self) -> dict:
        return {
            "id": self.event_id,
            "title": self.title,
            "type": self.type,
            "start_time": isoformat(self.start_time),
            "capacity": self.capacity,
            "college_name": self.college_name,
            "registrations_count": self.registrations_count,
        }


@dataclass(frozen=True)
class EventAttendanceStats:
    """``attended`` counts present marks only."""

    event_id: str
    title: str
    start_time: datetime
    college_name: Optional[str]
    registrations: int
    attended: int

    @property
    def attendance_percentage(self) -> str:
        return format_percentage(self.attended, self.registrations)

    def to_dict(self) -> dict:
        return {
            "id": self.event_id,
            "title": self.title,
            "college_name": self.college_name,
            "start_time": isoformat(self.start_time),
            "registrations": self.registrations,
            "attended": self.attended,
            "attendance_percentage": self.attendance_percentage,
        }


@dataclass(frozen=True)
class FeedbackDetail:
    rating: int
    comment: Optional[str]
    submitted_at: datetime
    student_name: str

    def to_dict(self) -> dict:
        return {
            "rating": self.rating,
            "comment": self.comment,
            "submitted_at": isoformat(self.submitted_at),
            "name": self.student_name,
        }


@dataclass(frozen=True)
class EventFeedbackStats:
    event_id: str
    title: str
    start_time: datetime
    college_name: Optional[str]
    avg_rating: Optional[float]
    rating_count: int

    def to_dict(self) -> dict:
        return {
            "id": self.event_id,
            "title": self.title,
            "college_name": self.college_name,
            "start_time": isoformat(self.start_time),
            "avg_rating": format_rating(self.avg_rating),
            "rating_count": self.rating_count,
        }


@dataclass(frozen=True)
class ParticipationEvent:
    event_id: str
    title: str
    type: str
    start_time: datetime
    registered_at: datetime
    registration_status: str
    attended: bool

    def to_dict(self) -> dict:
        return {
            "id": self.event_id,
            "title": self.title,
            "type": self.type,
            "start_time": isoformat(self.start_time),
            "registered_at": isoformat(self.registered_at),
            "registration_status": self.registration_status,
            "attended": self.attended,
        }


@dataclass(frozen=True)
class StudentParticipation:
    """Per-student totals. ``events_attended`` counts attendance rows, present or not."""

    student_id: str
    name: str
    email: str
    events_registered: int
    events_attended: int
    events: list[ParticipationEvent] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "id": self.student_id,
            "name": self.name,
            "email": self.email,
            "events_registered": self.events_registered,
            "events_attended": self.events_attended,
            "events": [e.to_dict() for e in self.events],
        }


@dataclass(frozen=True)
class ActiveStudent:
    student_id: str
    name: str
    email: str
    roll_no: Optional[str]
    college_name: Optional[str]
    events_attended: int

    def to_dict(self) -> dict:
        return {
            "id": self.student_id,
            "name": self.name,
            "email": self.email,
            "roll_no": self.roll_no,
            "college_name": self.college_name,
            "events_attended": self.events_attended,
        }


@dataclass(frozen=True)
class EventRegistrationCount:
    event_id: str
    title: str
    type: str
    start_time: datetime
    college_name: Optional[str]
    registrations: int

    def to_dict(self) -> dict:
        return {
            "id": self.event_id,
            "title": self.title,
            "type": self.type,
            "start_time": isoformat(self.start_time),
            "college_name": self.college_name,
            "registrations": self.registrations,
        }
