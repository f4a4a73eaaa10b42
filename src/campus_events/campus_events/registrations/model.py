from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import isoformat
from ..core.enums import AttendanceStatus, RegistrationStatus


@dataclass(frozen=True)
class Registration:
    """Domain entity: a student's registration for an event.

    Unique on (event_id, student_id).
    """

    registration_id: str
    event_id: str
    student_id: str
    registered_at: datetime
    status: RegistrationStatus = RegistrationStatus.REGISTERED

    def to_dict(self) -> dict:
        return {
            "id": self.registration_id,
            "event_id": self.event_id,
            "student_id": self.student_id,
            "registered_at": isoformat(self.registered_at),
            "status": self.status.value,
        }


@dataclass(frozen=True)
class RosterEntry:
    """Read-model for admin attendance marking: registration + student + attendance."""

    registration_id: str
    student_id: str
    name: str
    email: str
    roll_no: Optional[str]
    phone: Optional[str]
    registered_at: datetime
    attendance_status: AttendanceStatus
    attendance_id: Optional[str] = None
    checked_in_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "registration_id": self.registration_id,
            "student_id": self.student_id,
            "name": self.name,
            "email": self.email,
            "roll_no": self.roll_no,
            "phone": self.phone,
            "registered_at": isoformat(self.registered_at),
            "attendance_id": self.attendance_id,
            "attendance_status": self.attendance_status.value,
            "checked_in_at": isoformat(self.checked_in_at),
        }


@dataclass(frozen=True)
class RegistrationLookup:
    """Row of the "find my registrations by email" search."""

    registration_id: str
    registered_at: datetime
    event_id: str
    event_title: str
    event_date: datetime

    def to_dict(self) -> dict:
        return {
            "id": self.registration_id,
            "registered_at": isoformat(self.registered_at),
            "event_id": self.event_id,
            "event_title": self.event_title,
            "event_date": isoformat(self.event_date),
        }


@dataclass(frozen=True)
class RegistrationDetails:
    registration: Registration
    student_name: str
    student_email: str

    def to_dict(self) -> dict:
        d = self.registration.to_dict()
        d["name"] = self.student_name
        d["email"] = self.student_email
        return d
