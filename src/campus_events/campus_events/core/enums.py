from __future__ import annotations

from enum import Enum
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from ..attendance.model import Attendance


class EventType(str, Enum):
    WORKSHOP = "Workshop"
    HACKATHON = "Hackathon"
    SEMINAR = "Seminar"
    FEST = "Fest"
    CONFERENCE = "Conference"
    COMPETITION = "Competition"


class EventStatus(str, Enum):
    """Lifecycle of an event as stored in the database."""

    SCHEDULED = "scheduled"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


class RegistrationStatus(str, Enum):
    REGISTERED = "registered"


class CheckInMethod(str, Enum):
    MANUAL = "manual"
    QR = "qr"
    SELF = "self"


class AttendanceStatus(str, Enum):
    """Derived attendance state of a registration.

    There is no column for this: it is computed from the (optional) attendance row.
    """

    NOT_MARKED = "not_marked"
    PRESENT = "present"
    ABSENT = "absent"

    @classmethod
    def from_present(cls, present: Optional[bool]) -> "AttendanceStatus":
        if present is None:
            return cls.NOT_MARKED
        return cls.PRESENT if present else cls.ABSENT

    @classmethod
    def from_record(cls, record: Optional["Attendance"]) -> "AttendanceStatus":
        return cls.from_present(record.present if record else None)
