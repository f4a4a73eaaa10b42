from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ..common.datetime_utils import isoformat
from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class Attendance:
    """Domain entity: attendance mark of a registration (0 or 1 per registration)."""

    attendance_id: str
    registration_id: str
    checked_in_at: datetime
    present: bool

    @property
    def status(self) -> AttendanceStatus:
        return AttendanceStatus.from_record(self)

    def to_dict(self) -> dict:
        return {
            "id": self.attendance_id,
            "registration_id": self.registration_id,
            "checked_in_at": isoformat(self.checked_in_at),
            "present": self.present,
            "attendance_status": self.status.value,
        }
