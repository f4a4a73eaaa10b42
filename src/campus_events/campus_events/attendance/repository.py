from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol

from .model import Attendance


class AttendanceRepository(Protocol):
    def get_by_registration(self, registration_id: str) -> Optional[Attendance]:
        raise NotImplementedError

    def create(self, *, registration_id: str, checked_in_at: datetime, present: bool) -> Attendance:
        """Insert the attendance row of a registration.

        Raises DuplicateKeyError when the registration already has one.
        """

        raise NotImplementedError

    def upsert(self, *, registration_id: str, checked_in_at: datetime, present: bool) -> Attendance:
        """Create or update in place (single statement); returns the stored row."""

        raise NotImplementedError
