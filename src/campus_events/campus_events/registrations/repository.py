from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import Registration, RegistrationDetails, RegistrationLookup, RosterEntry


class RegistrationRepository(Protocol):
    def get_by_id(self, registration_id: str) -> Optional[Registration]:
        raise NotImplementedError

    def get_for_event_and_student(self, event_id: str, student_id: str) -> Optional[Registration]:
        raise NotImplementedError

    def create(self, *, event_id: str, student_id: str, registered_at: datetime) -> Registration:
        """Insert a registration.

        Raises DuplicateKeyError when (event_id, student_id) already exists.
        """

        raise NotImplementedError

    def get_details(self, registration_id: str) -> Optional[RegistrationDetails]:
        raise NotImplementedError

    def search_by_email(self, email: str) -> Sequence[RegistrationLookup]:
        """Registered registrations of the student with this email, latest event first."""

        raise NotImplementedError

    def roster_for_event(self, event_id: str) -> Sequence[RosterEntry]:
        """Registered students of an event with their attendance, ordered by name."""

        raise NotImplementedError
