from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import Student


class StudentRepository(Protocol):
    def get_by_id(self, student_id: str) -> Optional[Student]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[Student]:
        raise NotImplementedError

    def create(
        self,
        *,
        college_id: str,
        name: str,
        email: str,
        roll_no: Optional[str],
        phone: Optional[str],
        created_at: datetime,
    ) -> Student:
        """Insert a student. Raises DuplicateKeyError when the email is taken."""

        raise NotImplementedError

    def list_for_college(self, college_id: str) -> Sequence[Student]:
        raise NotImplementedError

    def delete(self, student_id: str) -> bool:
        """Delete a student; registrations (and their attendance/feedback) cascade."""

        raise NotImplementedError
