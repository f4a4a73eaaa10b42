from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import College


class CollegeRepository(Protocol):
    def get_by_id(self, college_id: str) -> Optional[College]:
        raise NotImplementedError

    def get_by_name(self, name: str) -> Optional[College]:
        raise NotImplementedError

    def create(self, *, name: str, created_at: datetime) -> College:
        """Insert a college. Raises DuplicateKeyError when the name is taken."""

        raise NotImplementedError

    def list_all(self) -> Sequence[College]:
        raise NotImplementedError

    def delete(self, college_id: str) -> bool:
        """Delete a college; students and events go with it (FK cascade)."""

        raise NotImplementedError
