from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol

from .model import Feedback


class FeedbackRepository(Protocol):
    def get_by_registration(self, registration_id: str) -> Optional[Feedback]:
        raise NotImplementedError

    def create(
        self,
        *,
        registration_id: str,
        rating: int,
        comment: Optional[str],
        submitted_at: datetime,
    ) -> Feedback:
        """Insert feedback. Raises DuplicateKeyError when the registration already has one."""

        raise NotImplementedError
