from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import isoformat


@dataclass(frozen=True)
class Feedback:
    """Domain entity: rating/comment of a registration. Written once, never updated."""

    feedback_id: str
    registration_id: str
    rating: int
    submitted_at: datetime
    comment: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.feedback_id,
            "registration_id": self.registration_id,
            "rating": self.rating,
            "comment": self.comment,
            "submitted_at": isoformat(self.submitted_at),
        }
