from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import isoformat


@dataclass(frozen=True)
class College:
    """Domain entity: a college that owns events and students."""

    college_id: str
    name: str
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {"id": self.college_id, "name": self.name, "created_at": isoformat(self.created_at)}
