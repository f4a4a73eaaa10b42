from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import isoformat


@dataclass(frozen=True)
class Student:
    """Domain entity: Student. Email is globally unique."""

    student_id: str
    college_id: str
    name: str
    email: str
    roll_no: Optional[str] = None
    phone: Optional[str] = None
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.student_id,
            "college_id": self.college_id,
            "roll_no": self.roll_no,
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "created_at": isoformat(self.created_at),
        }
