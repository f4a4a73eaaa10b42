from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import isoformat
from ..core.enums import EventStatus, EventType


@dataclass(frozen=True)
class Event:
    """Domain entity: Event. ``capacity == 0`` means unlimited."""

    event_id: str
    college_id: str
    title: str
    type: EventType
    start_time: datetime
    end_time: datetime
    capacity: int
    status: EventStatus
    description: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def is_unlimited(self) -> bool:
        return self.capacity == 0

    def available_spots(self, registered: int) -> Optional[int]:
        if self.is_unlimited:
            return None
        return max(0, self.capacity - registered)

    def is_full(self, registered: int) -> bool:
        return not self.is_unlimited and registered >= self.capacity

    def to_dict(self) -> dict:
        return {
            "id": self.event_id,
            "college_id": self.college_id,
            "title": self.title,
            "type": self.type.value,
            "description": self.description,
            "start_time": isoformat(self.start_time),
            "end_time": isoformat(self.end_time),
            "capacity": self.capacity,
            "status": self.status.value,
            "created_at": isoformat(self.created_at),
        }


@dataclass(frozen=True)
class EventSummary:
    """Read-model: event joined with its college name and live counts."""

    event: Event
    college_name: Optional[str]
    registrations_count: int
    attendance_count: Optional[int] = None

    def to_dict(self) -> dict:
        d = self.event.to_dict()
        d["college_name"] = self.college_name
        d["registrations_count"] = self.registrations_count
        if self.attendance_count is not None:
            d["attendance_count"] = self.attendance_count
        d["available_spots"] = self.event.available_spots(self.registrations_count)
        d["is_full"] = self.event.is_full(self.registrations_count)
        return d


@dataclass(frozen=True)
class EventFilters:
    college_id: Optional[str] = None
    type: Optional[EventType] = None
    status: Optional[EventStatus] = None
    start_from: Optional[datetime] = None
    start_to: Optional[datetime] = None
    q: Optional[str] = None
    page: int = 1
    limit: int = 20

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass(frozen=True)
class EventChanges:
    """Partial update requested by an admin; ``None`` means keep."""

    title: Optional[str] = None
    type: Optional[EventType] = None
    description: Optional[str] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    capacity: Optional[int] = None
    status: Optional[EventStatus] = None

    def apply(self, event: Event) -> Event:
        return Event(
            event_id=event.event_id,
            college_id=event.college_id,
            title=self.title if self.title is not None else event.title,
            type=self.type or event.type,
            description=self.description if self.description is not None else event.description,
            start_time=self.start_time or event.start_time,
            end_time=self.end_time or event.end_time,
            capacity=self.capacity if self.capacity is not None else event.capacity,
            status=self.status or event.status,
            created_at=event.created_at,
        )
