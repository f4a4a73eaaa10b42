from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import EventStatus, EventType
from ..events.model import EventFilters, EventSummary
from .model import (
    ActiveStudent,
    EventAttendanceStats,
    EventFeedbackStats,
    EventPopularity,
    EventRegistrationCount,
    FeedbackDetail,
    StudentParticipation,
)


class ReportRepository(Protocol):
    """Read-only aggregates. Counting happens in the store, formatting does not."""

    def popularity(
        self, *, college_id: Optional[str], type: Optional[EventType], limit: int
    ) -> Sequence[EventPopularity]:
        """Events by registered count, most popular first."""

        raise NotImplementedError

    def attendance(
        self, *, event_id: Optional[str] = None, college_id: Optional[str] = None
    ) -> Sequence[EventAttendanceStats]:
        """Newest event first."""

        raise NotImplementedError

    def feedback(
        self, *, event_id: Optional[str] = None, college_id: Optional[str] = None
    ) -> Sequence[EventFeedbackStats]:
        raise NotImplementedError

    def feedback_details(self, event_id: str) -> Sequence[FeedbackDetail]:
        """Most recent submission first."""

        raise NotImplementedError

    def student_participation(
        self, student_id: str, *, college_id: Optional[str] = None
    ) -> Optional[StudentParticipation]:
        raise NotImplementedError

    def top_active(self, *, college_id: Optional[str], limit: int) -> Sequence[ActiveStudent]:
        raise NotImplementedError

    def registrations_per_event(
        self, *, college_id: Optional[str], status: Optional[EventStatus]
    ) -> Sequence[EventRegistrationCount]:
        raise NotImplementedError

    def filter_events(self, filters: EventFilters) -> Sequence[EventSummary]:
        """Events with registered and present counts, newest first."""

        raise NotImplementedError
