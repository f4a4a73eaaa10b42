from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

from ..common.validators import FieldErrors
from ..core.constants import DEFAULT_POPULARITY_LIMIT, DEFAULT_TOP_ACTIVE_LIMIT, MAX_PAGE_SIZE
from ..core.enums import EventStatus, EventType
from ..core.exceptions import NotFoundError
from ..events.model import EventFilters, EventSummary
from ..events.service import parse_pagination
from .model import (
    ActiveStudent,
    EventAttendanceStats,
    EventFeedbackStats,
    EventPopularity,
    EventRegistrationCount,
    FeedbackDetail,
    StudentParticipation,
)
from .repository import ReportRepository


def _limit(value: Any, default: int) -> int:
    errors = FieldErrors()
    limit = errors.integer(value, "limit", min_value=1, max_value=MAX_PAGE_SIZE)
    errors.raise_if_any("Invalid limit")
    return default if limit is None else limit


class ReportService:
    """Read-only reporting over registrations, attendance and feedback."""

    def __init__(self, reports: ReportRepository):
        self._reports = reports

    def popularity(
        self, *, college_id: Optional[str] = None, type: Any = None, limit: Any = None
    ) -> Sequence[EventPopularity]:
        errors = FieldErrors()
        event_type = errors.choice(type, "type", EventType)
        errors.raise_if_any("Invalid filter")
        return self._reports.popularity(
            college_id=college_id or None,
            type=event_type,
            limit=_limit(limit, DEFAULT_POPULARITY_LIMIT),
        )

    def attendance(self, *, college_id: Optional[str] = None) -> Sequence[EventAttendanceStats]:
        return self._reports.attendance(college_id=college_id or None)

    def event_attendance(self, event_id: str) -> EventAttendanceStats:
        rows = self._reports.attendance(event_id=event_id)
        if not rows:
            raise NotFoundError("Event not found")
        return rows[0]

    def feedback(self, *, college_id: Optional[str] = None) -> Sequence[EventFeedbackStats]:
        return self._reports.feedback(college_id=college_id or None)

    def event_feedback(self, event_id: str) -> tuple[EventFeedbackStats, Sequence[FeedbackDetail]]:
        rows = self._reports.feedback(event_id=event_id)
        if not rows:
            raise NotFoundError("Event not found")
        return rows[0], self._reports.feedback_details(event_id)

    def student_participation(self, student_id: str, *, college_id: Optional[str] = None) -> StudentParticipation:
        participation = self._reports.student_participation(student_id, college_id=college_id or None)
        if not participation:
            raise NotFoundError("Student not found")
        return participation

    def top_active(self, *, college_id: Optional[str] = None, limit: Any = None) -> Sequence[ActiveStudent]:
        return self._reports.top_active(
            college_id=college_id or None,
            limit=_limit(limit, DEFAULT_TOP_ACTIVE_LIMIT),
        )

    def registrations_per_event(
        self, *, college_id: Optional[str] = None, status: Any = EventStatus.SCHEDULED.value
    ) -> Sequence[EventRegistrationCount]:
        errors = FieldErrors()
        event_status = errors.choice(status, "status", EventStatus)
        errors.raise_if_any("Invalid filter")
        return self._reports.registrations_per_event(college_id=college_id or None, status=event_status)

    def filter_events(self, args: Mapping[str, Any]) -> tuple[Sequence[EventSummary], EventFilters]:
        errors = FieldErrors()
        event_type = errors.choice(args.get("type"), "type", EventType)
        date_from = errors.datetime(args.get("date_from"), "date_from")
        date_to = errors.datetime(args.get("date_to"), "date_to")
        errors.raise_if_any("Invalid filter")

        page, limit = parse_pagination(args)
        filters = EventFilters(
            college_id=args.get("college_id") or None,
            type=event_type,
            start_from=date_from,
            start_to=date_to,
            page=page,
            limit=limit,
        )
        return self._reports.filter_events(filters), filters
