from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Mapping, Optional, Sequence

from ..colleges.model import College
from ..colleges.repository import CollegeRepository
from ..common.datetime_utils import now_utc
from ..common.transaction import Transaction
from ..common.validators import FieldErrors
from ..core.constants import DEFAULT_CAPACITY, DEFAULT_PAGE_SIZE, MAX_CAPACITY, MAX_PAGE_SIZE, UNLIMITED_CAPACITY
from ..core.enums import EventStatus, EventType
from ..core.exceptions import DuplicateKeyError, NotFoundError
from ..students.model import Student
from ..students.repository import StudentRepository
from .model import Event, EventChanges, EventFilters, EventSummary
from .repository import EventRepository

logger = logging.getLogger(__name__)


def _page_number(value: Any, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def parse_pagination(args: Mapping[str, Any]) -> tuple[int, int]:
    """Lenient ``page``/``limit`` parsing: garbage falls back, ranges are clamped."""

    page = max(1, _page_number(args.get("page"), 1))
    limit = _page_number(args.get("limit"), DEFAULT_PAGE_SIZE)
    limit = min(MAX_PAGE_SIZE, max(1, limit))
    return page, limit


class EventService:
    """Event administration and browsing.

    Colleges are created implicitly: an event names its college, and an
    unknown name becomes a new college in the same transaction.
    """

    def __init__(
        self,
        colleges: CollegeRepository,
        events: EventRepository,
        students: StudentRepository,
        *,
        transaction: Transaction,
    ):
        self._colleges = colleges
        self._events = events
        self._students = students
        self._transaction = transaction

    # --- admin: events ---

    def create_event(self, payload: Mapping[str, Any], *, now: Optional[datetime] = None) -> EventSummary:
        now = now or now_utc()
        errors = FieldErrors()
        college_name = errors.string(payload.get("college_name"), "college_name", required=True, min_len=2, max_len=255)
        title = errors.string(payload.get("title"), "title", required=True, min_len=3, max_len=200)
        event_type = errors.choice(payload.get("type"), "type", EventType, required=True)
        description = errors.string(payload.get("description"), "description", max_len=1000)
        start_time = errors.datetime(payload.get("start_time"), "start_time", required=True)
        end_time = errors.datetime(payload.get("end_time"), "end_time", required=True)
        capacity = errors.integer(
            payload.get("capacity"), "capacity", min_value=UNLIMITED_CAPACITY, max_value=MAX_CAPACITY
        )
        status = errors.choice(payload.get("status"), "status", EventStatus)
        if start_time and end_time and end_time <= start_time:
            errors.add("end_time", "must be after start time")
        errors.raise_if_any()

        with self._transaction():
            college = self._find_or_create_college(college_name, now)
            event = self._events.create(
                Event(
                    event_id="",
                    college_id=college.college_id,
                    title=title,
                    type=event_type,
                    description=description,
                    start_time=start_time,
                    end_time=end_time,
                    capacity=DEFAULT_CAPACITY if capacity is None else capacity,
                    status=status or EventStatus.SCHEDULED,
                    created_at=now,
                )
            )

        logger.info("Created event %s (%s) for college %s", event.event_id, event.title, college.name)
        return EventSummary(event=event, college_name=college.name, registrations_count=0, attendance_count=0)

    def _find_or_create_college(self, name: str, now: datetime) -> College:
        college = self._colleges.get_by_name(name)
        if college:
            return college
        try:
            college = self._colleges.create(name=name, created_at=now)
        except DuplicateKeyError:
            college = self._colleges.get_by_name(name)
            if college is None:
                raise
            return college
        logger.info("Created new college %s (%s)", college.name, college.college_id)
        return college

    def update_event(self, event_id: str, payload: Mapping[str, Any]) -> EventSummary:
        """Partial update. Only keys present in ``payload`` change.

        ``end_time > start_time`` is checked on the merged event, so moving
        just one of the two bounds is validated against the stored other one.
        """

        errors = FieldErrors()
        changes = EventChanges(
            title=errors.string(payload.get("title"), "title", min_len=3, max_len=200),
            type=errors.choice(payload.get("type"), "type", EventType),
            description=errors.string(payload.get("description"), "description", max_len=1000),
            start_time=errors.datetime(payload.get("start_time"), "start_time"),
            end_time=errors.datetime(payload.get("end_time"), "end_time"),
            capacity=errors.integer(
                payload.get("capacity"), "capacity", min_value=UNLIMITED_CAPACITY, max_value=MAX_CAPACITY
            ),
            status=errors.choice(payload.get("status"), "status", EventStatus),
        )
        errors.raise_if_any()

        with self._transaction():
            current = self._events.get_for_update(event_id)
            if not current:
                raise NotFoundError("Event not found")
            updated = changes.apply(current)
            if updated.end_time <= updated.start_time:
                errors.add("end_time", "must be after start time")
                errors.raise_if_any()
            self._events.update(updated)
            summary = self._events.get_summary(event_id)

        logger.info("Updated event %s", event_id)
        return summary

    def cancel_event(self, event_id: str) -> Event:
        with self._transaction():
            current = self._events.get_for_update(event_id)
            if not current:
                raise NotFoundError("Event not found")
            cancelled = EventChanges(status=EventStatus.CANCELLED).apply(current)
            self._events.update(cancelled)

        logger.info("Cancelled event %s", event_id)
        return cancelled

    def delete_event(self, event_id: str) -> None:
        with self._transaction():
            if not self._events.delete(event_id):
                raise NotFoundError("Event not found")
        logger.warning("Deleted event %s with its registrations", event_id)

    # --- browsing ---

    def _filters(self, args: Mapping[str, Any], *, default_status: Optional[EventStatus]) -> EventFilters:
        errors = FieldErrors()
        event_type = errors.choice(args.get("type"), "type", EventType)
        status = errors.choice(args.get("status"), "status", EventStatus)
        start_from = errors.datetime(args.get("from"), "from")
        start_to = errors.datetime(args.get("to"), "to")
        errors.raise_if_any("Invalid filter")

        page, limit = parse_pagination(args)
        q = args.get("q")
        return EventFilters(
            college_id=args.get("college_id") or None,
            type=event_type,
            status=status or default_status,
            start_from=start_from,
            start_to=start_to,
            q=q.strip() if isinstance(q, str) and q.strip() else None,
            page=page,
            limit=limit,
        )

    def list_public(self, args: Mapping[str, Any]) -> tuple[Sequence[EventSummary], EventFilters]:
        filters = self._filters(args, default_status=EventStatus.SCHEDULED)
        return self._events.list_public(filters), filters

    def list_admin(self, args: Mapping[str, Any]) -> tuple[Sequence[EventSummary], EventFilters]:
        filters = self._filters(args, default_status=None)
        return self._events.list_admin(filters), filters

    def get_event(self, event_id: str) -> EventSummary:
        summary = self._events.get_summary(event_id)
        if not summary:
            raise NotFoundError("Event not found")
        return summary

    # --- colleges and students ---

    def list_colleges(self) -> Sequence[College]:
        return self._colleges.list_all()

    def list_college_students(self, college_id: str) -> Sequence[Student]:
        if not self._colleges.get_by_id(college_id):
            raise NotFoundError("College not found")
        return self._students.list_for_college(college_id)

    def delete_college(self, college_id: str) -> None:
        with self._transaction():
            if not self._colleges.delete(college_id):
                raise NotFoundError("College not found")
        logger.warning("Deleted college %s with its students and events", college_id)

    def delete_student(self, student_id: str) -> None:
        with self._transaction():
            if not self._students.delete(student_id):
                raise NotFoundError("Student not found")
        logger.warning("Deleted student %s with their registrations", student_id)
