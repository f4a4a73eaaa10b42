from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import EventStatus, EventType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_bool, db_cursor, fetchall, fetchone
from ..events.model import EventFilters, EventSummary
from ..events.mysql_event_repository import (
    EVENT_COLUMNS,
    PRESENT_COUNT_SQL,
    REGISTERED_COUNT_SQL,
    filters_where,
    to_event_summary,
)
from .model import (
    ActiveStudent,
    EventAttendanceStats,
    EventFeedbackStats,
    EventPopularity,
    EventRegistrationCount,
    FeedbackDetail,
    ParticipationEvent,
    StudentParticipation,
)
from .repository import ReportRepository


def _conditions(pairs: Sequence[tuple[str, object]]) -> tuple[str, list[object]]:
    clauses = [sql for sql, value in pairs if value is not None]
    params = [value for _, value in pairs if value is not None]
    return ("WHERE " + " AND ".join(clauses)) if clauses else "", params


class MySQLReportRepository(ReportRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def popularity(
        self, *, college_id: Optional[str], type: Optional[EventType], limit: int
    ) -> Sequence[EventPopularity]:
        where, params = _conditions(
            [("e.college_id=%s", college_id), ("e.type=%s", type.value if type else None)]
        )
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT e.id, e.title, e.type, e.start_time, e.capacity, c.name AS college_name,
                       COUNT(r.id) AS registrations_count
                FROM events e
                LEFT JOIN colleges c ON c.id = e.college_id
                LEFT JOIN registrations r ON r.event_id = e.id AND r.status = 'registered'
                {where}
                GROUP BY e.id, e.title, e.type, e.start_time, e.capacity, c.name
                ORDER BY registrations_count DESC, e.start_time ASC
                LIMIT %s
                """,
                tuple(params + [int(limit)]),
            )
            return [
                EventPopularity(
                    event_id=r["id"],
                    title=r["title"],
                    type=r["type"],
                    start_time=r["start_time"],
                    capacity=int(r["capacity"]),
                    college_name=r.get("college_name"),
                    registrations_count=int(r["registrations_count"]),
                )
                for r in fetchall(cur)
            ]

    def attendance(
        self, *, event_id: Optional[str] = None, college_id: Optional[str] = None
    ) -> Sequence[EventAttendanceStats]:
        where, params = _conditions([("e.id=%s", event_id), ("e.college_id=%s", college_id)])
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT e.id, e.title, e.start_time, c.name AS college_name,
                       COUNT(r.id) AS registrations,
                       COUNT(CASE WHEN a.present = 1 THEN 1 END) AS attended
                FROM events e
                LEFT JOIN colleges c ON c.id = e.college_id
                LEFT JOIN registrations r ON r.event_id = e.id AND r.status = 'registered'
                LEFT JOIN attendance a ON a.registration_id = r.id
                {where}
                GROUP BY e.id, e.title, e.start_time, c.name
                ORDER BY e.start_time DESC
                """,
                tuple(params),
            )
            return [
                EventAttendanceStats(
                    event_id=r["id"],
                    title=r["title"],
                    start_time=r["start_time"],
                    college_name=r.get("college_name"),
                    registrations=int(r["registrations"]),
                    attended=int(r["attended"]),
                )
                for r in fetchall(cur)
            ]

    def feedback(
        self, *, event_id: Optional[str] = None, college_id: Optional[str] = None
    ) -> Sequence[EventFeedbackStats]:
        where, params = _conditions([("e.id=%s", event_id), ("e.college_id=%s", college_id)])
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT e.id, e.title, e.start_time, c.name AS college_name,
                       AVG(f.rating) AS avg_rating, COUNT(f.id) AS rating_count
                FROM events e
                LEFT JOIN colleges c ON c.id = e.college_id
                LEFT JOIN registrations r ON r.event_id = e.id
                LEFT JOIN feedback f ON f.registration_id = r.id
                {where}
                GROUP BY e.id, e.title, e.start_time, c.name
                ORDER BY e.start_time DESC
                """,
                tuple(params),
            )
            return [
                EventFeedbackStats(
                    event_id=r["id"],
                    title=r["title"],
                    start_time=r["start_time"],
                    college_name=r.get("college_name"),
                    avg_rating=float(r["avg_rating"]) if r.get("avg_rating") is not None else None,
                    rating_count=int(r["rating_count"]),
                )
                for r in fetchall(cur)
            ]

    def feedback_details(self, event_id: str) -> Sequence[FeedbackDetail]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT f.rating, f.comment, f.submitted_at, s.name
                FROM feedback f
                JOIN registrations r ON r.id = f.registration_id
                JOIN students s ON s.id = r.student_id
                WHERE r.event_id=%s
                ORDER BY f.submitted_at DESC
                """,
                (event_id,),
            )
            return [
                FeedbackDetail(
                    rating=int(r["rating"]),
                    comment=r.get("comment"),
                    submitted_at=r["submitted_at"],
                    student_name=r["name"],
                )
                for r in fetchall(cur)
            ]

    def student_participation(
        self, student_id: str, *, college_id: Optional[str] = None
    ) -> Optional[StudentParticipation]:
        where, params = _conditions([("s.id=%s", student_id), ("s.college_id=%s", college_id)])
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT s.id, s.name, s.email,
                       COUNT(DISTINCT r.event_id) AS events_registered,
                       COUNT(a.id) AS events_attended
                FROM students s
                LEFT JOIN registrations r ON r.student_id = s.id
                LEFT JOIN attendance a ON a.registration_id = r.id
                {where}
                GROUP BY s.id, s.name, s.email
                """,
                tuple(params),
            )
            head = fetchone(cur)
            if not head:
                return None

            cur.execute(
                """
                SELECT e.id, e.title, e.type, e.start_time, r.registered_at,
                       r.status AS registration_status, a.id IS NOT NULL AS attended
                FROM registrations r
                JOIN events e ON e.id = r.event_id
                LEFT JOIN attendance a ON a.registration_id = r.id
                WHERE r.student_id=%s
                ORDER BY e.start_time DESC
                """,
                (student_id,),
            )
            events = [
                ParticipationEvent(
                    event_id=r["id"],
                    title=r["title"],
                    type=r["type"],
                    start_time=r["start_time"],
                    registered_at=r["registered_at"],
                    registration_status=r["registration_status"],
                    attended=as_bool(r["attended"]),
                )
                for r in fetchall(cur)
            ]

        return StudentParticipation(
            student_id=head["id"],
            name=head["name"],
            email=head["email"],
            events_registered=int(head["events_registered"]),
            events_attended=int(head["events_attended"]),
            events=events,
        )

    def top_active(self, *, college_id: Optional[str], limit: int) -> Sequence[ActiveStudent]:
        where, params = _conditions([("s.college_id=%s", college_id)])
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT s.id, s.name, s.email, s.roll_no, c.name AS college_name,
                       COUNT(a.id) AS events_attended
                FROM students s
                JOIN registrations r ON r.student_id = s.id
                JOIN attendance a ON a.registration_id = r.id
                JOIN colleges c ON c.id = s.college_id
                {where}
                GROUP BY s.id, s.name, s.email, s.roll_no, c.name
                ORDER BY events_attended DESC, s.name ASC
                LIMIT %s
                """,
                tuple(params + [int(limit)]),
            )
            return [
                ActiveStudent(
                    student_id=r["id"],
                    name=r["name"],
                    email=r["email"],
                    roll_no=r.get("roll_no"),
                    college_name=r.get("college_name"),
                    events_attended=int(r["events_attended"]),
                )
                for r in fetchall(cur)
            ]

    def registrations_per_event(
        self, *, college_id: Optional[str], status: Optional[EventStatus]
    ) -> Sequence[EventRegistrationCount]:
        where, params = _conditions(
            [("e.college_id=%s", college_id), ("e.status=%s", status.value if status else None)]
        )
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT e.id, e.title, e.type, e.start_time, c.name AS college_name,
                       COUNT(r.id) AS registrations
                FROM events e
                LEFT JOIN colleges c ON c.id = e.college_id
                LEFT JOIN registrations r ON r.event_id = e.id AND r.status = 'registered'
                {where}
                GROUP BY e.id, e.title, e.type, e.start_time, c.name
                ORDER BY registrations DESC, e.start_time ASC
                """,
                tuple(params),
            )
            return [
                EventRegistrationCount(
                    event_id=r["id"],
                    title=r["title"],
                    type=r["type"],
                    start_time=r["start_time"],
                    college_name=r.get("college_name"),
                    registrations=int(r["registrations"]),
                )
                for r in fetchall(cur)
            ]

    def filter_events(self, filters: EventFilters) -> Sequence[EventSummary]:
        where, params = filters_where(filters)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {EVENT_COLUMNS}, c.name AS college_name,
                       {REGISTERED_COUNT_SQL} AS registrations_count,
                       {PRESENT_COUNT_SQL} AS attendance_count
                FROM events e
                LEFT JOIN colleges c ON c.id = e.college_id
                {where}
                ORDER BY e.start_time DESC
                LIMIT %s OFFSET %s
                """,
                tuple(params + [int(filters.limit), int(filters.offset)]),
            )
            return [to_event_summary(r) for r in fetchall(cur)]
