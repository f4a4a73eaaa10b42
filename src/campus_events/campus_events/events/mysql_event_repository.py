from __future__ import annotations

import uuid
from typing import Optional, Sequence

from ..core.enums import EventStatus, EventType, RegistrationStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Event, EventFilters, EventSummary
from .repository import EventRepository

EVENT_COLUMNS = "e.id, e.college_id, e.title, e.type, e.description, e.start_time, e.end_time, e.capacity, e.status, e.created_at"

REGISTERED_COUNT_SQL = (
    "(SELECT COUNT(*) FROM registrations r WHERE r.event_id = e.id AND r.status = 'registered')"
)
PRESENT_COUNT_SQL = (
    "(SELECT COUNT(*) FROM attendance a JOIN registrations r ON r.id = a.registration_id "
    "WHERE r.event_id = e.id AND a.present = 1)"
)


def _to_event(r: dict) -> Event:
    return Event(
        event_id=r["id"],
        college_id=r["college_id"],
        title=r["title"],
        type=EventType(r["type"]),
        description=r.get("description"),
        start_time=r["start_time"],
        end_time=r["end_time"],
        capacity=int(r.get("capacity") or 0),
        status=EventStatus(r["status"]),
        created_at=r.get("created_at"),
    )


def to_event_summary(r: dict) -> EventSummary:
    attendance = r.get("attendance_count")
    return EventSummary(
        event=_to_event(r),
        college_name=r.get("college_name"),
        registrations_count=int(r.get("registrations_count") or 0),
        attendance_count=int(attendance) if attendance is not None else None,
    )


def filters_where(filters: EventFilters) -> tuple[str, list[object]]:
    clauses: list[str] = []
    params: list[object] = []

    if filters.status is not None:
        clauses.append("e.status=%s")
        params.append(filters.status.value)
    if filters.college_id:
        clauses.append("e.college_id=%s")
        params.append(filters.college_id)
    if filters.type is not None:
        clauses.append("e.type=%s")
        params.append(filters.type.value)
    if filters.start_from is not None:
        clauses.append("e.start_time >= %s")
        params.append(filters.start_from)
    if filters.start_to is not None:
        clauses.append("e.start_time <= %s")
        params.append(filters.start_to)
    if filters.q:
        clauses.append("(e.title LIKE %s OR e.description LIKE %s)")
        like = f"%{filters.q}%"
        params.extend([like, like])

    where = ("WHERE " + " AND ".join(clauses)) if clauses else ""
    return where, params


class MySQLEventRepository(EventRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, event_id: str) -> Optional[Event]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {EVENT_COLUMNS} FROM events e WHERE e.id=%s", (event_id,))
            r = fetchone(cur)
            return _to_event(r) if r else None

    def get_for_update(self, event_id: str) -> Optional[Event]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {EVENT_COLUMNS} FROM events e WHERE e.id=%s FOR UPDATE", (event_id,))
            r = fetchone(cur)
            return _to_event(r) if r else None

    def get_summary(self, event_id: str) -> Optional[EventSummary]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {EVENT_COLUMNS}, c.name AS college_name,
                       {REGISTERED_COUNT_SQL} AS registrations_count,
                       {PRESENT_COUNT_SQL} AS attendance_count
                FROM events e
                LEFT JOIN colleges c ON c.id = e.college_id
                WHERE e.id=%s
                """,
                (event_id,),
            )
            r = fetchone(cur)
            return to_event_summary(r) if r else None

    def create(self, event: Event) -> Event:
        event_id = event.event_id or str(uuid.uuid4())
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO events(id, college_id, title, type, description, start_time, end_time, capacity, status, created_at)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    event_id,
                    event.college_id,
                    event.title,
                    event.type.value,
                    event.description,
                    event.start_time,
                    event.end_time,
                    int(event.capacity),
                    event.status.value,
                    event.created_at,
                ),
            )
        return Event(
            event_id=event_id,
            college_id=event.college_id,
            title=event.title,
            type=event.type,
            description=event.description,
            start_time=event.start_time,
            end_time=event.end_time,
            capacity=event.capacity,
            status=event.status,
            created_at=event.created_at,
        )

    def update(self, event: Event) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE events
                SET title=%s, type=%s, description=%s, start_time=%s, end_time=%s, capacity=%s, status=%s
                WHERE id=%s
                """,
                (
                    event.title,
                    event.type.value,
                    event.description,
                    event.start_time,
                    event.end_time,
                    int(event.capacity),
                    event.status.value,
                    event.event_id,
                ),
            )

    def delete(self, event_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM events WHERE id=%s", (event_id,))
            return cur.rowcount > 0

    def _list(self, filters: EventFilters, *, order_by: str) -> Sequence[EventSummary]:
        where, params = filters_where(filters)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {EVENT_COLUMNS}, c.name AS college_name,
                       {REGISTERED_COUNT_SQL} AS registrations_count
                FROM events e
                LEFT JOIN colleges c ON c.id = e.college_id
                {where}
                ORDER BY {order_by}
                LIMIT %s OFFSET %s
                """,
                tuple(params + [int(filters.limit), int(filters.offset)]),
            )
            return [to_event_summary(r) for r in fetchall(cur)]

    def list_public(self, filters: EventFilters) -> Sequence[EventSummary]:
        return self._list(filters, order_by="e.start_time ASC")

    def list_admin(self, filters: EventFilters) -> Sequence[EventSummary]:
        return self._list(filters, order_by="e.created_at DESC")

    def count_registered(self, event_id: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT COUNT(*) AS n FROM registrations WHERE event_id=%s AND status=%s",
                (event_id, RegistrationStatus.REGISTERED.value),
            )
            r = fetchone(cur)
            return int(r["n"]) if r else 0
