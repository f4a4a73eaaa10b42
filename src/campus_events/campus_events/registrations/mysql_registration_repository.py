from __future__ import annotations

import uuid
from datetime import datetime
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus, RegistrationStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_bool, db_cursor, fetchall, fetchone
from .model import Registration, RegistrationDetails, RegistrationLookup, RosterEntry
from .repository import RegistrationRepository


def _to_registration(r: dict) -> Registration:
    return Registration(
        registration_id=r["id"],
        event_id=r["event_id"],
        student_id=r["student_id"],
        registered_at=r["registered_at"],
        status=RegistrationStatus(r["status"]),
    )


class MySQLRegistrationRepository(RegistrationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, registration_id: str) -> Optional[Registration]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT id, event_id, student_id, registered_at, status FROM registrations WHERE id=%s",
                (registration_id,),
            )
            r = fetchone(cur)
            return _to_registration(r) if r else None

    def get_for_event_and_student(self, event_id: str, student_id: str) -> Optional[Registration]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, event_id, student_id, registered_at, status
                FROM registrations
                WHERE event_id=%s AND student_id=%s
                """,
                (event_id, student_id),
            )
            r = fetchone(cur)
            return _to_registration(r) if r else None

    def create(self, *, event_id: str, student_id: str, registered_at: datetime) -> Registration:
        registration_id = str(uuid.uuid4())
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO registrations(id, event_id, student_id, registered_at, status)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (registration_id, event_id, student_id, registered_at, RegistrationStatus.REGISTERED.value),
            )
        return Registration(
            registration_id=registration_id,
            event_id=event_id,
            student_id=student_id,
            registered_at=registered_at,
        )

    def get_details(self, registration_id: str) -> Optional[RegistrationDetails]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT r.id, r.event_id, r.student_id, r.registered_at, r.status,
                       s.name AS student_name, s.email AS student_email
                FROM registrations r
                JOIN students s ON s.id = r.student_id
                WHERE r.id=%s
                """,
                (registration_id,),
            )
            r = fetchone(cur)
            if not r:
                return None
            return RegistrationDetails(
                registration=_to_registration(r),
                student_name=r["student_name"],
                student_email=r["student_email"],
            )

    def search_by_email(self, email: str) -> Sequence[RegistrationLookup]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT r.id, r.registered_at, e.id AS event_id, e.title AS event_title, e.start_time AS event_date
                FROM registrations r
                JOIN students s ON s.id = r.student_id
                JOIN events e ON e.id = r.event_id
                WHERE s.email=%s AND r.status=%s
                ORDER BY e.start_time DESC
                """,
                (email, RegistrationStatus.REGISTERED.value),
            )
            return [
                RegistrationLookup(
                    registration_id=r["id"],
                    registered_at=r["registered_at"],
                    event_id=r["event_id"],
                    event_title=r["event_title"],
                    event_date=r["event_date"],
                )
                for r in fetchall(cur)
            ]

    def roster_for_event(self, event_id: str) -> Sequence[RosterEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT r.id AS registration_id, r.registered_at,
                       s.id AS student_id, s.name, s.email, s.roll_no, s.phone,
                       a.id AS attendance_id, a.present, a.checked_in_at
                FROM registrations r
                JOIN students s ON s.id = r.student_id
                LEFT JOIN attendance a ON a.registration_id = r.id
                WHERE r.event_id=%s AND r.status=%s
                ORDER BY s.name ASC
                """,
                (event_id, RegistrationStatus.REGISTERED.value),
            )
            return [
                RosterEntry(
                    registration_id=r["registration_id"],
                    student_id=r["student_id"],
                    name=r["name"],
                    email=r["email"],
                    roll_no=r.get("roll_no"),
                    phone=r.get("phone"),
                    registered_at=r["registered_at"],
                    attendance_status=AttendanceStatus.from_present(
                        as_bool(r["present"]) if r.get("attendance_id") else None
                    ),
                    attendance_id=r.get("attendance_id"),
                    checked_in_at=r.get("checked_in_at"),
                )
                for r in fetchall(cur)
            ]
