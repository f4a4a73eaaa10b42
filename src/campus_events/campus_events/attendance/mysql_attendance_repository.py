from __future__ import annotations

import uuid
from datetime import datetime
from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_bool, db_cursor, fetchone
from .model import Attendance
from .repository import AttendanceRepository


def _to_attendance(r: dict) -> Attendance:
    return Attendance(
        attendance_id=r["id"],
        registration_id=r["registration_id"],
        checked_in_at=r["checked_in_at"],
        present=as_bool(r["present"]),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_registration(self, registration_id: str) -> Optional[Attendance]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, registration_id, checked_in_at, present
                FROM attendance
                WHERE registration_id=%s
                """,
                (registration_id,),
            )
            r = fetchone(cur)
            return _to_attendance(r) if r else None

    def create(self, *, registration_id: str, checked_in_at: datetime, present: bool) -> Attendance:
        attendance_id = str(uuid.uuid4())
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance(id, registration_id, checked_in_at, present)
                VALUES(%s,%s,%s,%s)
                """,
                (attendance_id, registration_id, checked_in_at, int(present)),
            )
        return Attendance(
            attendance_id=attendance_id,
            registration_id=registration_id,
            checked_in_at=checked_in_at,
            present=present,
        )

    def upsert(self, *, registration_id: str, checked_in_at: datetime, present: bool) -> Attendance:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance(id, registration_id, checked_in_at, present)
                VALUES(%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE present=VALUES(present), checked_in_at=VALUES(checked_in_at)
                """,
                (str(uuid.uuid4()), registration_id, checked_in_at, int(present)),
            )

            # The id is only ours if the row was inserted; read back the stored one.
            cur.execute(
                "SELECT id, registration_id, checked_in_at, present FROM attendance WHERE registration_id=%s",
                (registration_id,),
            )
            return _to_attendance(fetchone(cur))
