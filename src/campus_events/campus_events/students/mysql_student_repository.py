from __future__ import annotations

import uuid
from datetime import datetime
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Student
from .repository import StudentRepository

_COLUMNS = "id, college_id, roll_no, name, email, phone, created_at"


def _to_student(r: dict) -> Student:
    return Student(
        student_id=r["id"],
        college_id=r["college_id"],
        name=r["name"],
        email=r["email"],
        roll_no=r.get("roll_no"),
        phone=r.get("phone"),
        created_at=r.get("created_at"),
    )


class MySQLStudentRepository(StudentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, student_id: str) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM students WHERE id=%s", (student_id,))
            r = fetchone(cur)
            return _to_student(r) if r else None

    def get_by_email(self, email: str) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM students WHERE email=%s", (email,))
            r = fetchone(cur)
            return _to_student(r) if r else None

    def create(
        self,
        *,
        college_id: str,
        name: str,
        email: str,
        roll_no: Optional[str],
        phone: Optional[str],
        created_at: datetime,
    ) -> Student:
        student_id = str(uuid.uuid4())
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO students(id, college_id, roll_no, name, email, phone, created_at)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (student_id, college_id, roll_no, name, email, phone, created_at),
            )
        return Student(
            student_id=student_id,
            college_id=college_id,
            name=name,
            email=email,
            roll_no=roll_no,
            phone=phone,
            created_at=created_at,
        )

    def list_for_college(self, college_id: str) -> Sequence[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM students WHERE college_id=%s ORDER BY name", (college_id,))
            return [_to_student(r) for r in fetchall(cur)]

    def delete(self, student_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM students WHERE id=%s", (student_id,))
            return cur.rowcount > 0
