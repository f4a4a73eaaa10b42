from __future__ import annotations

import uuid
from datetime import datetime
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import College
from .repository import CollegeRepository


def _to_college(r: dict) -> College:
    return College(college_id=r["id"], name=r["name"], created_at=r.get("created_at"))


class MySQLCollegeRepository(CollegeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, college_id: str) -> Optional[College]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, name, created_at FROM colleges WHERE id=%s", (college_id,))
            r = fetchone(cur)
            return _to_college(r) if r else None

    def get_by_name(self, name: str) -> Optional[College]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, name, created_at FROM colleges WHERE name=%s", (name,))
            r = fetchone(cur)
            return _to_college(r) if r else None

    def create(self, *, name: str, created_at: datetime) -> College:
        college_id = str(uuid.uuid4())
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO colleges(id, name, created_at) VALUES(%s,%s,%s)",
                (college_id, name, created_at),
            )
        return College(college_id=college_id, name=name, created_at=created_at)

    def list_all(self) -> Sequence[College]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, name, created_at FROM colleges ORDER BY name")
            return [_to_college(r) for r in fetchall(cur)]

    def delete(self, college_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM colleges WHERE id=%s", (college_id,))
            return cur.rowcount > 0
