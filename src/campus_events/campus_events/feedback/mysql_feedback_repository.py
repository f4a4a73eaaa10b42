from __future__ import annotations

import uuid
from datetime import datetime
from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import Feedback
from .repository import FeedbackRepository


class MySQLFeedbackRepository(FeedbackRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_registration(self, registration_id: str) -> Optional[Feedback]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, registration_id, rating, comment, submitted_at
                FROM feedback
                WHERE registration_id=%s
                """,
                (registration_id,),
            )
            r = fetchone(cur)
            if not r:
                return None
            return Feedback(
                feedback_id=r["id"],
                registration_id=r["registration_id"],
                rating=int(r["rating"]),
                comment=r.get("comment"),
                submitted_at=r["submitted_at"],
            )

    def create(
        self,
        *,
        registration_id: str,
        rating: int,
        comment: Optional[str],
        submitted_at: datetime,
    ) -> Feedback:
        feedback_id = str(uuid.uuid4())
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO feedback(id, registration_id, rating, comment, submitted_at)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (feedback_id, registration_id, int(rating), comment, submitted_at),
            )
        return Feedback(
            feedback_id=feedback_id,
            registration_id=registration_id,
            rating=int(rating),
            comment=comment,
            submitted_at=submitted_at,
        )
