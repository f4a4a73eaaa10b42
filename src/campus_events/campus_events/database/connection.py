from __future__ import annotations

import logging
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Any, Iterator, Optional

import mysql.connector

logger = logging.getLogger(__name__)

# Connection of the transaction currently open in this context (request/thread).
_active_conn: ContextVar[Optional[Any]] = ContextVar("campus_events_active_conn", default=None)

TRANSACTION_ISOLATION = "READ COMMITTED"


@dataclass
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str


class DatabaseConnection:
    """Singleton-like DB connection factory.

    Note: We create short-lived connections per operation (safe for simple Flask apps).
    Inside ``transaction()`` every repository call shares one connection, so a
    multi-step use case commits or rolls back as a unit.
    """

    _instance: Optional["DatabaseConnection"] = None

    def __init__(self, config: DBConfig):
        self._config = config

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        if cls._instance is None:
            cls._instance = DatabaseConnection(config)
        return cls._instance

    def connect(self):
        return mysql.connector.connect(
            host=self._config.host,
            port=int(self._config.port),
            user=self._config.user,
            password=self._config.password,
            database=self._config.database,
            autocommit=False,
        )

    @staticmethod
    def active_connection():
        return _active_conn.get()

    @contextmanager
    def transaction(self) -> Iterator[Any]:
        """Open a unit of work. Nested calls join the outer transaction.

        Runs at READ COMMITTED so a re-read after a duplicate-key error sees the
        row the competing writer committed.
        """

        outer = _active_conn.get()
        if outer is not None:
            yield outer
            return

        conn = self.connect()
        token = _active_conn.set(conn)
        try:
            conn.start_transaction(isolation_level=TRANSACTION_ISOLATION)
            yield conn
            conn.commit()
        except Exception:
            logger.debug("Rolling back transaction", exc_info=True)
            conn.rollback()
            raise
        finally:
            _active_conn.reset(token)
            conn.close()
