from __future__ import annotations

import pytest
from mysql.connector import errorcode
from mysql.connector.errors import IntegrityError

from src.campus_events.campus_events.core.exceptions import DuplicateKeyError
from src.campus_events.campus_events.database.connection import DatabaseConnection, DBConfig
from src.campus_events.campus_events.database.mysql_base import db_cursor


class RecordingCursor:
    def __init__(self, conn):
        self._conn = conn

    def close(self):
        self._conn.calls.append("cursor.close")


class RecordingConnection:
    def __init__(self):
        self.calls = []

    def start_transaction(self, **kwargs):
        self.calls.append(("start_transaction", kwargs))

    def cursor(self, dictionary=True):
        return RecordingCursor(self)

    def commit(self):
        self.calls.append("commit")

    def rollback(self):
        self.calls.append("rollback")

    def close(self):
        self.calls.append("close")


@pytest.fixture
def connections(monkeypatch):
    opened = []

    def fake_connect(self):
        conn = RecordingConnection()
        opened.append(conn)
        return conn

    monkeypatch.setattr(DatabaseConnection, "connect", fake_connect)
    return opened


@pytest.fixture
def db():
    return DatabaseConnection(DBConfig(host="localhost", port=3306, user="root", password="", database="campus_events_test"))


def test_transaction_reads_committed_rows(db, connections):
    with db.transaction():
        pass

    (conn,) = connections
    assert conn.calls == [("start_transaction", {"isolation_level": "READ COMMITTED"}), "commit", "close"]


def test_nested_transaction_joins_outer(db, connections):
    with db.transaction() as outer:
        with db.transaction() as inner:
            assert inner is outer
        with db_cursor(db) as (conn, _cur):
            assert conn is outer

    assert len(connections) == 1
    assert connections[0].calls.count("commit") == 1


def test_transaction_rolls_back_on_error(db, connections):
    with pytest.raises(RuntimeError):
        with db.transaction():
            raise RuntimeError("boom")

    assert connections[0].calls[-2:] == ["rollback", "close"]
    assert DatabaseConnection.active_connection() is None


def test_duplicate_entry_becomes_duplicate_key_error(db, connections):
    with pytest.raises(DuplicateKeyError):
        with db.transaction():
            with db_cursor(db):
                raise IntegrityError(
                    msg="Duplicate entry '1' for key 'attendance.uq_attendance_registration'",
                    errno=errorcode.ER_DUP_ENTRY,
                )

    assert "rollback" in connections[0].calls


def test_other_integrity_errors_pass_through(db, connections):
    with pytest.raises(IntegrityError):
        with db_cursor(db):
            raise IntegrityError(msg="Cannot add or update a child row", errno=errorcode.ER_NO_REFERENCED_ROW_2)

    assert connections[0].calls[-2:] == ["rollback", "close"]
