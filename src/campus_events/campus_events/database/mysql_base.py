from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, List, Optional

from mysql.connector import errorcode
from mysql.connector.errors import IntegrityError

from ..core.exceptions import DuplicateKeyError
from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Yield ``(conn, cursor)``.

    Joins the transaction opened by ``DatabaseConnection.transaction()`` when
    there is one (commit/rollback is then left to it); otherwise runs on a
    short-lived connection that commits on success.
    """

    active = conn_factory.active_connection()
    if active is not None:
        cur = active.cursor(dictionary=dictionary)
        try:
            yield active, cur
        except IntegrityError as e:
            _raise_if_duplicate_key(e)
            raise
        finally:
            cur.close()
        return

    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except IntegrityError as e:
        conn.rollback()
        _raise_if_duplicate_key(e)
        raise
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def _raise_if_duplicate_key(e: IntegrityError) -> None:
    if e.errno != errorcode.ER_DUP_ENTRY:
        return
    raise DuplicateKeyError(str(e.msg or "Duplicate entry")) from e


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def as_bool(value: Any) -> bool:
    """TINYINT(1) columns come back as 0/1 ints."""
    return bool(int(value)) if value is not None else False
