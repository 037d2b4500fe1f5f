from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, List, Optional

import mysql.connector
from mysql.connector import errorcode

from ..core.exceptions import TransientBackendError

# Server/client error numbers that are worth retrying.
TRANSIENT_ERRNOS = frozenset(
    {
        errorcode.ER_CON_COUNT_ERROR,  # 1040 too many connections
        errorcode.ER_LOCK_WAIT_TIMEOUT,  # 1205
        errorcode.ER_LOCK_DEADLOCK,  # 1213
        errorcode.CR_CONN_HOST_ERROR,  # 2003
        errorcode.CR_SERVER_GONE_ERROR,  # 2006
        errorcode.CR_SERVER_LOST,  # 2013
    }
)


def is_transient(exc: BaseException) -> bool:
    return isinstance(exc, mysql.connector.Error) and exc.errno in TRANSIENT_ERRNOS


def is_duplicate_key(exc: BaseException) -> bool:
    return isinstance(exc, mysql.connector.IntegrityError) and exc.errno == errorcode.ER_DUP_ENTRY


@contextmanager
def db_cursor(conn_factory, *, dictionary: bool = True):
    try:
        conn = conn_factory.connect()
    except mysql.connector.Error as e:
        if is_transient(e):
            raise TransientBackendError(str(e)) from e
        raise

    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.Error as e:
        conn.rollback()
        if is_transient(e):
            raise TransientBackendError(str(e)) from e
        raise
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def in_clause(values) -> str:
    """Placeholder list for a SQL IN (...) clause."""
    return ", ".join(["%s"] * len(values))
