from __future__ import annotations

import mysql.connector
import pytest
from mysql.connector import errorcode

from potw_system.core.exceptions import TransientBackendError
from potw_system.database.mysql_base import db_cursor, in_clause, is_duplicate_key, is_transient


class FakeCursor:
    def __init__(self, error=None):
        self.error = error
        self.closed = False

    def execute(self, sql, params=None):
        if self.error:
            raise self.error

    def close(self):
        self.closed = True


class FakeConn:
    def __init__(self, cursor):
        self._cursor = cursor
        self.committed = self.rolled_back = self.closed = False

    def cursor(self, dictionary=True):
        return self._cursor

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        self.closed = True


class FakeFactory:
    def __init__(self, conn=None, connect_error=None):
        self.conn = conn
        self.connect_error = connect_error

    def connect(self):
        if self.connect_error:
            raise self.connect_error
        return self.conn


def test_error_classification():
    assert is_transient(mysql.connector.errors.OperationalError(errno=errorcode.CR_SERVER_LOST))
    assert is_transient(mysql.connector.errors.DatabaseError(errno=errorcode.ER_LOCK_DEADLOCK))
    assert not is_transient(mysql.connector.errors.ProgrammingError(errno=errorcode.ER_PARSE_ERROR))
    assert not is_transient(RuntimeError("x"))

    assert is_duplicate_key(mysql.connector.errors.IntegrityError(errno=errorcode.ER_DUP_ENTRY))
    assert not is_duplicate_key(mysql.connector.errors.IntegrityError(errno=errorcode.ER_NO_REFERENCED_ROW_2))


def test_cursor_commits_and_closes():
    conn = FakeConn(FakeCursor())

    with db_cursor(FakeFactory(conn)) as (_, cur):
        cur.execute("SELECT 1")

    assert conn.committed and conn.closed
    assert cur.closed


def test_transient_query_error_is_translated():
    conn = FakeConn(FakeCursor(mysql.connector.errors.DatabaseError(errno=errorcode.ER_LOCK_WAIT_TIMEOUT)))

    with pytest.raises(TransientBackendError):
        with db_cursor(FakeFactory(conn)) as (_, cur):
            cur.execute("UPDATE votes SET reason='x'")

    assert conn.rolled_back and conn.closed
    assert not conn.committed


def test_transient_connect_error_is_translated():
    err = mysql.connector.errors.InterfaceError(errno=errorcode.CR_CONN_HOST_ERROR)

    with pytest.raises(TransientBackendError):
        with db_cursor(FakeFactory(connect_error=err)):
            pass


def test_permanent_error_propagates():
    err = mysql.connector.errors.ProgrammingError(errno=errorcode.ER_NO_SUCH_TABLE)
    conn = FakeConn(FakeCursor(err))

    with pytest.raises(mysql.connector.errors.ProgrammingError):
        with db_cursor(FakeFactory(conn)) as (_, cur):
            cur.execute("SELECT * FROM nope")
    assert conn.rolled_back


def test_in_clause():
    assert in_clause([1, 2, 3]) == "%s, %s, %s"
