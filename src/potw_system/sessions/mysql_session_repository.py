from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import SessionStatus
from ..core.exceptions import DuplicateSessionError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key
from ..database.resilience import backend_call
from .model import VotingSession
from .repository import SessionRepository

_COLUMNS = "session_id, week_number, year, status, created_at"


def _to_session(r: dict) -> VotingSession:
    return VotingSession(
        session_id=int(r["session_id"]),
        week_number=int(r["week_number"]),
        year=int(r["year"]),
        status=SessionStatus(r["status"]),
        created_at=r.get("created_at"),
    )


class MySQLSessionRepository(SessionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @backend_call
    def get_by_id(self, session_id: int) -> Optional[VotingSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM voting_sessions WHERE session_id=%s", (int(session_id),))
            r = fetchone(cur)
            return _to_session(r) if r else None

    @backend_call
    def get_by_week(self, *, week_number: int, year: int) -> Optional[VotingSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM voting_sessions WHERE week_number=%s AND year=%s",
                (int(week_number), int(year)),
            )
            r = fetchone(cur)
            return _to_session(r) if r else None

    @backend_call
    def get_latest_open(self) -> Optional[VotingSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS} FROM voting_sessions
                WHERE status=%s
                ORDER BY created_at DESC, session_id DESC
                LIMIT 1
                """,
                (SessionStatus.OPEN.value,),
            )
            r = fetchone(cur)
            return _to_session(r) if r else None

    @backend_call
    def list_all(self) -> Sequence[VotingSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM voting_sessions ORDER BY created_at DESC, session_id DESC")
            return [_to_session(r) for r in fetchall(cur)]

    @backend_call
    def create(self, *, week_number: int, year: int) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    "INSERT INTO voting_sessions(week_number, year, status) VALUES(%s,%s,%s)",
                    (int(week_number), int(year), SessionStatus.OPEN.value),
                )
                return int(cur.lastrowid)
        except Exception as e:
            if is_duplicate_key(e):
                raise DuplicateSessionError("A voting session already exists for this week") from e
            raise

    @backend_call
    def set_status(self, session_id: int, status: SessionStatus) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE voting_sessions SET status=%s WHERE session_id=%s",
                (status.value, int(session_id)),
            )
