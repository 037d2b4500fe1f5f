from __future__ import annotations

from typing import Iterable, Optional, Sequence

from ..core.exceptions import AlreadyVotedError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause, is_duplicate_key
from ..database.resilience import backend_call
from .model import Vote
from .repository import VoteRepository

_COLUMNS = "vote_id, session_id, voter_id, votee_id, reason, honorable_mentions, value, created_at"


def _to_vote(r: dict) -> Vote:
    return Vote(
        vote_id=int(r["vote_id"]),
        session_id=int(r["session_id"]),
        voter_id=int(r["voter_id"]),
        votee_id=int(r["votee_id"]),
        reason=r["reason"],
        honorable_mentions=r.get("honorable_mentions") or "",
        value=r.get("value") or None,
        created_at=r.get("created_at"),
    )


class MySQLVoteRepository(VoteRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @backend_call
    def get_for_voter_and_session(self, *, voter_id: int, session_id: int) -> Optional[Vote]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM votes WHERE voter_id=%s AND session_id=%s",
                (int(voter_id), int(session_id)),
            )
            r = fetchone(cur)
            return _to_vote(r) if r else None

    @backend_call
    def create(
        self,
        *,
        session_id: int,
        voter_id: int,
        votee_id: int,
        reason: str,
        honorable_mentions: str,
        value: Optional[str],
    ) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO votes(session_id, voter_id, votee_id, reason, honorable_mentions, value)
                    VALUES(%s,%s,%s,%s,%s,%s)
                    """,
                    (int(session_id), int(voter_id), int(votee_id), reason, honorable_mentions, value),
                )
                return int(cur.lastrowid)
        except Exception as e:
            # uq_votes_voter_session closes the check-then-insert race.
            if is_duplicate_key(e):
                raise AlreadyVotedError("You have already voted in this session") from e
            raise

    @backend_call
    def list_for_session(self, session_id: int) -> Sequence[Vote]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM votes WHERE session_id=%s ORDER BY created_at ASC, vote_id ASC",
                (int(session_id),),
            )
            return [_to_vote(r) for r in fetchall(cur)]

    @backend_call
    def list_for_sessions(self, session_ids: Iterable[int]) -> Sequence[Vote]:
        ids = sorted({int(i) for i in session_ids})
        if not ids:
            return []
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS} FROM votes
                WHERE session_id IN ({in_clause(ids)})
                ORDER BY created_at ASC, vote_id ASC
                """,
                tuple(ids),
            )
            return [_to_vote(r) for r in fetchall(cur)]

    @backend_call
    def list_all(self) -> Sequence[Vote]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM votes ORDER BY created_at ASC, vote_id ASC")
            return [_to_vote(r) for r in fetchall(cur)]

    @backend_call
    def list_for_voter(self, voter_id: int) -> Sequence[Vote]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM votes WHERE voter_id=%s ORDER BY created_at DESC, vote_id DESC",
                (int(voter_id),),
            )
            return [_to_vote(r) for r in fetchall(cur)]
