from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import SessionStatus
from .model import VotingSession


class SessionRepository(Protocol):
    def get_by_id(self, session_id: int) -> Optional[VotingSession]:
        raise NotImplementedError

    def get_by_week(self, *, week_number: int, year: int) -> Optional[VotingSession]:
        raise NotImplementedError

    def get_latest_open(self) -> Optional[VotingSession]:
        raise NotImplementedError

    def list_all(self) -> Sequence[VotingSession]:
        """All sessions, newest first."""

        raise NotImplementedError

    def create(self, *, week_number: int, year: int) -> int:
        """Insert an OPEN session.

        Raises DuplicateSessionError when the week already has one.
        """

        raise NotImplementedError

    def set_status(self, session_id: int, status: SessionStatus) -> None:
        raise NotImplementedError
