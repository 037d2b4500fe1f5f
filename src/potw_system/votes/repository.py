from __future__ import annotations

from typing import Iterable, Optional, Protocol, Sequence

from .model import Vote


class VoteRepository(Protocol):
    def get_for_voter_and_session(self, *, voter_id: int, session_id: int) -> Optional[Vote]:
        raise NotImplementedError

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
        """Insert one vote.

        Raises AlreadyVotedError when (voter, session) already has a vote.
        """

        raise NotImplementedError

    def list_for_session(self, session_id: int) -> Sequence[Vote]:
        """Votes of one session in insertion order (created_at, vote_id)."""

        raise NotImplementedError

    def list_for_sessions(self, session_ids: Iterable[int]) -> Sequence[Vote]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Vote]:
        raise NotImplementedError

    def list_for_voter(self, voter_id: int) -> Sequence[Vote]:
        """Votes cast by one user, newest first."""

        raise NotImplementedError
