from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..common.validators import require_non_empty
from ..core.enums import SessionStatus, VoteValue
from ..core.exceptions import (
    AlreadyVotedError,
    NoOpenSessionError,
    NotFoundError,
    SessionClosedError,
    ValidationError,
)
from ..results import tally
from ..sessions.repository import SessionRepository
from ..users.model import UserProfile
from ..users.repository import UserRepository
from .model import UserVote, Vote
from .repository import VoteRepository

logger = logging.getLogger(__name__)

_VALUES = {v.value for v in VoteValue}


class VoteService:
    """Use case: cast one vote per user per voting session."""

    def __init__(self, votes: VoteRepository, sessions: SessionRepository, users: UserRepository):
        self._votes = votes
        self._sessions = sessions
        self._users = users

    def _resolve_session(self, session_id: Optional[int]):
        if session_id is None:
            session = self._sessions.get_latest_open()
            if not session:
                raise NoOpenSessionError("No open voting session")
            return session

        session = self._sessions.get_by_id(session_id)
        if not session:
            raise NotFoundError("Voting session not found")
        if session.status != SessionStatus.OPEN:
            raise SessionClosedError("Voting session is closed")
        return session

    def submit_vote(
        self,
        voter_id: int,
        votee_id: int,
        reason: str,
        honorable_mentions: str = "",
        value: Optional[str] = None,
        session_id: Optional[int] = None,
    ) -> int:
        """Record a vote and return its id.

        Text fields are stored exactly as submitted; ``reason`` only has to be
        non-blank.
        """
        require_non_empty(reason, "Reason")
        value = value or None
        if value is not None and value not in _VALUES:
            raise ValidationError("Unknown company value")
        if int(voter_id) == int(votee_id):
            raise ValidationError("You cannot vote for yourself")
        if not self._users.get_by_id(votee_id):
            raise ValidationError("The person you voted for does not exist")

        session = self._resolve_session(session_id)

        if self._votes.get_for_voter_and_session(voter_id=voter_id, session_id=session.session_id):
            raise AlreadyVotedError("You have already voted in this session")

        vote_id = self._votes.create(
            session_id=session.session_id,
            voter_id=int(voter_id),
            votee_id=int(votee_id),
            reason=reason,
            honorable_mentions=honorable_mentions or "",
            value=value,
        )
        logger.info("User %s voted in session %s", voter_id, session.session_id)
        return vote_id

    def get_current_vote(self, voter_id: int, session_id: int) -> Optional[Vote]:
        return self._votes.get_for_voter_and_session(voter_id=voter_id, session_id=session_id)

    def get_user_votes(self, voter_id: int) -> Sequence[UserVote]:
        votes = self._votes.list_for_voter(voter_id)
        if not votes:
            return []

        users = tally.profile_map(self._users.list_by_ids({v.votee_id for v in votes}))
        sessions = {s.session_id: s for s in self._sessions.list_all()}

        out: list[UserVote] = []
        for v in votes:
            s = sessions.get(v.session_id)
            out.append(
                UserVote(
                    vote=v,
                    votee=users.get(v.votee_id) or UserProfile.unknown(v.votee_id),
                    week_number=s.week_number if s else 0,
                    year=s.year if s else 0,
                )
            )
        return out
