from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..common.datetime_utils import current_week_and_year
from ..common.validators import require_int_range
from ..core.constants import MAX_WEEK_NUMBER, MIN_WEEK_NUMBER
from ..core.enums import SessionStatus
from ..core.exceptions import AuthorizationError, DuplicateSessionError, NotFoundError
from ..results import tally
from ..users.repository import UserRepository
from ..votes.repository import VoteRepository
from .model import SessionSummary, VotingSession
from .repository import SessionRepository

logger = logging.getLogger(__name__)


class SessionService:
    """Use cases: open, close and list weekly voting sessions."""

    def __init__(self, sessions: SessionRepository, votes: VoteRepository, users: UserRepository):
        self._sessions = sessions
        self._votes = votes
        self._users = users

    def _require_admin(self, acting_user_id: Optional[int]) -> None:
        if acting_user_id is None:
            return
        user = self._users.get_by_id(acting_user_id)
        if not user or not user.is_admin:
            raise AuthorizationError("Only admins can manage voting sessions")

    def suggest_next_week(self) -> tuple[int, int]:
        return current_week_and_year()

    def create_session(
        self,
        week_number: int,
        year: Optional[int] = None,
        *,
        acting_user_id: Optional[int] = None,
    ) -> VotingSession:
        """Open a session for the given week.

        ``acting_user_id`` is checked for admin rights when given; internal
        callers (scripts, tests) may omit it.
        """
        self._require_admin(acting_user_id)
        week_number = require_int_range(week_number, "Week number", MIN_WEEK_NUMBER, MAX_WEEK_NUMBER)
        year = int(year) if year else current_week_and_year()[1]

        if self._sessions.get_by_week(week_number=week_number, year=year):
            raise DuplicateSessionError("A voting session already exists for this week")

        session_id = self._sessions.create(week_number=week_number, year=year)
        logger.info("Opened voting session %s (week %s/%s)", session_id, week_number, year)
        return self.get_session(session_id)

    def close_session(self, session_id: int, *, acting_user_id: Optional[int] = None) -> VotingSession:
        self._require_admin(acting_user_id)
        self.get_session(session_id)
        # Closing an already closed session simply reapplies the update.
        self._sessions.set_status(session_id, SessionStatus.CLOSED)
        logger.info("Closed voting session %s", session_id)
        return self.get_session(session_id)

    def get_session(self, session_id: int) -> VotingSession:
        session = self._sessions.get_by_id(session_id)
        if not session:
            raise NotFoundError("Voting session not found")
        return session

    def get_current_open_session(self) -> Optional[VotingSession]:
        return self._sessions.get_latest_open()

    def list_sessions(self) -> Sequence[SessionSummary]:
        sessions = self._sessions.list_all()
        if not sessions:
            return []

        votes = self._votes.list_for_sessions([s.session_id for s in sessions])
        users = tally.profile_map(self._users.list_by_ids(tally.referenced_user_ids(votes))) if votes else {}

        by_session: dict[int, list] = {}
        for v in votes:
            by_session.setdefault(v.session_id, []).append(v)

        out: list[SessionSummary] = []
        for s in sessions:
            session_votes = by_session.get(s.session_id, [])
            winner_id = tally.pick_winner(session_votes)
            voters = tuple(users[i] for i in tally.distinct_voter_ids(session_votes) if i in users)
            out.append(
                SessionSummary(
                    session=s,
                    total_votes=len(session_votes),
                    voters=voters,
                    winner=users.get(winner_id) if winner_id is not None else None,
                )
            )
        return out
