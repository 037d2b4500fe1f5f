from __future__ import annotations

import logging

from ..core.constants import TOP_RESULTS
from ..core.enums import SessionStatus
from ..core.exceptions import NotFoundError, SessionNotClosedError
from ..sessions.repository import SessionRepository
from ..users.repository import UserRepository
from ..votes.repository import VoteRepository
from . import tally
from .model import SessionResults

logger = logging.getLogger(__name__)


class ResultsService:
    """Use case: reveal the results of a closed voting session."""

    def __init__(
        self,
        sessions: SessionRepository,
        votes: VoteRepository,
        users: UserRepository,
        *,
        top_n: int = TOP_RESULTS,
    ):
        self._sessions = sessions
        self._votes = votes
        self._users = users
        self._top_n = int(top_n)

    def get_results(self, session_id: int) -> SessionResults:
        session = self._sessions.get_by_id(session_id)
        if not session:
            raise NotFoundError("Voting session not found")
        if session.status != SessionStatus.CLOSED:
            raise SessionNotClosedError("Voting session is not closed yet")

        votes = self._votes.list_for_session(session.session_id)
        users = tally.profile_map(self._users.list_by_ids(tally.referenced_user_ids(votes))) if votes else {}

        ranked = tally.group_by_votee(votes, users)
        logger.debug("Session %s: %d votes for %d votees", session.session_id, len(votes), len(ranked))
        return SessionResults(
            session=session,
            winners=tuple(ranked[: self._top_n]),
            all_votees=tuple(ranked),
            honorable_mentions=tuple(tally.honorable_mentions(ranked)),
        )
