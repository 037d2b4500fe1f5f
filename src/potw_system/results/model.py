from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..sessions.model import VotingSession
from ..users.model import UserProfile
from ..votes.model import VoteWithUsers


@dataclass(frozen=True)
class VoteeResult:
    user: UserProfile
    vote_count: int
    votes: tuple[VoteWithUsers, ...]

    def to_dict(self) -> dict:
        return {
            "user": self.user.to_dict(),
            "vote_count": self.vote_count,
            "votes": [v.to_dict() for v in self.votes],
        }


@dataclass(frozen=True)
class SessionResults:
    """Results of a closed session.

    ``winners`` is the top of ``all_votees``; ``honorable_mentions`` is taken
    from every votee, not only the winners.
    """

    session: VotingSession
    winners: tuple[VoteeResult, ...]
    all_votees: tuple[VoteeResult, ...]
    honorable_mentions: tuple[VoteWithUsers, ...]

    @property
    def total_votes(self) -> int:
        return sum(r.vote_count for r in self.all_votees)

    @property
    def winner(self) -> Optional[VoteeResult]:
        return self.winners[0] if self.winners else None
