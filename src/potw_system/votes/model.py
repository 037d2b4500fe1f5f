from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..users.model import UserProfile


@dataclass(frozen=True)
class Vote:
    """Domain entity: one ballot. Never updated or deleted once stored."""

    vote_id: int
    session_id: int
    voter_id: int
    votee_id: int
    reason: str
    honorable_mentions: str = ""
    value: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def has_honorable_mentions(self) -> bool:
        return bool(self.honorable_mentions)


@dataclass(frozen=True)
class VoteWithUsers:
    """A vote joined with the voter and votee profiles."""

    vote: Vote
    voter: UserProfile
    votee: UserProfile

    def to_dict(self) -> dict:
        v = self.vote
        return {
            "id": v.vote_id,
            "session_id": v.session_id,
            "reason": v.reason,
            "honorable_mentions": v.honorable_mentions,
            "value": v.value,
            "created_at": v.created_at.isoformat() if v.created_at else None,
            "voter": self.voter.to_dict(),
            "votee": self.votee.to_dict(),
        }


@dataclass(frozen=True)
class UserVote:
    """Read-model for the "your votes" page."""

    vote: Vote
    votee: UserProfile
    week_number: int
    year: int
