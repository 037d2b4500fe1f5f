from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..core.enums import SessionStatus
from ..users.model import UserProfile


@dataclass(frozen=True)
class VotingSession:
    """Domain entity: one weekly round of voting."""

    session_id: int
    week_number: int
    year: int
    status: SessionStatus
    created_at: Optional[datetime] = None

    @property
    def is_open(self) -> bool:
        return self.status == SessionStatus.OPEN

    @property
    def label(self) -> str:
        return f"Week {self.week_number}, {self.year}"


@dataclass(frozen=True)
class SessionSummary:
    """Read-model for the home page: a session with its tally summary."""

    session: VotingSession
    total_votes: int = 0
    voters: tuple[UserProfile, ...] = field(default_factory=tuple)
    winner: Optional[UserProfile] = None

    def to_dict(self) -> dict:
        s = self.session
        return {
            "id": s.session_id,
            "week_number": s.week_number,
            "year": s.year,
            "status": s.status.value,
            "created_at": s.created_at.isoformat() if s.created_at else None,
            "total_votes": self.total_votes,
            "voters": [u.to_dict() for u in self.voters],
            "winner": self.winner.to_dict() if self.winner else None,
        }
