from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import VoteValue
from ..results import tally
from ..users.model import UserProfile
from ..users.repository import UserRepository
from ..votes.repository import VoteRepository


@dataclass(frozen=True)
class ValueCount:
    value: str
    count: int

    @property
    def short_label(self) -> str:
        try:
            return VoteValue(self.value).short_label
        except ValueError:
            return self.value

    def percentage(self, total: int) -> int:
        return round(self.count * 100 / total) if total else 0


@dataclass(frozen=True)
class PersonCount:
    user: UserProfile
    total_votes: int


@dataclass(frozen=True)
class AnalyticsData:
    value_distribution: tuple[ValueCount, ...]
    people_ranking: tuple[PersonCount, ...]

    @property
    def tagged_votes(self) -> int:
        return sum(v.count for v in self.value_distribution)

    @property
    def is_empty(self) -> bool:
        return not self.value_distribution and not self.people_ranking

    def to_dict(self) -> dict:
        return {
            "value_distribution": [{"value": v.value, "count": v.count} for v in self.value_distribution],
            "people_ranking": [
                {"user": p.user.to_dict(), "total_votes": p.total_votes} for p in self.people_ranking
            ],
        }


class AnalyticsService:
    """Use case: all-time statistics over every vote ever cast."""

    def __init__(self, votes: VoteRepository, users: UserRepository):
        self._votes = votes
        self._users = users

    def get_analytics(self) -> AnalyticsData:
        votes = self._votes.list_all()

        value_counts: dict[str, int] = {}
        for v in votes:
            if v.value and v.value.strip():
                value_counts[v.value] = value_counts.get(v.value, 0) + 1
        person_counts = tally.count_by_votee(votes)

        users = tally.profile_map(self._users.list_by_ids(person_counts.keys())) if person_counts else {}

        distribution = sorted(
            (ValueCount(value=k, count=c) for k, c in value_counts.items()),
            key=lambda x: x.count,
            reverse=True,
        )
        ranking = sorted(
            (PersonCount(user=users[uid], total_votes=c) for uid, c in person_counts.items() if uid in users),
            key=lambda x: x.total_votes,
            reverse=True,
        )
        return AnalyticsData(value_distribution=tuple(distribution), people_ranking=tuple(ranking))
