"""Vote counting helpers shared by session listing, results and analytics.

All functions are pure and keep first-seen order, so when counts tie the
candidate whose first vote came earliest ranks first (callers pass votes in
``created_at, vote_id`` order).
"""
from __future__ import annotations

from typing import Iterable, Mapping, Optional, Sequence

from ..users.model import UserProfile
from ..votes.model import Vote, VoteWithUsers
from .model import VoteeResult


def profile_map(profiles: Iterable[UserProfile]) -> dict[int, UserProfile]:
    return {p.user_id: p for p in profiles}


def referenced_user_ids(votes: Iterable[Vote]) -> set[int]:
    ids: set[int] = set()
    for v in votes:
        ids.add(v.voter_id)
        ids.add(v.votee_id)
    return ids


def count_by_votee(votes: Iterable[Vote]) -> dict[int, int]:
    counts: dict[int, int] = {}
    for v in votes:
        counts[v.votee_id] = counts.get(v.votee_id, 0) + 1
    return counts


def pick_winner(votes: Sequence[Vote]) -> Optional[int]:
    """Votee id of the first candidate to reach the highest count, or None."""
    winner: Optional[int] = None
    best = 0
    for votee_id, count in count_by_votee(votes).items():
        if count > best:
            best = count
            winner = votee_id
    return winner


def distinct_voter_ids(votes: Iterable[Vote]) -> list[int]:
    return list(dict.fromkeys(v.voter_id for v in votes))


def _lookup(users: Mapping[int, UserProfile], user_id: int) -> UserProfile:
    return users.get(user_id) or UserProfile.unknown(user_id)


def enrich(vote: Vote, users: Mapping[int, UserProfile]) -> VoteWithUsers:
    return VoteWithUsers(vote=vote, voter=_lookup(users, vote.voter_id), votee=_lookup(users, vote.votee_id))


def group_by_votee(votes: Iterable[Vote], users: Mapping[int, UserProfile]) -> list[VoteeResult]:
    """Group votes per votee, ranked by vote count (descending, stable)."""
    groups: dict[int, list[VoteWithUsers]] = {}
    for v in votes:
        groups.setdefault(v.votee_id, []).append(enrich(v, users))

    results = [
        VoteeResult(user=_lookup(users, votee_id), vote_count=len(items), votes=tuple(items))
        for votee_id, items in groups.items()
    ]
    results.sort(key=lambda r: r.vote_count, reverse=True)
    return results


def honorable_mentions(groups: Iterable[VoteeResult]) -> list[VoteWithUsers]:
    return [vw for g in groups for vw in g.votes if vw.vote.has_honorable_mentions]
