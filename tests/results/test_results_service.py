from __future__ import annotations

import pytest

from potw_system.core.constants import UNKNOWN_USER_NAME
from potw_system.core.exceptions import NotFoundError, SessionNotClosedError


@pytest.fixture
def crowd(users_repo, user_factory):
    for uid in range(10, 20):
        users_repo.add(user_factory(uid, f"User{uid}"))
    return users_repo


@pytest.fixture
def session_id(container):
    return container.session_service.create_session(20, 2026).session_id


def _cast(votes_repo, session_id, votees, *, mentions=None):
    mentions = mentions or {}
    for i, votee in enumerate(votees):
        voter = 10 + i
        votes_repo.create(
            session_id=session_id,
            voter_id=voter,
            votee_id=votee,
            reason=f"reason {voter}",
            honorable_mentions=mentions.get(voter, ""),
        )


def _close(container, session_id):
    container.session_service.close_session(session_id)


def test_ranking_keeps_first_seen_order_on_ties(container, votes_repo, crowd, session_id):
    a, b, c = 2, 3, 4
    _cast(votes_repo, session_id, [a, a, a, b, b, b, c])
    _close(container, session_id)

    results = container.results_service.get_results(session_id)

    assert [r.vote_count for r in results.all_votees] == [3, 3, 1]
    assert [r.user.user_id for r in results.all_votees] == [a, b, c]
    assert results.winner.user.user_id == a
    assert results.total_votes == 7


def test_tie_goes_to_earliest_first_vote(container, votes_repo, crowd, session_id):
    _cast(votes_repo, session_id, [3, 2, 2, 3])
    _close(container, session_id)

    results = container.results_service.get_results(session_id)
    assert [r.user.user_id for r in results.all_votees] == [3, 2]


def test_winners_are_top_three(container, votes_repo, crowd, session_id):
    _cast(votes_repo, session_id, [2, 2, 3, 3, 3, 4, 1, 1, 1, 1])
    _close(container, session_id)

    results = container.results_service.get_results(session_id)

    assert [r.user.user_id for r in results.winners] == [1, 3, 2]
    assert len(results.all_votees) == 4
    assert all(len(r.votes) == r.vote_count for r in results.all_votees)


def test_honorable_mentions_come_from_every_votee(container, votes_repo, crowd, session_id):
    votees = [2, 2, 2, 3, 3, 4, 1]
    _cast(votes_repo, session_id, votees, mentions={10: "Bob again", 15: "Dave helped too", 16: "  "})
    _close(container, session_id)

    results = container.results_service.get_results(session_id)

    # Any non-empty text counts, whitespace included; empty strings do not.
    assert [m.vote.honorable_mentions for m in results.honorable_mentions] == [
        "Bob again",
        "Dave helped too",
        "  ",
    ]
    assert results.honorable_mentions[1].votee.name == "Dave"
    assert results.honorable_mentions[1].voter.name == "User15"
    assert results.honorable_mentions[2].votee.name == "Alice"


def test_missing_user_gets_placeholder(container, votes_repo, users_repo, crowd, session_id):
    _cast(votes_repo, session_id, [3])
    users_repo.remove(3)
    _close(container, session_id)

    results = container.results_service.get_results(session_id)
    assert results.winner.user.name == UNKNOWN_USER_NAME


def test_empty_closed_session(container, session_id):
    _close(container, session_id)

    results = container.results_service.get_results(session_id)
    assert results.winners == ()
    assert results.winner is None
    assert results.honorable_mentions == ()


def test_results_require_closed_session(container, session_id):
    with pytest.raises(SessionNotClosedError):
        container.results_service.get_results(session_id)


def test_results_unknown_session(container):
    with pytest.raises(NotFoundError):
        container.results_service.get_results(12345)
