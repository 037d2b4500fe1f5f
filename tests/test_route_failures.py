from __future__ import annotations

import mysql.connector
import pytest

from potw_system.core.exceptions import BackendUnavailableError


def _down(*args, **kwargs):
    raise BackendUnavailableError("down")


def _broken(*args, **kwargs):
    raise mysql.connector.errors.ProgrammingError(msg="Table 'votes' doesn't exist")


@pytest.fixture
def open_session(container):
    return container.session_service.create_session(7, 2026)


@pytest.fixture
def closed_session(container):
    s = container.session_service.create_session(6, 2026)
    return container.session_service.close_session(s.session_id)


@pytest.mark.parametrize("failure", [_down, _broken])
def test_voting_page_survives_vote_lookup_failure(login_as, votes_repo, open_session, monkeypatch, failure):
    monkeypatch.setattr(votes_repo, "get_for_voter_and_session", failure)

    resp = login_as(2).get(f"/sessions/{open_session.session_id}")

    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/")


def test_voting_page_survives_user_list_failure(login_as, users_repo, open_session, monkeypatch):
    monkeypatch.setattr(users_repo, "list_all", _down)

    resp = login_as(2).get(f"/sessions/{open_session.session_id}", follow_redirects=True)

    assert resp.status_code == 200
    assert b"Could not load the session" in resp.data


@pytest.mark.parametrize("failure", [_down, _broken])
def test_results_survive_backend_failure(login_as, votes_repo, closed_session, monkeypatch, failure):
    monkeypatch.setattr(votes_repo, "list_for_session", failure)
    client = login_as(2)

    resp = client.get(f"/sessions/{closed_session.session_id}/results")
    assert resp.status_code == 302

    api = client.get(f"/api/sessions/{closed_session.session_id}/results")
    assert api.status_code in (500, 503)
    assert api.get_json()["success"] is False


@pytest.mark.parametrize("failure, status", [(_down, 503), (_broken, 500)])
def test_profile_page_survives_backend_failure(login_as, container, monkeypatch, failure, status):
    monkeypatch.setattr(container.user_service, "get_profile", failure)

    resp = login_as(2).get("/profile")

    assert resp.status_code == status
    assert b"Something went wrong" in resp.data


@pytest.mark.parametrize("path", ["/me/votes", "/analytics", "/users", "/"])
def test_list_pages_survive_unexpected_errors(login_as, votes_repo, users_repo, sessions_repo, monkeypatch, path):
    for repo, name in [
        (votes_repo, "list_for_voter"),
        (votes_repo, "list_all"),
        (users_repo, "list_all"),
        (sessions_repo, "list_all"),
    ]:
        monkeypatch.setattr(repo, name, _broken)

    assert login_as(2).get(path).status_code == 200


@pytest.mark.parametrize("path", ["/api/analytics", "/api/sessions"])
def test_json_reads_report_errors(login_as, votes_repo, sessions_repo, monkeypatch, path):
    monkeypatch.setattr(votes_repo, "list_all", _broken)
    monkeypatch.setattr(sessions_repo, "list_all", _broken)

    resp = login_as(2).get(path)

    assert resp.status_code == 500
    assert resp.get_json() == {"success": False, "message": "System error"}
