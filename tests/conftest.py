from __future__ import annotations

import dataclasses
from datetime import datetime, timedelta
from typing import Iterable, Optional

import pytest
from werkzeug.security import generate_password_hash

from potw_system.access.policy import EmailDomainPolicy
from potw_system.container import wire
from potw_system.core.enums import SessionStatus
from potw_system.core.exceptions import AlreadyVotedError, DuplicateSessionError
from potw_system.main import create_app
from potw_system.sessions.model import VotingSession
from potw_system.users.model import User
from potw_system.votes.model import Vote

EPOCH = datetime(2026, 1, 5, 9, 0, 0)
PASSWORD = "secret123"
# Cheap hash so the suite stays fast.
PASSWORD_HASH = generate_password_hash(PASSWORD, method="pbkdf2:sha256:1000")


def make_user(user_id: int, name: str, email: Optional[str] = None, *, is_admin: bool = False) -> User:
    return User(
        user_id=user_id,
        name=name,
        email=email or f"{name.lower()}@usehorizon.ai",
        password_hash=PASSWORD_HASH,
        is_admin=is_admin,
    )


class InMemoryUsers:
    def __init__(self, users: Iterable[User] = ()):
        self._by_id: dict[int, User] = {u.user_id: u for u in users}
        self._next_id = max(self._by_id, default=0) + 1

    def add(self, user: User) -> User:
        self._by_id[user.user_id] = user
        self._next_id = max(self._next_id, user.user_id + 1)
        return user

    def remove(self, user_id: int) -> None:
        self._by_id.pop(user_id, None)

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self._by_id.get(int(user_id))

    def get_by_email(self, email: str) -> Optional[User]:
        for u in self._by_id.values():
            if u.email.lower() == email.lower():
                return u
        return None

    def list_all(self):
        return [u.profile for u in sorted(self._by_id.values(), key=lambda u: u.name)]

    def list_by_ids(self, user_ids):
        wanted = set(user_ids)
        return [u.profile for u in self._by_id.values() if u.user_id in wanted]

    def create_user(self, *, name, email, password_hash, is_admin=False) -> int:
        uid = self._next_id
        self._next_id += 1
        self._by_id[uid] = User(user_id=uid, name=name, email=email, password_hash=password_hash, is_admin=is_admin)
        return uid

    def update_profile(self, user_id, *, name, avatar_url) -> bool:
        self._by_id[user_id] = dataclasses.replace(self._by_id[user_id], name=name, avatar_url=avatar_url)
        return True

    def set_admin(self, user_id, *, is_admin) -> bool:
        self._by_id[user_id] = dataclasses.replace(self._by_id[user_id], is_admin=is_admin)
        return True

    def ping(self) -> bool:
        return True


class InMemorySessions:
    def __init__(self):
        self._by_id: dict[int, VotingSession] = {}
        self._next_id = 1

    def get_by_id(self, session_id):
        return self._by_id.get(int(session_id))

    def get_by_week(self, *, week_number, year):
        for s in self._by_id.values():
            if s.week_number == week_number and s.year == year:
                return s
        return None

    def _newest_first(self):
        return sorted(self._by_id.values(), key=lambda s: (s.created_at, s.session_id), reverse=True)

    def get_latest_open(self):
        return next((s for s in self._newest_first() if s.is_open), None)

    def list_all(self):
        return self._newest_first()

    def create(self, *, week_number, year) -> int:
        if self.get_by_week(week_number=week_number, year=year):
            raise DuplicateSessionError("A voting session already exists for this week")
        sid = self._next_id
        self._next_id += 1
        self._by_id[sid] = VotingSession(
            session_id=sid,
            week_number=week_number,
            year=year,
            status=SessionStatus.OPEN,
            created_at=EPOCH + timedelta(days=sid),
        )
        return sid

    def set_status(self, session_id, status) -> None:
        self._by_id[session_id] = dataclasses.replace(self._by_id[session_id], status=status)


class InMemoryVotes:
    def __init__(self):
        self._votes: list[Vote] = []

    def get_for_voter_and_session(self, *, voter_id, session_id):
        for v in self._votes:
            if v.voter_id == voter_id and v.session_id == session_id:
                return v
        return None

    def create(self, *, session_id, voter_id, votee_id, reason, honorable_mentions="", value=None) -> int:
        if self.get_for_voter_and_session(voter_id=voter_id, session_id=session_id):
            raise AlreadyVotedError("You have already voted in this session")
        vid = len(self._votes) + 1
        self._votes.append(
            Vote(
                vote_id=vid,
                session_id=session_id,
                voter_id=voter_id,
                votee_id=votee_id,
                reason=reason,
                honorable_mentions=honorable_mentions,
                value=value,
                created_at=EPOCH + timedelta(minutes=vid),
            )
        )
        return vid

    def list_for_session(self, session_id):
        return [v for v in self._votes if v.session_id == session_id]

    def list_for_sessions(self, session_ids):
        wanted = set(session_ids)
        return [v for v in self._votes if v.session_id in wanted]

    def list_all(self):
        return list(self._votes)

    def list_for_voter(self, voter_id):
        return [v for v in reversed(self._votes) if v.voter_id == voter_id]


@pytest.fixture
def users_repo():
    return InMemoryUsers(
        [
            make_user(1, "Alice", is_admin=True),
            make_user(2, "Bob"),
            make_user(3, "Carol"),
            make_user(4, "Dave"),
            make_user(5, "Mallory", "mallory@gmail.com"),
        ]
    )


@pytest.fixture
def sessions_repo():
    return InMemorySessions()


@pytest.fixture
def votes_repo():
    return InMemoryVotes()


@pytest.fixture
def container(users_repo, sessions_repo, votes_repo):
    return wire(
        users_repo=users_repo,
        sessions_repo=sessions_repo,
        votes_repo=votes_repo,
        policy=EmailDomainPolicy("usehorizon.ai"),
    )


@pytest.fixture
def app(container):
    return create_app(container, settings_module="potw_system.config.testing")


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login_as(client):
    def _login(user_id: int):
        with client.session_transaction() as s:
            s["user_id"] = user_id
        return client

    return _login


@pytest.fixture
def user_factory():
    return make_user


@pytest.fixture
def password():
    return PASSWORD
