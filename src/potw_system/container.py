from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .access.policy import EmailDomainPolicy
from .analytics.service import AnalyticsService
from .core.constants import (
    DEFAULT_ALLOWED_EMAIL_DOMAIN,
    DEFAULT_COOLDOWN_SECONDS,
    DEFAULT_RETRY_ATTEMPTS,
    DEFAULT_RETRY_MAX_WAIT_SECONDS,
)
from .database.connection import DBConfig, DatabaseConnection
from .results.service import ResultsService
from .sessions.mysql_session_repository import MySQLSessionRepository
from .sessions.repository import SessionRepository
from .sessions.service import SessionService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, UserService
from .votes.mysql_vote_repository import MySQLVoteRepository
from .votes.repository import VoteRepository
from .votes.service import VoteService


@dataclass(frozen=True)
class Container:
    policy: EmailDomainPolicy

    users_repo: UserRepository
    sessions_repo: SessionRepository
    votes_repo: VoteRepository

    auth_service: AuthService
    user_service: UserService
    session_service: SessionService
    vote_service: VoteService
    results_service: ResultsService
    analytics_service: AnalyticsService

    conn: Optional[DatabaseConnection] = None


def wire(
    *,
    users_repo: UserRepository,
    sessions_repo: SessionRepository,
    votes_repo: VoteRepository,
    policy: EmailDomainPolicy,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Build services on top of the given repositories (MySQL or in-memory)."""
    return Container(
        policy=policy,
        users_repo=users_repo,
        sessions_repo=sessions_repo,
        votes_repo=votes_repo,
        auth_service=AuthService(users_repo, policy),
        user_service=UserService(users_repo),
        session_service=SessionService(sessions_repo, votes_repo, users_repo),
        vote_service=VoteService(votes_repo, sessions_repo, users_repo),
        results_service=ResultsService(sessions_repo, votes_repo, users_repo),
        analytics_service=AnalyticsService(votes_repo, users_repo),
        conn=conn,
    )


def build_container(
    *,
    db_config: dict,
    allowed_domain: str = DEFAULT_ALLOWED_EMAIL_DOMAIN,
    retry_attempts: int = DEFAULT_RETRY_ATTEMPTS,
    retry_max_wait: float = DEFAULT_RETRY_MAX_WAIT_SECONDS,
    cooldown_seconds: float = DEFAULT_COOLDOWN_SECONDS,
) -> Container:
    config = DBConfig(
        host=str(db_config["host"]),
        port=int(db_config.get("port", 3306)),
        user=str(db_config["user"]),
        password=str(db_config["password"]),
        database=str(db_config["database"]),
        retry_attempts=int(retry_attempts),
        retry_max_wait=float(retry_max_wait),
        cooldown_seconds=float(cooldown_seconds),
    )
    # One connection factory (and one circuit breaker) for the whole process.
    conn = DatabaseConnection(config)

    return wire(
        users_repo=MySQLUserRepository(conn),
        sessions_repo=MySQLSessionRepository(conn),
        votes_repo=MySQLVoteRepository(conn),
        policy=EmailDomainPolicy(allowed_domain),
        conn=conn,
    )
