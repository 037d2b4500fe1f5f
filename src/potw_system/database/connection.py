from __future__ import annotations

from dataclasses import dataclass, field

import mysql.connector

from ..core.constants import (
    DEFAULT_COOLDOWN_SECONDS,
    DEFAULT_RETRY_ATTEMPTS,
    DEFAULT_RETRY_MAX_WAIT_SECONDS,
)
from .resilience import CircuitBreaker


@dataclass
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str
    retry_attempts: int = DEFAULT_RETRY_ATTEMPTS
    retry_max_wait: float = DEFAULT_RETRY_MAX_WAIT_SECONDS
    cooldown_seconds: float = DEFAULT_COOLDOWN_SECONDS


@dataclass
class DatabaseConnection:
    """DB connection factory shared by all repositories.

    Built once by the container and passed to every repository. We create
    short-lived connections per operation (safe for simple Flask apps).
    """

    config: DBConfig
    breaker: CircuitBreaker = field(default=None)  # type: ignore[assignment]

    def __post_init__(self):
        if self.breaker is None:
            self.breaker = CircuitBreaker(cooldown_seconds=self.config.cooldown_seconds)

    @property
    def retry_attempts(self) -> int:
        return max(1, int(self.config.retry_attempts))

    @property
    def retry_max_wait(self) -> float:
        return float(self.config.retry_max_wait)

    def connect(self):
        return mysql.connector.connect(
            host=self.config.host,
            port=int(self.config.port),
            user=self.config.user,
            password=self.config.password,
            database=self.config.database,
        )
