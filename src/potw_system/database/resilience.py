"""Retry/backoff and circuit breaker for data backend calls.

Every repository method is wrapped with :func:`backend_call`:

- a :class:`TransientBackendError` is retried with exponential backoff
  (``DB_RETRY_ATTEMPTS`` attempts in total);
- when the attempts are exhausted the breaker is tripped and the error is
  re-raised;
- while the breaker is open, calls fail fast with
  :class:`BackendUnavailableError` until the cooldown window has elapsed;
- a call that succeeds closes the breaker again.
"""
from __future__ import annotations

import logging
import threading
import time
from functools import wraps
from typing import Callable, Optional

from tenacity import (
    RetryError,
    Retrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from ..core.constants import DEFAULT_COOLDOWN_SECONDS
from ..core.exceptions import BackendUnavailableError, TransientBackendError

logger = logging.getLogger(__name__)


class CircuitBreaker:
    """Time-gated flag that suppresses backend calls after repeated failures."""

    def __init__(self, cooldown_seconds: float = DEFAULT_COOLDOWN_SECONDS, *, clock: Callable[[], float] = time.monotonic):
        self._cooldown = float(cooldown_seconds)
        self._clock = clock
        self._lock = threading.Lock()
        self._open_until: Optional[float] = None

    @property
    def is_open(self) -> bool:
        with self._lock:
            if self._open_until is None:
                return False
            if self._clock() >= self._open_until:
                self._open_until = None
                return False
            return True

    def remaining(self) -> float:
        with self._lock:
            if self._open_until is None:
                return 0.0
            return max(0.0, self._open_until - self._clock())

    def trip(self) -> None:
        with self._lock:
            self._open_until = self._clock() + self._cooldown
        logger.error("Backend circuit opened for %.1fs", self._cooldown)

    def reset(self) -> None:
        with self._lock:
            self._open_until = None

    def ensure_closed(self) -> None:
        if self.is_open:
            raise BackendUnavailableError(
                f"Database is temporarily unavailable, retry in {int(self.remaining()) + 1}s"
            )


def backend_call(method):
    """Decorate a repository method (``self._conn_factory`` must be a DatabaseConnection)."""

    @wraps(method)
    def wrapper(self, *args, **kwargs):
        conn_factory = self._conn_factory
        breaker: CircuitBreaker = conn_factory.breaker
        breaker.ensure_closed()

        retrying = Retrying(
            retry=retry_if_exception_type(TransientBackendError),
            stop=stop_after_attempt(conn_factory.retry_attempts),
            wait=wait_exponential(multiplier=0.5, max=conn_factory.retry_max_wait),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )
        try:
            result = retrying(method, self, *args, **kwargs)
        except (TransientBackendError, RetryError):
            breaker.trip()
            raise
        breaker.reset()
        return result

    return wrapper
