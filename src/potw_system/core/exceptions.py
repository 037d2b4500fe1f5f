class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class NotFoundError(DomainError):
    """Raised when a referenced record does not exist."""


class DuplicateSessionError(ValidationError):
    """Raised when a voting session already exists for the requested week."""


class NoOpenSessionError(DomainError):
    """Raised when a vote targets the current session but none is open."""


class AlreadyVotedError(ValidationError):
    """Raised when the voter already has a vote in the session."""


class SessionClosedError(DomainError):
    """Raised when a vote targets a session that is no longer open."""


class SessionNotClosedError(DomainError):
    """Raised when results are requested before the session is closed."""


class BackendError(Exception):
    """Base exception for data backend failures (not business rules)."""


class TransientBackendError(BackendError):
    """Backend failure worth retrying (overload, deadlock, lost connection)."""


class BackendUnavailableError(BackendError):
    """Raised while the circuit breaker suppresses backend calls."""
