from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..access.policy import EmailDomainPolicy
from ..common.validators import normalize_email, optional_http_url, require_min_length, require_non_empty
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.exceptions import AuthenticationError, AuthorizationError, NotFoundError, ValidationError
from .model import User, UserProfile
from .repository import UserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionUser:
    """What we store into Flask session after login."""

    user_id: int
    name: str
    email: str
    is_admin: bool

    @classmethod
    def from_user(cls, user: User) -> "SessionUser":
        return cls(user_id=user.user_id, name=user.name, email=user.email, is_admin=user.is_admin)


class AuthService:
    """Use cases: sign in, and sign up (first-login provisioning)."""

    def __init__(self, users: UserRepository, policy: EmailDomainPolicy):
        self._users = users
        self._policy = policy

    def authenticate(self, email: str, password: str) -> SessionUser:
        email = normalize_email(email)
        self._policy.ensure_allowed(email)

        user = self._users.get_by_email(email)
        if not user:
            raise AuthenticationError("Invalid email or password")

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # e.g. placeholder or corrupted hashes
            ok = False

        if not ok:
            raise AuthenticationError("Invalid email or password")

        logger.info("User %s signed in", user.user_id)
        return SessionUser.from_user(user)

    def register(self, *, email: str, password: str, name: Optional[str] = None) -> SessionUser:
        email = normalize_email(email)
        self._policy.ensure_allowed(email)
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)

        if self._users.get_by_email(email):
            raise ValidationError("An account with this email already exists")

        display_name = (name or "").strip() or email.split("@")[0]
        user_id = self._users.create_user(
            name=display_name,
            email=email,
            password_hash=generate_password_hash(password),
            is_admin=False,
        )
        logger.info("Provisioned user %s for %s", user_id, email)
        return SessionUser(user_id=user_id, name=display_name, email=email, is_admin=False)

    def refresh(self, user_id: int) -> Optional[SessionUser]:
        """Reload the signed-in user; None when the account is gone."""
        user = self._users.get_by_id(user_id)
        return SessionUser.from_user(user) if user else None


class UserService:
    """Use cases: user directory and profile management."""

    def __init__(self, users: UserRepository):
        self._users = users

    def list_users(self) -> Sequence[UserProfile]:
        return self._users.list_all()

    def get_profile(self, user_id: int) -> UserProfile:
        user = self._users.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")
        return user.profile

    def update_profile(self, user_id: int, *, name: str, avatar_url: Optional[str] = None) -> UserProfile:
        name = require_non_empty(name, "Name")
        avatar_url = optional_http_url(avatar_url, "Avatar URL")

        self.get_profile(user_id)
        self._users.update_profile(user_id, name=name, avatar_url=avatar_url)
        return self.get_profile(user_id)

    def set_admin(self, *, current_user_id: int, user_id: int, is_admin: bool) -> None:
        current = self._users.get_by_id(current_user_id)
        if not current or not current.is_admin:
            raise AuthorizationError("You do not have permission")
        if int(current_user_id) == int(user_id) and not is_admin:
            raise ValidationError("You cannot revoke your own admin rights")

        self.get_profile(user_id)
        self._users.set_admin(user_id, is_admin=is_admin)
