from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.constants import UNKNOWN_USER_NAME


@dataclass(frozen=True)
class UserProfile:
    """Public view of a user, safe to hand to templates and JSON."""

    user_id: int
    name: str
    email: str
    avatar_url: Optional[str] = None
    is_admin: bool = False

    @property
    def initial(self) -> str:
        return (self.name[:1] or "?").upper()

    def to_dict(self) -> dict:
        return {
            "id": self.user_id,
            "name": self.name,
            "email": self.email,
            "avatar_url": self.avatar_url,
            "is_admin": self.is_admin,
        }

    @classmethod
    def unknown(cls, user_id: int) -> "UserProfile":
        return cls(user_id=int(user_id), name=UNKNOWN_USER_NAME, email="")


@dataclass(frozen=True)
class User:
    """Domain entity: a stored account, including its password hash."""

    user_id: int
    name: str
    email: str
    password_hash: str
    avatar_url: Optional[str] = None
    is_admin: bool = False
    created_at: Optional[datetime] = None

    @property
    def profile(self) -> UserProfile:
        return UserProfile(
            user_id=self.user_id,
            name=self.name,
            email=self.email,
            avatar_url=self.avatar_url,
            is_admin=self.is_admin,
        )
