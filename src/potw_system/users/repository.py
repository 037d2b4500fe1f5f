from __future__ import annotations

from typing import Iterable, Optional, Protocol, Sequence

from .model import User, UserProfile


class UserRepository(Protocol):
    """Repository interface for users.

    Services depend on this interface, not on a concrete database.
    """

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[User]:
        raise NotImplementedError

    def list_all(self) -> Sequence[UserProfile]:
        raise NotImplementedError

    def list_by_ids(self, user_ids: Iterable[int]) -> Sequence[UserProfile]:
        """Batched lookup; unknown ids are simply absent from the result."""

        raise NotImplementedError

    def create_user(self, *, name: str, email: str, password_hash: str, is_admin: bool = False) -> int:
        raise NotImplementedError

    def update_profile(self, user_id: int, *, name: str, avatar_url: Optional[str]) -> bool:
        raise NotImplementedError

    def set_admin(self, user_id: int, *, is_admin: bool) -> bool:
        raise NotImplementedError

    def ping(self) -> bool:
        raise NotImplementedError
