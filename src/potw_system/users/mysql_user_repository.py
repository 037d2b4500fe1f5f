from __future__ import annotations

from typing import Iterable, Optional, Sequence

from ..core.exceptions import ValidationError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause, is_duplicate_key
from ..database.resilience import backend_call
from .model import User, UserProfile
from .repository import UserRepository

_USER_COLUMNS = "user_id, name, email, password_hash, avatar_url, is_admin, created_at"
_PROFILE_COLUMNS = "user_id, name, email, avatar_url, is_admin"


def _to_user(r: dict) -> User:
    return User(
        user_id=int(r["user_id"]),
        name=r["name"],
        email=r["email"],
        password_hash=r["password_hash"],
        avatar_url=r.get("avatar_url"),
        is_admin=bool(r.get("is_admin")),
        created_at=r.get("created_at"),
    )


def _to_profile(r: dict) -> UserProfile:
    return UserProfile(
        user_id=int(r["user_id"]),
        name=r["name"],
        email=r["email"],
        avatar_url=r.get("avatar_url"),
        is_admin=bool(r.get("is_admin")),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @backend_call
    def get_by_id(self, user_id: int) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE user_id=%s", (int(user_id),))
            row = fetchone(cur)
            return _to_user(row) if row else None

    @backend_call
    def get_by_email(self, email: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE email=%s", (email,))
            row = fetchone(cur)
            return _to_user(row) if row else None

    @backend_call
    def list_all(self) -> Sequence[UserProfile]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_PROFILE_COLUMNS} FROM users ORDER BY name")
            return [_to_profile(r) for r in fetchall(cur)]

    @backend_call
    def list_by_ids(self, user_ids: Iterable[int]) -> Sequence[UserProfile]:
        ids = sorted({int(i) for i in user_ids})
        if not ids:
            return []
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_PROFILE_COLUMNS} FROM users WHERE user_id IN ({in_clause(ids)})", tuple(ids))
            return [_to_profile(r) for r in fetchall(cur)]

    @backend_call
    def create_user(self, *, name: str, email: str, password_hash: str, is_admin: bool = False) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO users(name, email, password_hash, is_admin)
                    VALUES(%s,%s,%s,%s)
                    """,
                    (name, email, password_hash, int(is_admin)),
                )
                return int(cur.lastrowid)
        except Exception as e:
            if is_duplicate_key(e):
                raise ValidationError("An account with this email already exists") from e
            raise

    @backend_call
    def update_profile(self, user_id: int, *, name: str, avatar_url: Optional[str]) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE users SET name=%s, avatar_url=%s WHERE user_id=%s",
                (name, avatar_url, int(user_id)),
            )
            return cur.rowcount > 0

    @backend_call
    def set_admin(self, user_id: int, *, is_admin: bool) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE users SET is_admin=%s WHERE user_id=%s", (int(is_admin), int(user_id)))
            return cur.rowcount > 0

    @backend_call
    def ping(self) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT user_id FROM users LIMIT 1")
            fetchall(cur)
            return True
