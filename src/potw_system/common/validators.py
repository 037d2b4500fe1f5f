from __future__ import annotations

from typing import Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def require_int_range(value: int, field_name: str, lo: int, hi: int) -> int:
    try:
        n = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number")
    if n < lo or n > hi:
        raise ValidationError(f"{field_name} must be between {lo} and {hi}")
    return n


def optional_http_url(value: Optional[str], field_name: str) -> Optional[str]:
    if value is None or not value.strip():
        return None
    value = value.strip()
    if not value.startswith(("http://", "https://")):
        raise ValidationError(f"{field_name} must be an http(s) URL")
    return value


def normalize_email(value: str) -> str:
    email = require_non_empty(value, "Email").lower()
    local, sep, domain = email.partition("@")
    if not sep or not local or not domain:
        raise ValidationError("Email is not valid")
    return email
