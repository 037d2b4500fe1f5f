from __future__ import annotations

from functools import wraps
from typing import Optional

from flask import g, jsonify, render_template, request

from ..users.service import SessionUser


def current_user() -> Optional[SessionUser]:
    return getattr(g, "current_user", None)


def wants_json() -> bool:
    return request.path.startswith("/api/")


def render_forbidden(message: str = "You do not have permission"):
    if wants_json():
        return jsonify({"success": False, "message": message}), 403
    return render_template("403.html", message=message, current_user=current_user()), 403


def admin_required(view):
    """Admin check for a view; sign-in and domain are already enforced by the request hook."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        user = current_user()
        if not user or not user.is_admin:
            return render_forbidden("Only admins can do that")
        return view(*args, **kwargs)

    return wrapper
