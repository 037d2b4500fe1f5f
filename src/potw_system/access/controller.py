from __future__ import annotations

from flask import Flask, flash, g, jsonify, redirect, render_template, request, session, url_for

from ..container import Container
from ..core.exceptions import BackendError
from .decorators import current_user, wants_json

# Endpoints reachable without a signed-in, allowed-domain user.
PUBLIC_ENDPOINTS = frozenset({"login", "signup", "logout", "unauthorized", "health", "static"})


def sign_in(user) -> None:
    session.clear()
    session["user_id"] = user.user_id
    session["email"] = user.email
    session["name"] = user.name


def register(app: Flask, container: Container) -> None:
    @app.before_request
    def enforce_access():
        """The authoritative access check for every request.

        A signed-in user whose email is outside the allowed domain is signed
        out and sent to the unauthorized page, whatever the entry point.
        """
        g.current_user = None
        if request.endpoint is None or request.endpoint in PUBLIC_ENDPOINTS:
            return None

        user_id = session.get("user_id")
        if not user_id:
            if wants_json():
                return jsonify({"success": False, "message": "Not authenticated"}), 401
            flash("Please sign in to continue", "warning")
            return redirect(url_for("login"))

        try:
            user = container.auth_service.refresh(int(user_id))
        except BackendError as e:
            app.logger.error("Could not load user %s: %s", user_id, e)
            if wants_json():
                return jsonify({"success": False, "message": "Service temporarily unavailable"}), 503
            return render_template("error.html", message="Service temporarily unavailable, please retry."), 503

        if user is None:
            session.clear()
            if wants_json():
                return jsonify({"success": False, "message": "Not authenticated"}), 401
            return redirect(url_for("login"))

        if not container.policy.is_allowed(user.email):
            app.logger.warning("Signing out user %s: email %s outside allowed domain", user.user_id, user.email)
            session.clear()
            if wants_json():
                return jsonify({"success": False, "message": "Invalid email domain"}), 403
            return redirect(url_for("unauthorized"))

        g.current_user = user
        return None

    @app.context_processor
    def inject_user():
        return {"current_user": current_user()}

    @app.route("/unauthorized", endpoint="unauthorized")
    def unauthorized():
        return render_template("unauthorized.html", domain=container.policy.suffix), 403

    @app.route("/health", endpoint="health")
    def health():
        return jsonify({"status": "healthy"})

    @app.route("/api/test-auth", methods=["POST"], endpoint="test_auth")
    def test_auth():
        user = current_user()
        try:
            db_ok = container.users_repo.ping()
        except Exception as e:
            app.logger.exception("Self-test database probe failed")
            return jsonify({"success": False, "message": str(e)}), 500

        return jsonify(
            {
                "success": True,
                "user": {"id": user.user_id, "email": user.email},
                "db": bool(db_ok),
            }
        )
