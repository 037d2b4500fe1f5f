from __future__ import annotations

from flask import Flask, flash, jsonify, redirect, render_template, request, url_for

from ..access.decorators import admin_required, current_user
from ..container import Container
from ..core.enums import VoteValue
from ..core.exceptions import BackendError, DomainError, NotFoundError


def register(app: Flask, container: Container) -> None:
    @app.route("/", endpoint="home")
    def home():
        error = None
        try:
            sessions = container.session_service.list_sessions()
        except BackendError as e:
            app.logger.error("Loading sessions failed: %s", e)
            sessions, error = [], "Could not load sessions, please retry."
        except Exception:
            app.logger.exception("Loading sessions failed")
            sessions, error = [], "Failed to load sessions"

        week, year = container.session_service.suggest_next_week()
        return render_template(
            "home.html",
            sessions=sessions,
            error=error,
            suggested_week=week,
            suggested_year=year,
            active_page="home",
        )

    @app.route("/api/sessions", endpoint="api_sessions")
    def api_sessions():
        try:
            sessions = container.session_service.list_sessions()
        except BackendError as e:
            return jsonify({"success": False, "message": str(e)}), 503
        except Exception:
            app.logger.exception("Loading sessions failed")
            return jsonify({"success": False, "message": "System error"}), 500
        return jsonify({"success": True, "sessions": [s.to_dict() for s in sessions]})

    @app.route("/sessions", methods=["POST"], endpoint="create_session")
    @admin_required
    def create_session():
        try:
            s = container.session_service.create_session(
                request.form.get("week_number", ""),
                int(request.form.get("year") or 0) or None,
                acting_user_id=current_user().user_id,
            )
            flash(f"Voting session for {s.label} is open.", "success")
        except ValueError:
            flash("Year must be a number", "danger")
        except DomainError as e:
            flash(str(e), "danger")
        except BackendError:
            flash("The service is temporarily unavailable, please retry.", "danger")
        except Exception:
            app.logger.exception("Creating a session failed")
            flash("System error while creating the session", "danger")
        return redirect(url_for("home"))

    @app.route("/sessions/<int:session_id>/close", methods=["POST"], endpoint="close_session")
    @admin_required
    def close_session(session_id: int):
        try:
            s = container.session_service.close_session(session_id, acting_user_id=current_user().user_id)
            flash(f"Voting for {s.label} is closed.", "success")
        except DomainError as e:
            flash(str(e), "danger")
        except BackendError:
            flash("The service is temporarily unavailable, please retry.", "danger")
        except Exception:
            app.logger.exception("Closing session %s failed", session_id)
            flash("System error while closing the session", "danger")
        return redirect(url_for("view_session", session_id=session_id))

    @app.route("/sessions/<int:session_id>", endpoint="view_session")
    def view_session(session_id: int):
        me = current_user()
        try:
            session = container.session_service.get_session(session_id)
            if not session.is_open:
                return redirect(url_for("session_results", session_id=session_id))
            my_vote = container.vote_service.get_current_vote(me.user_id, session_id)
            candidates = [u for u in container.user_service.list_users() if u.user_id != me.user_id]
        except NotFoundError as e:
            flash(str(e), "warning")
            return redirect(url_for("home"))
        except BackendError as e:
            app.logger.error("Loading session %s failed: %s", session_id, e)
            flash("Could not load the session, please retry.", "danger")
            return redirect(url_for("home"))
        except Exception:
            app.logger.exception("Loading session %s failed", session_id)
            flash("System error while loading the session", "danger")
            return redirect(url_for("home"))

        return render_template(
            "session.html",
            session=session,
            my_vote=my_vote,
            candidates=candidates,
            values=list(VoteValue),
            active_page="home",
        )
