from __future__ import annotations

from flask import Flask, flash, jsonify, redirect, render_template, url_for

from ..container import Container
from ..core.exceptions import BackendError, NotFoundError, SessionNotClosedError


def register(app: Flask, container: Container) -> None:
    @app.route("/sessions/<int:session_id>/results", endpoint="session_results")
    def session_results(session_id: int):
        try:
            results = container.results_service.get_results(session_id)
        except NotFoundError as e:
            flash(str(e), "warning")
            return redirect(url_for("home"))
        except SessionNotClosedError as e:
            flash(str(e), "info")
            return redirect(url_for("view_session", session_id=session_id))
        except BackendError as e:
            app.logger.error("Loading results of session %s failed: %s", session_id, e)
            flash("Could not load results, please retry.", "danger")
            return redirect(url_for("home"))
        except Exception:
            app.logger.exception("Loading results of session %s failed", session_id)
            flash("System error while loading results", "danger")
            return redirect(url_for("home"))
        return render_template("results.html", results=results, active_page="home")

    @app.route("/api/sessions/<int:session_id>/results", endpoint="api_session_results")
    def api_session_results(session_id: int):
        try:
            results = container.results_service.get_results(session_id)
        except NotFoundError as e:
            return jsonify({"success": False, "message": str(e)}), 404
        except SessionNotClosedError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except BackendError as e:
            return jsonify({"success": False, "message": str(e)}), 503
        except Exception:
            app.logger.exception("Loading results of session %s failed", session_id)
            return jsonify({"success": False, "message": "System error"}), 500

        return jsonify(
            {
                "success": True,
                "winners": [r.to_dict() for r in results.winners],
                "all_votees": [r.to_dict() for r in results.all_votees],
                "honorable_mentions": [v.to_dict() for v in results.honorable_mentions],
            }
        )
