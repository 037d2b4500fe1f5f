from __future__ import annotations

from flask import Flask, flash, jsonify, render_template

from ..container import Container
from ..core.exceptions import BackendError


def register(app: Flask, container: Container) -> None:
    @app.route("/analytics", endpoint="analytics")
    def analytics():
        data = None
        try:
            data = container.analytics_service.get_analytics()
        except BackendError:
            flash("Could not load analytics, please retry.", "danger")
        except Exception:
            app.logger.exception("Loading analytics failed")
            flash("System error while loading analytics", "danger")
        return render_template("analytics.html", data=data, active_page="analytics")

    @app.route("/api/analytics", endpoint="api_analytics")
    def api_analytics():
        try:
            data = container.analytics_service.get_analytics()
        except BackendError as e:
            return jsonify({"success": False, "message": str(e)}), 503
        except Exception:
            app.logger.exception("Loading analytics failed")
            return jsonify({"success": False, "message": "System error"}), 500
        return jsonify({"success": True, **data.to_dict()})
