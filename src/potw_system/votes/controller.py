from __future__ import annotations

from flask import Flask, flash, redirect, render_template, request, url_for

from ..access.decorators import current_user
from ..container import Container
from ..core.exceptions import AlreadyVotedError, BackendError, DomainError


def register(app: Flask, container: Container) -> None:
    @app.route("/sessions/<int:session_id>/vote", methods=["POST"], endpoint="submit_vote")
    def submit_vote(session_id: int):
        try:
            votee_id = int(request.form.get("votee_id") or 0)
            container.vote_service.submit_vote(
                current_user().user_id,
                votee_id,
                request.form.get("reason", ""),
                honorable_mentions=request.form.get("honorable_mentions", ""),
                value=request.form.get("value") or None,
                session_id=session_id,
            )
            flash("Your vote has been recorded!", "success")
        except AlreadyVotedError as e:
            flash(str(e), "warning")
        except DomainError as e:
            flash(str(e), "danger")
        except ValueError:
            flash("Please pick someone to vote for", "danger")
        except BackendError:
            flash("The service is temporarily unavailable, please retry.", "danger")
        except Exception:
            app.logger.exception("Vote submission failed")
            flash("System error while submitting the vote", "danger")
        return redirect(url_for("view_session", session_id=session_id))

    @app.route("/me/votes", endpoint="my_votes")
    def my_votes():
        try:
            votes = container.vote_service.get_user_votes(current_user().user_id)
        except BackendError:
            flash("Could not load your votes, please retry.", "danger")
            votes = []
        except Exception:
            app.logger.exception("Loading votes of user %s failed", current_user().user_id)
            flash("System error while loading your votes", "danger")
            votes = []
        return render_template("my_votes.html", votes=votes, active_page="my_votes")
