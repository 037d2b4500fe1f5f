from __future__ import annotations

from flask import Flask, flash, redirect, render_template, request, session, url_for

from ..access.controller import sign_in
from ..access.decorators import admin_required, current_user
from ..container import Container
from ..core.exceptions import AuthenticationError, AuthorizationError, BackendError, DomainError


def register(app: Flask, container: Container) -> None:
    def _auth_page(template: str, action):
        if request.method == "POST":
            try:
                s_user = action()
                sign_in(s_user)
                flash(f"Welcome, {s_user.name}!", "success")
                return redirect(url_for("home"))
            except AuthorizationError:
                session.clear()
                return redirect(url_for("unauthorized"))
            except (AuthenticationError, DomainError) as e:
                flash(str(e), "danger")
            except BackendError:
                flash("The service is temporarily unavailable, please retry.", "danger")
            except Exception as e:
                app.logger.exception("Sign-in failed")
                if bool(app.config.get("DEBUG", False)):
                    flash(f"System error while signing in: {e}", "danger")
                else:
                    flash("System error while signing in", "danger")

        return render_template(template, domain=container.policy.suffix)

    @app.route("/login", methods=["GET", "POST"], endpoint="login")
    def login():
        if "user_id" in session and request.method == "GET":
            return redirect(url_for("home"))
        return _auth_page(
            "login.html",
            lambda: container.auth_service.authenticate(
                request.form.get("email", ""),
                request.form.get("password", ""),
            ),
        )

    @app.route("/signup", methods=["GET", "POST"], endpoint="signup")
    def signup():
        return _auth_page(
            "signup.html",
            lambda: container.auth_service.register(
                email=request.form.get("email", ""),
                password=request.form.get("password", ""),
                name=request.form.get("name"),
            ),
        )

    @app.route("/logout", endpoint="logout")
    def logout():
        session.clear()
        flash("You have been signed out.", "info")
        return redirect(url_for("login"))

    @app.route("/users", endpoint="users")
    def users():
        try:
            data = container.user_service.list_users()
        except BackendError:
            flash("Could not load users, please retry.", "danger")
            data = []
        except Exception:
            app.logger.exception("Loading users failed")
            flash("System error while loading users", "danger")
            data = []
        return render_template("users.html", users=data, active_page="users")

    @app.route("/profile", methods=["GET", "POST"], endpoint="profile")
    def profile():
        user_id = current_user().user_id
        if request.method == "POST":
            try:
                container.user_service.update_profile(
                    user_id,
                    name=request.form.get("name", ""),
                    avatar_url=request.form.get("avatar_url"),
                )
                session["name"] = request.form.get("name", "").strip()
                flash("Profile updated.", "success")
                return redirect(url_for("profile"))
            except DomainError as e:
                flash(str(e), "danger")
            except BackendError:
                flash("The service is temporarily unavailable, please retry.", "danger")
            except Exception:
                app.logger.exception("Profile update failed")
                flash("System error while updating the profile", "danger")

        try:
            data = container.user_service.get_profile(user_id)
        except DomainError as e:
            return render_template("error.html", message=str(e)), 404
        except BackendError as e:
            app.logger.error("Loading profile %s failed: %s", user_id, e)
            return render_template("error.html", message="Service temporarily unavailable, please retry."), 503
        except Exception:
            app.logger.exception("Loading profile %s failed", user_id)
            return render_template("error.html", message="System error while loading the profile"), 500
        return render_template("profile.html", profile=data, active_page="profile")

    @app.route("/admin/users/<int:user_id>/admin", methods=["POST"], endpoint="set_admin")
    @admin_required
    def set_admin(user_id: int):
        try:
            container.user_service.set_admin(
                current_user_id=current_user().user_id,
                user_id=user_id,
                is_admin=request.form.get("is_admin") == "1",
            )
            flash("Admin rights updated.", "success")
        except DomainError as e:
            flash(str(e), "danger")
        except BackendError:
            flash("The service is temporarily unavailable, please retry.", "danger")
        except Exception:
            app.logger.exception("Updating admin rights failed")
            flash("System error while updating admin rights", "danger")

        return redirect(url_for("users"))
