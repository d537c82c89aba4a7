from __future__ import annotations

import time

from flask import Flask, session

from ..common.web import (
    SESSION_ACCESS_TOKEN,
    SESSION_REFRESH_TOKEN,
    SESSION_USER_ID,
    api,
    current_owner,
    fail,
    form_data,
    login_required,
    ok,
    remember_session,
    session_expiring,
)
from ..container import Container
from ..core.constants import SESSION_REFRESH_MARGIN
from ..core.exceptions import AuthenticationError, BackendError


def register(app: Flask, container: Container) -> None:
    @app.before_request
    def refresh_expiring_session():
        # Rotated tokens go straight back into the session; the old refresh token is spent.
        if not session_expiring(SESSION_REFRESH_MARGIN, time.time()):
            return None
        try:
            remember_session(container.auth_service.refresh(session.get(SESSION_REFRESH_TOKEN)))
        except AuthenticationError as e:
            session.clear()
            return fail(str(e), 401)
        except BackendError as e:
            return fail(str(e), 502)
        return None

    @app.route("/api/auth/login", methods=["POST"], endpoint="login")
    @api
    def login():
        form = form_data()
        user = container.auth_service.sign_in(form.get("email", ""), form.get("password", ""))

        session.clear()
        remember_session(user)
        return ok("Signed in successfully", user={"id": user.user_id, "email": user.email, "full_name": user.full_name})

    @app.route("/api/auth/register", methods=["POST"], endpoint="register")
    @api
    def register_account():
        form = form_data()
        container.auth_service.register(
            form.get("email", ""),
            form.get("password", ""),
            form.get("confirm_password", ""),
            form.get("full_name"),
        )
        return ok("Registration successful! Please check your email to confirm your account.", status=201)

    @app.route("/api/auth/forgot-password", methods=["POST"], endpoint="forgot_password")
    @api
    def forgot_password():
        form = form_data()
        container.auth_service.request_password_reset(form.get("email", ""), form.get("redirect_to"))
        return ok("Password reset instructions have been sent to your email")

    @app.route("/api/auth/logout", methods=["POST"], endpoint="logout")
    @api
    def logout():
        access_token = session.get(SESSION_ACCESS_TOKEN)
        if current_owner() and access_token:
            container.auth_service.sign_out(access_token)
        session.clear()
        return ok("Signed out")

    @app.route("/api/auth/me", methods=["GET"], endpoint="me")
    @login_required
    def me():
        return ok(user={"id": session.get(SESSION_USER_ID), "email": current_owner()})
