from __future__ import annotations

import logging
from typing import Optional

from supabase import AuthApiError

from ..core.exceptions import BackendError
from ..database.supabase_base import backend_call
from .model import SessionUser
from .repository import AuthRepository

logger = logging.getLogger(__name__)


class SupabaseAuthRepository(AuthRepository):
    """Email/password accounts kept by the hosted auth service."""

    def __init__(self, conn_factory):
        self._conn_factory = conn_factory

    def sign_in(self, email: str, password: str) -> Optional[SessionUser]:
        client = self._conn_factory.connect(anonymous=True)
        try:
            response = client.auth.sign_in_with_password({"email": email, "password": password})
        except AuthApiError as e:
            # 400 from the auth service means bad credentials, not an outage.
            if getattr(e, "status", None) == 400:
                logger.info("sign in rejected email=%s", email)
                return None
            logger.warning("sign in failed email=%s message=%s", email, e)
            raise BackendError(getattr(e, "message", None) or str(e)) from e

        return _session_user(response, email)

    def refresh(self, refresh_token: str) -> Optional[SessionUser]:
        client = self._conn_factory.connect(anonymous=True)
        try:
            response = client.auth.refresh_session(refresh_token)
        except AuthApiError as e:
            # A spent or revoked refresh token is a 4xx; the user has to sign in again.
            status = getattr(e, "status", None)
            if status and 400 <= status < 500:
                logger.info("session refresh rejected status=%s", status)
                return None
            logger.warning("session refresh failed message=%s", e)
            raise BackendError(getattr(e, "message", None) or str(e)) from e
        return _session_user(response)

    def sign_up(self, email: str, password: str, *, full_name: Optional[str] = None) -> None:
        client = self._conn_factory.connect(anonymous=True)
        payload = {"email": email, "password": password}
        if full_name:
            payload["options"] = {"data": {"full_name": full_name}}
        with backend_call("sign up"):
            client.auth.sign_up(payload)

    def send_password_reset(self, email: str, *, redirect_to: Optional[str] = None) -> None:
        client = self._conn_factory.connect(anonymous=True)
        options = {"redirect_to": redirect_to} if redirect_to else {}
        with backend_call("password reset"):
            client.auth.reset_password_for_email(email, options)

    def sign_out(self, access_token: str) -> None:
        client = self._conn_factory.connect(anonymous=True)
        with backend_call("sign out"):
            client.auth.admin.sign_out(access_token)


def _session_user(response, email: str = "") -> Optional[SessionUser]:
    if not response.session or not response.user:
        return None
    metadata = getattr(response.user, "user_metadata", None) or {}
    return SessionUser(
        user_id=str(response.user.id),
        email=response.user.email or email,
        access_token=response.session.access_token,
        refresh_token=response.session.refresh_token,
        full_name=metadata.get("full_name"),
        expires_at=response.session.expires_at,
    )
