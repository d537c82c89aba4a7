from __future__ import annotations

from typing import Optional, Protocol

from .model import SessionUser


class AuthRepository(Protocol):
    def sign_in(self, email: str, password: str) -> Optional[SessionUser]:
        """Return the session for valid credentials, None otherwise."""

        raise NotImplementedError

    def sign_up(self, email: str, password: str, *, full_name: Optional[str] = None) -> None:
        raise NotImplementedError

    def send_password_reset(self, email: str, *, redirect_to: Optional[str] = None) -> None:
        raise NotImplementedError

    def refresh(self, refresh_token: str) -> Optional[SessionUser]:
        """Exchange a refresh token for a new session, None once it is spent or revoked."""

        raise NotImplementedError

    def sign_out(self, access_token: str) -> None:
        raise NotImplementedError
