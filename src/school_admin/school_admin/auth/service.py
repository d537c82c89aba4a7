from __future__ import annotations

import logging
import re
from typing import Optional

from ..common.validators import optional_text, require_min_length, require_non_empty
from ..core.constants import PASSWORD_MIN_LENGTH
from ..core.exceptions import AuthenticationError, ValidationError
from .model import SessionUser
from .repository import AuthRepository

logger = logging.getLogger(__name__)

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def require_email(value: Optional[str]) -> str:
    email = require_non_empty(value, "email").lower()
    if not EMAIL_RE.match(email):
        raise ValidationError("Please enter a valid email address")
    return email


class AuthService:
    """Use case: sign in, register and recover accounts."""

    def __init__(self, accounts: AuthRepository):
        self._accounts = accounts

    def sign_in(self, email: str, password: str) -> SessionUser:
        email = require_email(email)
        if not password:
            raise AuthenticationError("Invalid email or password")

        user = self._accounts.sign_in(email, password)
        if not user:
            raise AuthenticationError("Invalid email or password")
        logger.info("signed in email=%s", user.email)
        return user

    def register(self, email: str, password: str, confirm_password: str, full_name: Optional[str] = None) -> None:
        email = require_email(email)
        require_min_length(password, "Password", PASSWORD_MIN_LENGTH)
        if password != confirm_password:
            raise ValidationError("Passwords do not match")

        self._accounts.sign_up(email, password, full_name=optional_text(full_name))
        logger.info("registered email=%s", email)

    def request_password_reset(self, email: str, redirect_to: Optional[str] = None) -> None:
        self._accounts.send_password_reset(require_email(email), redirect_to=optional_text(redirect_to))

    def refresh(self, refresh_token: str) -> SessionUser:
        user = self._accounts.refresh(refresh_token) if refresh_token else None
        if not user:
            raise AuthenticationError("Session expired, please sign in again")
        logger.debug("session refreshed email=%s", user.email)
        return user

    def sign_out(self, access_token: str) -> None:
        self._accounts.sign_out(access_token)
