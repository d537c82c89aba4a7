from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class SessionUser:
    """What we store into the Flask session after login."""

    user_id: str
    email: str
    access_token: str
    refresh_token: str
    full_name: Optional[str] = None
    expires_at: Optional[int] = None
