from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from ..core.constants import OWNER_COLUMN
from ..core.exceptions import AuthorizationError

NO_OWNER = "User authentication required. Please log in again."


class AccessGate:
    """Owner-tag isolation applied on the client side.

    Every write is stamped with the acting user's email and every read is
    filtered by it. The backend's row-level security enforces the same rule
    independently; this class only mirrors it and never replaces it.
    """

    def __init__(self, column: str = OWNER_COLUMN):
        self.column = column

    @staticmethod
    def has_owner(owner: Optional[str]) -> bool:
        return bool(owner) and bool(str(owner).strip())

    def require_owner(self, owner: Optional[str]) -> str:
        if not self.has_owner(owner):
            raise AuthorizationError(NO_OWNER)
        return str(owner).strip()

    def stamp(self, row: Mapping[str, Any], owner: Optional[str]) -> Dict[str, Any]:
        owner = self.require_owner(owner)
        return {**dict(row), self.column: owner}

    def scope(self, query, owner: Optional[str]):
        return query.eq(self.column, self.require_owner(owner))

    @staticmethod
    def owns(record_owner: Optional[str], owner: Optional[str]) -> bool:
        if not record_owner or not owner:
            return False
        return record_owner.strip().lower() == owner.strip().lower()
