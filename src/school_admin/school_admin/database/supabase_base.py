from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Sequence

from supabase import AuthError, PostgrestAPIError, StorageException

from ..access.gate import AccessGate
from ..core.exceptions import BackendError

logger = logging.getLogger(__name__)


@contextmanager
def backend_call(action: str) -> Iterator[None]:
    """Translate client library failures into BackendError.

    The backend's own message is kept verbatim; nothing is retried.
    """

    try:
        yield
    except PostgrestAPIError as e:
        message = getattr(e, "message", None) or str(e)
        logger.warning("backend call failed action=%s code=%s message=%s", action, getattr(e, "code", None), message)
        raise BackendError(message) from e
    except StorageException as e:
        logger.warning("storage call failed action=%s message=%s", action, e)
        raise BackendError(str(e)) from e
    except AuthError as e:
        logger.warning("auth call failed action=%s message=%s", action, e)
        raise BackendError(getattr(e, "message", None) or str(e)) from e


def fetchall(response) -> List[Dict[str, Any]]:
    return list(getattr(response, "data", None) or [])


def fetchone(response) -> Optional[Dict[str, Any]]:
    rows = fetchall(response)
    return rows[0] if rows else None


class SupabaseRepository:
    """Shared plumbing for table repositories.

    Every read goes through ``_select`` (owner-scoped) and every write through
    ``_insert``/``_update``/``_upsert``/``_delete`` (owner-stamped or scoped).
    """

    table: str = ""

    def __init__(self, conn_factory, *, gate: Optional[AccessGate] = None):
        self._conn_factory = conn_factory
        self._gate = gate or AccessGate()

    def _table(self, table: Optional[str] = None):
        return self._conn_factory.connect().table(table or self.table)

    def _select(self, owner: str, columns: str = "*", *, table: Optional[str] = None, count: Optional[str] = None):
        owner = self._gate.require_owner(owner)
        query = self._table(table).select(columns, count=count) if count else self._table(table).select(columns)
        return self._gate.scope(query, owner)

    def _execute(self, query, action: str):
        with backend_call(action):
            return query.execute()

    def _insert(self, owner: str, rows: Sequence[Mapping[str, Any]], *, table: Optional[str] = None) -> List[Dict[str, Any]]:
        owner = self._gate.require_owner(owner)
        payload = [self._gate.stamp(r, owner) for r in rows]
        response = self._execute(self._table(table).insert(payload), f"insert {table or self.table}")
        return fetchall(response)

    def _upsert(
        self,
        owner: str,
        rows: Sequence[Mapping[str, Any]],
        *,
        on_conflict: str,
        table: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        owner = self._gate.require_owner(owner)
        payload = [self._gate.stamp(r, owner) for r in rows]
        response = self._execute(
            self._table(table).upsert(payload, on_conflict=on_conflict),
            f"upsert {table or self.table}",
        )
        return fetchall(response)

    def _update(self, owner: str, record_id: str, patch: Mapping[str, Any], *, table: Optional[str] = None) -> Optional[Dict[str, Any]]:
        owner = self._gate.require_owner(owner)
        query = self._gate.scope(self._table(table).update(dict(patch)), owner).eq("id", record_id)
        return fetchone(self._execute(query, f"update {table or self.table}"))

    def _delete_ids(self, owner: str, ids: Iterable[str], *, table: Optional[str] = None) -> int:
        owner = self._gate.require_owner(owner)
        ids = list(ids)
        if not ids:
            return 0
        query = self._gate.scope(self._table(table).delete(), owner).in_("id", ids)
        return len(fetchall(self._execute(query, f"delete {table or self.table}")))

    def _delete(self, owner: str, record_id: str, *, table: Optional[str] = None) -> bool:
        return self._delete_ids(owner, [record_id], table=table) > 0
