from __future__ import annotations

import copy
import itertools
from dataclasses import dataclass
from typing import Any, Optional

import pytest
from supabase import PostgrestAPIError


@dataclass
class FakeResponse:
    data: list
    count: Optional[int] = None


class FakeQuery:
    """Just enough of the postgrest query builder for repository tests."""

    def __init__(self, db: "FakeSupabase", table: str, op: str, payload: Any = None, *, on_conflict: str = "", count: Optional[str] = None):
        self._db = db
        self._table = table
        self._op = op
        self._payload = payload
        self._on_conflict = on_conflict
        self._count = count
        self._filters: list = []
        self._order: Optional[tuple[str, bool]] = None
        self._limit: Optional[int] = None

    def eq(self, column, value):
        self._filters.append(lambda r: r.get(column) == value)
        return self

    def in_(self, column, values):
        values = list(values)
        self._filters.append(lambda r: r.get(column) in values)
        return self

    def gte(self, column, value):
        self._filters.append(lambda r: r.get(column) is not None and r.get(column) >= value)
        return self

    def lte(self, column, value):
        self._filters.append(lambda r: r.get(column) is not None and r.get(column) <= value)
        return self

    def order(self, column, desc=False):
        self._order = (column, desc)
        return self

    def limit(self, n):
        self._limit = n
        return self

    def _match(self, row) -> bool:
        return all(f(row) for f in self._filters)

    def execute(self):
        self._db.calls.append((self._table, self._op))
        failure = self._db.failures.pop((self._table, self._op), None)
        if failure:
            raise PostgrestAPIError({"message": failure, "code": "XX000"})
        return getattr(self, f"_{self._op}")()

    def _select(self):
        rows = [copy.deepcopy(r) for r in self._db.rows(self._table) if self._match(r)]
        if self._order:
            column, desc = self._order
            rows.sort(key=lambda r: (r.get(column) is None, r.get(column) or ""), reverse=desc)
        total = len(rows)
        if self._limit is not None:
            rows = rows[: self._limit]
        return FakeResponse(rows, total if self._count else None)

    def _insert(self):
        return FakeResponse([copy.deepcopy(self._db.add(self._table, r)) for r in self._payload])

    def _upsert(self):
        keys = [k.strip() for k in self._on_conflict.split(",")]
        out = []
        for r in self._payload:
            existing = next((x for x in self._db.rows(self._table) if all(x.get(k) == r.get(k) for k in keys)), None)
            if existing is not None:
                existing.update(r)
                out.append(copy.deepcopy(existing))
            else:
                out.append(copy.deepcopy(self._db.add(self._table, r)))
        return FakeResponse(out)

    def _update(self):
        out = []
        for r in self._db.rows(self._table):
            if self._match(r):
                r.update(self._payload)
                out.append(copy.deepcopy(r))
        return FakeResponse(out)

    def _delete(self):
        keep, gone = [], []
        for r in self._db.rows(self._table):
            (gone if self._match(r) else keep).append(r)
        self._db.tables[self._table] = keep
        return FakeResponse(gone)


class FakeTable:
    def __init__(self, db: "FakeSupabase", name: str):
        self._db = db
        self._name = name

    def select(self, columns="*", count=None):
        return FakeQuery(self._db, self._name, "select", count=count)

    def insert(self, rows):
        return FakeQuery(self._db, self._name, "insert", list(rows))

    def upsert(self, rows, on_conflict=""):
        return FakeQuery(self._db, self._name, "upsert", list(rows), on_conflict=on_conflict)

    def update(self, patch):
        return FakeQuery(self._db, self._name, "update", dict(patch))

    def delete(self):
        return FakeQuery(self._db, self._name, "delete")


class FakeBucket:
    def __init__(self, db: "FakeSupabase", name: str):
        self._db = db
        self._name = name

    def upload(self, path, data, options=None):
        self._db.calls.append((f"storage:{self._name}", "upload"))
        self._db.files[f"{self._name}/{path}"] = data

    def get_public_url(self, path):
        return f"https://storage.test/{self._name}/{path}"


class FakeStorage:
    def __init__(self, db: "FakeSupabase"):
        self._db = db

    def from_(self, bucket):
        return FakeBucket(self._db, bucket)


class FakeSupabase:
    """In-memory stand-in for a Supabase client plus the connection factory."""

    def __init__(self):
        self.tables: dict[str, list[dict]] = {}
        self.files: dict[str, bytes] = {}
        self.calls: list[tuple[str, str]] = []
        self.failures: dict[tuple[str, str], str] = {}
        self.connects = 0
        self._ids = itertools.count(1)
        self.storage = FakeStorage(self)

    # connection factory interface
    def connect(self, *, anonymous: bool = False):
        self.connects += 1
        return self

    def table(self, name):
        return FakeTable(self, name)

    def rows(self, name) -> list[dict]:
        return self.tables.setdefault(name, [])

    def add(self, name, row) -> dict:
        n = next(self._ids)
        stored = {"id": f"{name}-{n}", "created_at": f"2026-01-01T00:00:00.{n:06d}", **row}
        self.rows(name).append(stored)
        return stored

    def fail_next(self, table: str, op: str, message: str = "backend unavailable") -> None:
        self.failures[(table, op)] = message


@pytest.fixture
def fake_db() -> FakeSupabase:
    return FakeSupabase()
