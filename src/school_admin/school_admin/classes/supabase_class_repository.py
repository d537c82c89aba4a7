from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

from ..core.constants import DEFAULT_MAX_STUDENTS
from ..database.supabase_base import SupabaseRepository, fetchall, fetchone
from .model import SchoolClass
from .repository import ClassRepository

COLUMNS = "*, teacher:teachers(full_name)"


def to_class(r: dict) -> SchoolClass:
    teacher = r.get("teacher") or {}
    return SchoolClass(
        class_id=str(r["id"]),
        name=r["name"],
        section=r.get("section") or "",
        teacher_id=r.get("teacher_id"),
        subjects=tuple(r.get("subjects") or ()),
        max_students=int(r.get("max_students") or DEFAULT_MAX_STUDENTS),
        teacher_name=teacher.get("full_name"),
    )


class SupabaseClassRepository(SupabaseRepository, ClassRepository):
    table = "classes"

    def list_all(self, owner: str, *, teacher_id: Optional[str] = None) -> Sequence[SchoolClass]:
        query = self._select(owner, COLUMNS)
        if teacher_id:
            query = query.eq("teacher_id", teacher_id)
        response = self._execute(query.order("name"), "list classes")
        return [to_class(r) for r in fetchall(response)]

    def get_by_id(self, owner: str, class_id: str) -> Optional[SchoolClass]:
        response = self._execute(self._select(owner, COLUMNS).eq("id", class_id).limit(1), "get class")
        r = fetchone(response)
        return to_class(r) if r else None

    def create(self, owner: str, data: Mapping[str, Any]) -> SchoolClass:
        return to_class(self._insert(owner, [data])[0])

    def update(self, owner: str, class_id: str, data: Mapping[str, Any]) -> Optional[SchoolClass]:
        r = self._update(owner, class_id, data)
        return to_class(r) if r else None

    def delete(self, owner: str, class_id: str) -> bool:
        return self._delete(owner, class_id)

    def count(self, owner: str) -> int:
        response = self._execute(self._select(owner, "id", count="exact"), "count classes")
        return int(response.count or 0)
