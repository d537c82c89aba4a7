from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

from ..common.datetime_utils import as_date
from ..core.enums import Gender
from ..database.supabase_base import SupabaseRepository, fetchall, fetchone
from .model import Teacher
from .repository import TeacherRepository


def to_teacher(r: dict) -> Teacher:
    return Teacher(
        teacher_id=str(r["id"]),
        full_name=r["full_name"],
        gender=Gender(r.get("gender") or Gender.OTHER.value),
        qualification=r.get("qualification") or "",
        joining_date=as_date(r.get("joining_date")),
        salary=float(r.get("salary") or 0),
        subjects=tuple(r.get("subjects") or ()),
        contact_phone=r.get("contact_phone") or "",
        contact_email=r.get("contact_email") or "",
        address=r.get("address") or "",
        photo_url=r.get("photo_url"),
        created_at=r.get("created_at"),
    )


class SupabaseTeacherRepository(SupabaseRepository, TeacherRepository):
    table = "teachers"

    def list_all(self, owner: str, *, newest_first: bool = False, limit: Optional[int] = None) -> Sequence[Teacher]:
        query = self._select(owner)
        query = query.order("created_at", desc=True) if newest_first else query.order("full_name")
        if limit:
            query = query.limit(int(limit))
        return [to_teacher(r) for r in fetchall(self._execute(query, "list teachers"))]

    def get_by_id(self, owner: str, teacher_id: str) -> Optional[Teacher]:
        r = fetchone(self._execute(self._select(owner).eq("id", teacher_id).limit(1), "get teacher"))
        return to_teacher(r) if r else None

    def create(self, owner: str, data: Mapping[str, Any]) -> Teacher:
        return to_teacher(self._insert(owner, [data])[0])

    def update(self, owner: str, teacher_id: str, data: Mapping[str, Any]) -> Optional[Teacher]:
        r = self._update(owner, teacher_id, data)
        return to_teacher(r) if r else None

    def delete(self, owner: str, teacher_id: str) -> bool:
        return self._delete(owner, teacher_id)

    def count(self, owner: str) -> int:
        response = self._execute(self._select(owner, "id", count="exact"), "count teachers")
        return int(response.count or 0)
