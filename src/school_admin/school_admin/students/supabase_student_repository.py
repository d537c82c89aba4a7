from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

from ..classes.model import ClassRef
from ..common.datetime_utils import as_date
from ..core.enums import Gender
from ..database.supabase_base import SupabaseRepository, fetchall, fetchone
from .model import Student
from .repository import StudentRepository

COLUMNS = "*, class:classes(name, section)"


def to_student(r: dict) -> Student:
    return Student(
        student_id=str(r["id"]),
        full_name=r["full_name"],
        date_of_birth=as_date(r.get("date_of_birth")),
        gender=Gender(r.get("gender") or Gender.OTHER.value),
        guardian_name=r.get("guardian_name") or "",
        class_id=r.get("class_id"),
        admission_date=as_date(r.get("admission_date")),
        address=r.get("address") or "",
        contact_phone=r.get("contact_phone") or "",
        contact_email=r.get("contact_email") or "",
        photo_url=r.get("photo_url"),
        class_ref=ClassRef.from_row(r.get("class")),
        created_at=r.get("created_at"),
    )


class SupabaseStudentRepository(SupabaseRepository, StudentRepository):
    table = "students"

    def list_all(
        self,
        owner: str,
        *,
        class_id: Optional[str] = None,
        class_ids: Optional[Sequence[str]] = None,
        newest_first: bool = False,
        limit: Optional[int] = None,
    ) -> Sequence[Student]:
        query = self._select(owner, COLUMNS)
        if class_id:
            query = query.eq("class_id", class_id)
        if class_ids is not None:
            query = query.in_("class_id", list(class_ids))

        query = query.order("created_at", desc=True) if newest_first else query.order("full_name")
        if limit:
            query = query.limit(int(limit))

        response = self._execute(query, "list students")
        return [to_student(r) for r in fetchall(response)]

    def get_by_id(self, owner: str, student_id: str) -> Optional[Student]:
        response = self._execute(self._select(owner, COLUMNS).eq("id", student_id).limit(1), "get student")
        r = fetchone(response)
        return to_student(r) if r else None

    def create(self, owner: str, data: Mapping[str, Any]) -> Student:
        return to_student(self._insert(owner, [data])[0])

    def update(self, owner: str, student_id: str, data: Mapping[str, Any]) -> Optional[Student]:
        r = self._update(owner, student_id, data)
        return to_student(r) if r else None

    def delete(self, owner: str, student_id: str) -> bool:
        return self._delete(owner, student_id)

    def count(self, owner: str) -> int:
        response = self._execute(self._select(owner, "id", count="exact"), "count students")
        return int(response.count or 0)
