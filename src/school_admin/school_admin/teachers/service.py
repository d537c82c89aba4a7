from __future__ import annotations

from typing import Any, Mapping, Optional

from ..access.gate import AccessGate
from ..common.datetime_utils import iso, require_date
from ..common.validators import normalize_subjects, optional_text, parse_amount, require_choice, require_non_empty
from ..core.enums import Gender
from ..core.exceptions import NotFoundError
from ..storage.photo_store import PhotoStorage, PhotoUpload
from .model import Teacher
from .repository import TeacherRepository


class TeacherService:
    def __init__(self, teachers: TeacherRepository, photos: Optional[PhotoStorage] = None, *, gate: Optional[AccessGate] = None):
        self._teachers = teachers
        self._photos = photos
        self._gate = gate or AccessGate()

    @staticmethod
    def _payload(form: Mapping[str, Any]) -> dict:
        return {
            "full_name": require_non_empty(form.get("full_name"), "full_name"),
            "gender": require_choice(form.get("gender") or Gender.MALE.value, Gender, "Gender").value,
            "qualification": require_non_empty(form.get("qualification"), "qualification"),
            "joining_date": iso(require_date(form.get("joining_date"), "joining_date")),
            "salary": parse_amount(form.get("salary") or 0, "Salary", allow_zero=True),
            "subjects": normalize_subjects(form.get("subjects")),
            "contact_phone": optional_text(form.get("contact_phone")) or "",
            "contact_email": optional_text(form.get("contact_email")) or "",
            "address": optional_text(form.get("address")) or "",
        }

    def _store_photo(self, photo: Optional[PhotoUpload]) -> Optional[str]:
        if not photo or not self._photos:
            return None
        return self._photos.save(photo, folder="teachers")

    def create_teacher(self, owner: str, form: Mapping[str, Any], *, photo: Optional[PhotoUpload] = None) -> Teacher:
        owner = self._gate.require_owner(owner)
        data = self._payload(form)
        data["photo_url"] = self._store_photo(photo)
        return self._teachers.create(owner, data)

    def update_teacher(self, owner: str, teacher_id: str, form: Mapping[str, Any], *, photo: Optional[PhotoUpload] = None) -> Teacher:
        owner = self._gate.require_owner(owner)
        data = self._payload(form)
        photo_url = self._store_photo(photo)
        if photo_url:
            data["photo_url"] = photo_url

        updated = self._teachers.update(owner, teacher_id, data)
        if not updated:
            raise NotFoundError("Teacher not found")
        return updated

    def list_teachers(self, owner: str, *, search: str = ""):
        owner = self._gate.require_owner(owner)
        teachers = self._teachers.list_all(owner)
        q = (search or "").strip().lower()
        if not q:
            return list(teachers)
        return [t for t in teachers if q in t.full_name.lower() or any(q in s.lower() for s in t.subjects)]

    def get_teacher(self, owner: str, teacher_id: str) -> Teacher:
        owner = self._gate.require_owner(owner)
        teacher = self._teachers.get_by_id(owner, teacher_id)
        if not teacher:
            raise NotFoundError("Teacher not found")
        return teacher

    def delete_teacher(self, owner: str, teacher_id: str) -> None:
        owner = self._gate.require_owner(owner)
        if not self._teachers.delete(owner, teacher_id):
            raise NotFoundError("Teacher not found")
