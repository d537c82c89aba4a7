from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from ..access.gate import AccessGate
from ..common.datetime_utils import iso, require_date
from ..common.validators import optional_text, require_choice, require_non_empty
from ..core.enums import Gender
from ..core.exceptions import NotFoundError
from ..storage.photo_store import PhotoStorage, PhotoUpload
from .model import Student
from .repository import StudentRepository

logger = logging.getLogger(__name__)


class StudentService:
    """Use case: register and maintain students."""

    def __init__(self, students: StudentRepository, photos: Optional[PhotoStorage] = None, *, gate: Optional[AccessGate] = None):
        self._students = students
        self._photos = photos
        self._gate = gate or AccessGate()

    @staticmethod
    def _payload(form: Mapping[str, Any]) -> dict:
        return {
            "full_name": require_non_empty(form.get("full_name"), "full_name"),
            "date_of_birth": iso(require_date(form.get("date_of_birth"), "date_of_birth")),
            "gender": require_choice(form.get("gender") or Gender.MALE.value, Gender, "Gender").value,
            "guardian_name": require_non_empty(form.get("guardian_name"), "guardian_name"),
            "class_id": optional_text(form.get("class_id")),
            "admission_date": iso(require_date(form.get("admission_date"), "admission_date")),
            "address": optional_text(form.get("address")) or "",
            "contact_phone": optional_text(form.get("contact_phone")) or "",
            "contact_email": optional_text(form.get("contact_email")) or "",
        }

    def _store_photo(self, photo: Optional[PhotoUpload]) -> Optional[str]:
        if not photo or not self._photos:
            return None
        return self._photos.save(photo, folder="students")

    def register(self, owner: str, form: Mapping[str, Any], *, photo: Optional[PhotoUpload] = None) -> Student:
        owner = self._gate.require_owner(owner)
        data = self._payload(form)
        data["photo_url"] = self._store_photo(photo)

        student = self._students.create(owner, data)
        logger.info("student registered id=%s", student.student_id)
        return student

    def update_student(self, owner: str, student_id: str, form: Mapping[str, Any], *, photo: Optional[PhotoUpload] = None) -> Student:
        owner = self._gate.require_owner(owner)
        data = self._payload(form)
        photo_url = self._store_photo(photo)
        if photo_url:
            data["photo_url"] = photo_url

        updated = self._students.update(owner, student_id, data)
        if not updated:
            raise NotFoundError("Student not found")
        return updated

    def list_students(self, owner: str, *, class_id: Optional[str] = None, search: str = ""):
        owner = self._gate.require_owner(owner)
        students = self._students.list_all(owner, class_id=class_id or None)
        q = (search or "").strip().lower()
        if not q:
            return list(students)
        return [s for s in students if q in s.full_name.lower()]

    def get_student(self, owner: str, student_id: str) -> Student:
        owner = self._gate.require_owner(owner)
        student = self._students.get_by_id(owner, student_id)
        if not student:
            raise NotFoundError("Student not found")
        return student

    def delete_student(self, owner: str, student_id: str) -> None:
        owner = self._gate.require_owner(owner)
        if not self._students.delete(owner, student_id):
            raise NotFoundError("Student not found")
