from __future__ import annotations

from typing import Any, Mapping, Optional

from ..access.gate import AccessGate
from ..common.validators import normalize_subjects, optional_text, parse_int, require_non_empty
from ..core.constants import DEFAULT_MAX_STUDENTS
from ..core.exceptions import NotFoundError, ValidationError
from .model import SchoolClass
from .repository import ClassRepository


class ClassService:
    """Use case: manage classes (name, section, class teacher, subjects)."""

    def __init__(self, classes: ClassRepository, *, gate: Optional[AccessGate] = None):
        self._classes = classes
        self._gate = gate or AccessGate()

    @staticmethod
    def _payload(form: Mapping[str, Any]) -> dict:
        max_students = parse_int(form.get("max_students") or DEFAULT_MAX_STUDENTS, "Maximum students")
        if max_students <= 0:
            raise ValidationError("Maximum students must be greater than 0")

        return {
            "name": require_non_empty(form.get("name"), "name"),
            "section": require_non_empty(form.get("section"), "section"),
            "teacher_id": optional_text(form.get("teacher_id")),
            "subjects": normalize_subjects(form.get("subjects")),
            "max_students": max_students,
        }

    def list_classes(self, owner: str, *, teacher_id: Optional[str] = None):
        owner = self._gate.require_owner(owner)
        return self._classes.list_all(owner, teacher_id=teacher_id)

    def get_class(self, owner: str, class_id: str) -> SchoolClass:
        owner = self._gate.require_owner(owner)
        cls = self._classes.get_by_id(owner, class_id)
        if not cls:
            raise NotFoundError("Class not found")
        return cls

    def create_class(self, owner: str, form: Mapping[str, Any]) -> SchoolClass:
        owner = self._gate.require_owner(owner)
        return self._classes.create(owner, self._payload(form))

    def update_class(self, owner: str, class_id: str, form: Mapping[str, Any]) -> SchoolClass:
        owner = self._gate.require_owner(owner)
        updated = self._classes.update(owner, class_id, self._payload(form))
        if not updated:
            raise NotFoundError("Class not found")
        return updated

    def delete_class(self, owner: str, class_id: str) -> None:
        owner = self._gate.require_owner(owner)
        if not self._classes.delete(owner, class_id):
            raise NotFoundError("Class not found")
