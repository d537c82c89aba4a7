from __future__ import annotations

import pytest

from src.school_admin.school_admin.classes.service import ClassService
from src.school_admin.school_admin.classes.supabase_class_repository import SupabaseClassRepository
from src.school_admin.school_admin.core.exceptions import NotFoundError, ValidationError

OWNER = "admin@school.test"

CLASS_FORM = {"name": "Grade 5", "section": "A", "teacher_id": "t1", "subjects": ["Mathematics", "English"]}


@pytest.fixture
def classes(fake_db):
    return ClassService(SupabaseClassRepository(fake_db))


def test_max_students_defaults_to_thirty(classes, fake_db):
    cls = classes.create_class(OWNER, CLASS_FORM)

    assert cls.max_students == 30
    assert fake_db.rows("classes")[0]["max_students"] == 30


@pytest.mark.parametrize("value", ["0", "-5", "abc"])
def test_max_students_must_be_positive_whole_number(classes, fake_db, value):
    with pytest.raises(ValidationError):
        classes.create_class(OWNER, {**CLASS_FORM, "max_students": value})

    assert fake_db.rows("classes") == []


def test_single_subject_text_and_blank_teacher(classes):
    cls = classes.create_class(OWNER, {**CLASS_FORM, "subjects": "Science", "teacher_id": " "})

    assert cls.subjects == ("Science",)
    assert cls.teacher_id is None


def test_section_is_required(classes):
    with pytest.raises(ValidationError, match="section"):
        classes.create_class(OWNER, {**CLASS_FORM, "section": ""})


def test_update_changes_capacity(classes):
    cls = classes.create_class(OWNER, CLASS_FORM)

    updated = classes.update_class(OWNER, cls.class_id, {**CLASS_FORM, "max_students": "40"})

    assert updated.max_students == 40


def test_list_by_teacher(classes):
    classes.create_class(OWNER, CLASS_FORM)
    classes.create_class(OWNER, {**CLASS_FORM, "name": "Grade 6", "teacher_id": "t2"})

    assert [c.name for c in classes.list_classes(OWNER, teacher_id="t2")] == ["Grade 6"]
    assert [c.name for c in classes.list_classes(OWNER)] == ["Grade 5", "Grade 6"]


def test_unknown_class_is_not_found(classes):
    with pytest.raises(NotFoundError):
        classes.get_class(OWNER, "missing")
    with pytest.raises(NotFoundError):
        classes.update_class(OWNER, "missing", CLASS_FORM)
    with pytest.raises(NotFoundError):
        classes.delete_class(OWNER, "missing")
