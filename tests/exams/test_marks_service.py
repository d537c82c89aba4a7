from __future__ import annotations

import pytest

from src.school_admin.school_admin.core.exceptions import NotFoundError, ValidationError
from src.school_admin.school_admin.exams.model import MarkEntry
from src.school_admin.school_admin.exams.service import ExamService, MarksService
from src.school_admin.school_admin.exams.supabase_exam_repository import SupabaseExamRepository, SupabaseScoreRepository
from src.school_admin.school_admin.students.supabase_student_repository import SupabaseStudentRepository

OWNER = "admin@school.test"

EXAM_FORM = {
    "title": "Midterm",
    "class_id": "c5",
    "subject": "Mathematics",
    "exam_date": "2026-03-10",
    "max_marks": "50",
    "passing_marks": "20",
}


@pytest.fixture
def services(fake_db):
    for sid, name in (("s1", "Asha"), ("s2", "Bilal"), ("s3", "Chen")):
        fake_db.rows("students").append({"id": sid, "full_name": name, "gender": "female", "class_id": "c5", "user_email": OWNER})
    exams = SupabaseExamRepository(fake_db)
    scores = SupabaseScoreRepository(fake_db)
    exam_service = ExamService(exams, scores)
    marks_service = MarksService(exams, scores, SupabaseStudentRepository(fake_db))
    exam = exam_service.create_exam(OWNER, EXAM_FORM)
    return exam, exam_service, marks_service


class UnusedExamRepo:
    def create(self, owner, data):
        raise AssertionError("invalid exam must not be written")

    def update(self, owner, exam_id, data):
        raise AssertionError("invalid exam must not be written")


def test_exam_rejects_passing_marks_above_maximum(fake_db):
    service = ExamService(UnusedExamRepo(), SupabaseScoreRepository(fake_db))

    with pytest.raises(ValidationError, match="Passing marks cannot be greater than maximum marks"):
        service.create_exam(OWNER, {**EXAM_FORM, "passing_marks": "60"})
    with pytest.raises(ValidationError):
        service.create_exam(OWNER, {**EXAM_FORM, "max_marks": "0", "passing_marks": "0"})


def test_saving_same_marks_twice_keeps_one_row_per_student(services, fake_db):
    exam, _, marks = services
    entries = {"s1": MarkEntry("45", "Great"), "s2": MarkEntry("18")}

    marks.save_marks(OWNER, exam.exam_id, entries)
    marks.save_marks(OWNER, exam.exam_id, entries)

    rows = fake_db.rows("student_marks")
    assert len(rows) == 2
    assert {(r["student_id"], r["marks_obtained"]) for r in rows} == {("s1", 45), ("s2", 18)}


def test_later_session_updates_and_blank_entries_keep_old_marks(services, fake_db):
    exam, _, marks = services
    marks.save_marks(OWNER, exam.exam_id, {"s1": MarkEntry("30"), "s2": MarkEntry("25")})

    marks.save_marks(OWNER, exam.exam_id, {"s1": MarkEntry("40"), "s2": MarkEntry(""), "s3": MarkEntry("10")})

    stored = {r["student_id"]: r["marks_obtained"] for r in fake_db.rows("student_marks")}
    assert stored == {"s1": 40, "s2": 25, "s3": 10}


@pytest.mark.parametrize("value", ["51", "-1", "4.5", "abc"])
def test_marks_outside_range_are_rejected_before_write(services, fake_db, value):
    exam, _, marks = services

    with pytest.raises(ValidationError):
        marks.save_marks(OWNER, exam.exam_id, {"s1": MarkEntry("10"), "s2": MarkEntry(value)})

    assert fake_db.rows("student_marks") == []


def test_boundary_marks_are_accepted(services, fake_db):
    exam, _, marks = services

    assert marks.save_marks(OWNER, exam.exam_id, {"s1": MarkEntry("0"), "s2": MarkEntry("50")}) == 2


def test_all_blank_entries_are_rejected(services):
    exam, _, marks = services

    with pytest.raises(ValidationError, match="Please enter marks for at least one student"):
        marks.save_marks(OWNER, exam.exam_id, {"s1": MarkEntry(""), "s2": MarkEntry("  ")})


def test_sheet_prefills_existing_marks_with_result_hint(services):
    exam, _, marks = services
    marks.save_marks(OWNER, exam.exam_id, {"s1": MarkEntry("20"), "s2": MarkEntry("19", "Retake")})

    _, rows = marks.sheet(OWNER, exam.exam_id)

    by_student = {r.student_id: r for r in rows}
    assert by_student["s1"].result == "Pass"
    assert (by_student["s2"].result, by_student["s2"].remarks) == ("Fail", "Retake")
    assert (by_student["s3"].marks, by_student["s3"].result) == ("", None)


def test_marks_for_unknown_exam(services):
    _, _, marks = services

    with pytest.raises(NotFoundError):
        marks.save_marks(OWNER, "missing", {"s1": MarkEntry("10")})


def test_maximum_marks_cannot_drop_below_entered_marks(services, fake_db):
    exam, exam_service, marks = services
    marks.save_marks(OWNER, exam.exam_id, {"s1": MarkEntry("45"), "s2": MarkEntry("18")})

    with pytest.raises(ValidationError, match=r"marks already entered \(45\)"):
        exam_service.update_exam(OWNER, exam.exam_id, {**EXAM_FORM, "max_marks": "40", "passing_marks": "20"})

    assert fake_db.rows("exams")[0]["max_marks"] == 50
    updated = exam_service.update_exam(OWNER, exam.exam_id, {**EXAM_FORM, "max_marks": "45", "passing_marks": "20"})
    assert updated.max_marks == 45


def test_maximum_marks_can_change_freely_before_marks_exist(services):
    exam, exam_service, _ = services

    updated = exam_service.update_exam(OWNER, exam.exam_id, {**EXAM_FORM, "max_marks": "10", "passing_marks": "4"})

    assert (updated.max_marks, updated.passing_marks) == (10, 4)
