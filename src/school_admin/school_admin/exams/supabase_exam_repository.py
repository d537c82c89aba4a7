from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

from ..classes.model import ClassRef
from ..common.datetime_utils import as_date
from ..database.supabase_base import SupabaseRepository, fetchall, fetchone
from .model import Exam, ScoreRecord
from .repository import ExamRepository, ScoreRepository

EXAM_COLUMNS = "*, class:classes(name, section)"
SCORE_COLUMNS = (
    "*, student:students(full_name, contact_phone, contact_email, class:classes(name, section)), "
    "exam:exams(id, title, class_id, subject, max_marks, passing_marks, exam_date)"
)


def to_exam(r: dict) -> Exam:
    return Exam(
        exam_id=str(r["id"]),
        title=r["title"],
        class_id=str(r.get("class_id") or ""),
        subject=r.get("subject") or "",
        exam_date=as_date(r.get("exam_date")),
        max_marks=int(r["max_marks"]),
        passing_marks=int(r["passing_marks"]),
        class_ref=ClassRef.from_row(r.get("class")),
    )


def to_score(r: dict) -> ScoreRecord:
    student = r.get("student") or {}
    exam = r.get("exam")
    return ScoreRecord(
        score_id=str(r["id"]),
        student_id=str(r["student_id"]),
        exam_id=str(r["exam_id"]),
        marks_obtained=int(r["marks_obtained"]),
        remarks=r.get("remarks"),
        student_name=student.get("full_name"),
        student_class=ClassRef.from_row(student.get("class")),
        exam=to_exam(exam) if exam and exam.get("id") else None,
    )


class SupabaseExamRepository(SupabaseRepository, ExamRepository):
    table = "exams"

    def list_all(self, owner: str, *, class_id: Optional[str] = None) -> Sequence[Exam]:
        query = self._select(owner, EXAM_COLUMNS)
        if class_id:
            query = query.eq("class_id", class_id)
        response = self._execute(query.order("exam_date", desc=True), "list exams")
        return [to_exam(r) for r in fetchall(response)]

    def get_by_id(self, owner: str, exam_id: str) -> Optional[Exam]:
        r = fetchone(self._execute(self._select(owner, EXAM_COLUMNS).eq("id", exam_id).limit(1), "get exam"))
        return to_exam(r) if r else None

    def create(self, owner: str, data: Mapping[str, Any]) -> Exam:
        return to_exam(self._insert(owner, [data])[0])

    def update(self, owner: str, exam_id: str, data: Mapping[str, Any]) -> Optional[Exam]:
        r = self._update(owner, exam_id, data)
        return to_exam(r) if r else None

    def delete(self, owner: str, exam_id: str) -> bool:
        return self._delete(owner, exam_id)


class SupabaseScoreRepository(SupabaseRepository, ScoreRepository):
    table = "student_marks"

    def list_for_exam(self, owner: str, exam_id: str) -> Sequence[ScoreRecord]:
        query = self._select(owner, SCORE_COLUMNS).eq("exam_id", exam_id).order("marks_obtained", desc=True)
        return [to_score(r) for r in fetchall(self._execute(query, "list marks"))]

    def upsert_scores(self, owner: str, rows: Sequence[Mapping[str, Any]]) -> int:
        return len(self._upsert(owner, rows, on_conflict="student_id,exam_id"))
