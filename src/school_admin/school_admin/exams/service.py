from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from ..access.gate import AccessGate
from ..common.datetime_utils import iso, require_date
from ..common.validators import optional_text, parse_int, require_non_empty
from ..core.exceptions import NotFoundError, ValidationError
from ..students.repository import StudentRepository
from .model import Exam, MarkEntry
from .repository import ExamRepository, ScoreRepository

logger = logging.getLogger(__name__)


class ExamService:
    def __init__(self, exams: ExamRepository, scores: ScoreRepository, *, gate: Optional[AccessGate] = None):
        self._exams = exams
        self._scores = scores
        self._gate = gate or AccessGate()

    @staticmethod
    def _payload(form: Mapping[str, Any]) -> dict:
        max_marks = parse_int(require_non_empty(form.get("max_marks"), "max_marks"), "Maximum marks")
        passing_marks = parse_int(require_non_empty(form.get("passing_marks"), "passing_marks"), "Passing marks")
        if max_marks <= 0:
            raise ValidationError("Maximum marks must be greater than 0")
        if passing_marks < 0:
            raise ValidationError("Passing marks cannot be negative")
        if passing_marks > max_marks:
            raise ValidationError("Passing marks cannot be greater than maximum marks")

        return {
            "title": require_non_empty(form.get("title"), "title"),
            "class_id": require_non_empty(form.get("class_id"), "class_id"),
            "subject": require_non_empty(form.get("subject"), "subject"),
            "exam_date": iso(require_date(form.get("exam_date"), "exam_date")),
            "max_marks": max_marks,
            "passing_marks": passing_marks,
        }

    def create_exam(self, owner: str, form: Mapping[str, Any]) -> Exam:
        owner = self._gate.require_owner(owner)
        return self._exams.create(owner, self._payload(form))

    def update_exam(self, owner: str, exam_id: str, form: Mapping[str, Any]) -> Exam:
        owner = self._gate.require_owner(owner)
        payload = self._payload(form)
        stored = [s.marks_obtained for s in self._scores.list_for_exam(owner, exam_id)]
        if stored and payload["max_marks"] < max(stored):
            raise ValidationError(
                f"Maximum marks cannot be lower than marks already entered ({max(stored)})"
            )
        updated = self._exams.update(owner, exam_id, payload)
        if not updated:
            raise NotFoundError("Exam not found")
        return updated

    def list_exams(self, owner: str, *, class_id: Optional[str] = None):
        owner = self._gate.require_owner(owner)
        return self._exams.list_all(owner, class_id=class_id or None)

    def get_exam(self, owner: str, exam_id: str) -> Exam:
        owner = self._gate.require_owner(owner)
        exam = self._exams.get_by_id(owner, exam_id)
        if not exam:
            raise NotFoundError("Exam not found")
        return exam

    def delete_exam(self, owner: str, exam_id: str) -> None:
        owner = self._gate.require_owner(owner)
        if not self._exams.delete(owner, exam_id):
            raise NotFoundError("Exam not found")


@dataclass(frozen=True)
class MarksSheetRow:
    student_id: str
    full_name: str
    marks: str
    remarks: str
    result: Optional[str]


class MarksService:
    """Use case: enter marks for an exam, incrementally across sessions."""

    def __init__(
        self,
        exams: ExamRepository,
        scores: ScoreRepository,
        students: StudentRepository,
        *,
        gate: Optional[AccessGate] = None,
    ):
        self._exams = exams
        self._scores = scores
        self._students = students
        self._gate = gate or AccessGate()

    def _exam(self, owner: str, exam_id: str) -> Exam:
        exam = self._exams.get_by_id(owner, exam_id)
        if not exam:
            raise NotFoundError("Exam not found")
        return exam

    @staticmethod
    def result_label(exam: Exam, marks: str) -> Optional[str]:
        if not (marks or "").strip():
            return None
        try:
            return "Pass" if exam.passed(int(marks)) else "Fail"
        except ValueError:
            return None

    def sheet(self, owner: str, exam_id: str) -> tuple[Exam, list[MarksSheetRow]]:
        owner = self._gate.require_owner(owner)
        exam = self._exam(owner, exam_id)
        existing = {s.student_id: s for s in self._scores.list_for_exam(owner, exam_id)}

        rows = []
        for student in self._students.list_all(owner, class_id=exam.class_id):
            score = existing.get(student.student_id)
            marks = str(score.marks_obtained) if score else ""
            rows.append(
                MarksSheetRow(
                    student_id=student.student_id,
                    full_name=student.full_name,
                    marks=marks,
                    remarks=(score.remarks or "") if score else "",
                    result=self.result_label(exam, marks),
                )
            )
        return exam, rows

    def save_marks(self, owner: str, exam_id: str, entries: Mapping[str, MarkEntry]) -> int:
        """Upsert every entry that carries a marks value.

        Entries left blank are not written, so rows entered in an earlier
        session survive.
        """

        owner = self._gate.require_owner(owner)
        exam = self._exam(owner, exam_id)

        rows = []
        for student_id, entry in entries.items():
            raw = (entry.marks or "").strip()
            if not raw:
                continue
            marks = parse_int(raw, "Marks")
            if marks < 0 or marks > exam.max_marks:
                raise ValidationError(f"Marks for student must be between 0 and {exam.max_marks}")
            rows.append(
                {
                    "student_id": student_id,
                    "exam_id": exam.exam_id,
                    "marks_obtained": marks,
                    "remarks": optional_text(entry.remarks),
                }
            )

        if not rows:
            raise ValidationError("Please enter marks for at least one student")

        written = self._scores.upsert_scores(owner, rows)
        logger.info("marks saved exam=%s rows=%d", exam.exam_id, len(rows))
        return written
