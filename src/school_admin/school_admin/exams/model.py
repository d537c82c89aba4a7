from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..classes.model import ClassRef


@dataclass(frozen=True)
class Exam:
    exam_id: str
    title: str
    class_id: str
    subject: str
    exam_date: date
    max_marks: int
    passing_marks: int
    class_ref: Optional[ClassRef] = None

    def passed(self, marks: float) -> bool:
        return marks >= self.passing_marks


@dataclass(frozen=True)
class ScoreRecord:
    """Marks one student obtained in one exam; unique per (student, exam)."""

    score_id: str
    student_id: str
    exam_id: str
    marks_obtained: int
    remarks: Optional[str] = None
    student_name: Optional[str] = None
    student_class: Optional[ClassRef] = None
    exam: Optional[Exam] = None


@dataclass(frozen=True)
class MarkEntry:
    """Raw form input for one student on the marks sheet."""

    marks: str = ""
    remarks: str = ""
