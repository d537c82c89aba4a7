from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Sequence

from .model import Exam, ScoreRecord


class ExamRepository(Protocol):
    def list_all(self, owner: str, *, class_id: Optional[str] = None) -> Sequence[Exam]:
        raise NotImplementedError

    def get_by_id(self, owner: str, exam_id: str) -> Optional[Exam]:
        raise NotImplementedError

    def create(self, owner: str, data: Mapping[str, Any]) -> Exam:
        raise NotImplementedError

    def update(self, owner: str, exam_id: str, data: Mapping[str, Any]) -> Optional[Exam]:
        raise NotImplementedError

    def delete(self, owner: str, exam_id: str) -> bool:
        raise NotImplementedError


class ScoreRepository(Protocol):
    def list_for_exam(self, owner: str, exam_id: str) -> Sequence[ScoreRecord]:
        """Scores of one exam, highest marks first."""

        raise NotImplementedError

    def upsert_scores(self, owner: str, rows: Sequence[Mapping[str, Any]]) -> int:
        """Insert-or-update keyed on (student_id, exam_id)."""

        raise NotImplementedError
