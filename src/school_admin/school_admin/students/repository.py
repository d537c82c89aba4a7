from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Sequence

from .model import Student


class StudentRepository(Protocol):
    def list_all(
        self,
        owner: str,
        *,
        class_id: Optional[str] = None,
        class_ids: Optional[Sequence[str]] = None,
        newest_first: bool = False,
        limit: Optional[int] = None,
    ) -> Sequence[Student]:
        raise NotImplementedError

    def get_by_id(self, owner: str, student_id: str) -> Optional[Student]:
        raise NotImplementedError

    def create(self, owner: str, data: Mapping[str, Any]) -> Student:
        raise NotImplementedError

    def update(self, owner: str, student_id: str, data: Mapping[str, Any]) -> Optional[Student]:
        raise NotImplementedError

    def delete(self, owner: str, student_id: str) -> bool:
        raise NotImplementedError

    def count(self, owner: str) -> int:
        raise NotImplementedError
