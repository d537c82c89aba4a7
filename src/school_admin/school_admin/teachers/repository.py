from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Sequence

from .model import Teacher


class TeacherRepository(Protocol):
    def list_all(self, owner: str, *, newest_first: bool = False, limit: Optional[int] = None) -> Sequence[Teacher]:
        raise NotImplementedError

    def get_by_id(self, owner: str, teacher_id: str) -> Optional[Teacher]:
        raise NotImplementedError

    def create(self, owner: str, data: Mapping[str, Any]) -> Teacher:
        raise NotImplementedError

    def update(self, owner: str, teacher_id: str, data: Mapping[str, Any]) -> Optional[Teacher]:
        raise NotImplementedError

    def delete(self, owner: str, teacher_id: str) -> bool:
        raise NotImplementedError

    def count(self, owner: str) -> int:
        raise NotImplementedError
