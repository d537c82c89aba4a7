from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Sequence

from .model import SchoolClass


class ClassRepository(Protocol):
    def list_all(self, owner: str, *, teacher_id: Optional[str] = None) -> Sequence[SchoolClass]:
        raise NotImplementedError

    def get_by_id(self, owner: str, class_id: str) -> Optional[SchoolClass]:
        raise NotImplementedError

    def create(self, owner: str, data: Mapping[str, Any]) -> SchoolClass:
        raise NotImplementedError

    def update(self, owner: str, class_id: str, data: Mapping[str, Any]) -> Optional[SchoolClass]:
        raise NotImplementedError

    def delete(self, owner: str, class_id: str) -> bool:
        raise NotImplementedError

    def count(self, owner: str) -> int:
        raise NotImplementedError
