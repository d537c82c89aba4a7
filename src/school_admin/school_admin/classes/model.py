from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class ClassRef:
    """Embedded class summary (``class:classes(name, section)``)."""

    name: str
    section: str

    @property
    def label(self) -> str:
        return f"{self.name} - {self.section}"

    @classmethod
    def from_row(cls, row: Optional[dict]) -> Optional["ClassRef"]:
        if not row:
            return None
        return cls(name=str(row.get("name") or ""), section=str(row.get("section") or ""))


@dataclass(frozen=True)
class SchoolClass:
    class_id: str
    name: str
    section: str
    teacher_id: Optional[str]
    subjects: tuple[str, ...] = field(default_factory=tuple)
    max_students: int = 30
    teacher_name: Optional[str] = None

    @property
    def label(self) -> str:
        return f"{self.name} - {self.section}"
