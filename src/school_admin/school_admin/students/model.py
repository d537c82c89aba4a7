from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..classes.model import ClassRef
from ..core.enums import Gender


@dataclass(frozen=True)
class Student:
    """Domain entity: a registered student."""

    student_id: str
    full_name: str
    date_of_birth: date
    gender: Gender
    guardian_name: str
    class_id: Optional[str]
    admission_date: date
    address: str = ""
    contact_phone: str = ""
    contact_email: str = ""
    photo_url: Optional[str] = None
    class_ref: Optional[ClassRef] = None
    created_at: Optional[str] = None

    @property
    def class_label(self) -> str:
        return self.class_ref.label if self.class_ref else ""
