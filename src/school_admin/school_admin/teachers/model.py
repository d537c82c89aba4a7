from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from ..core.enums import Gender


@dataclass(frozen=True)
class Teacher:
    teacher_id: str
    full_name: str
    gender: Gender
    qualification: str
    joining_date: date
    salary: float
    subjects: tuple[str, ...] = field(default_factory=tuple)
    contact_phone: str = ""
    contact_email: str = ""
    address: str = ""
    photo_url: Optional[str] = None
    created_at: Optional[str] = None
