from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..classes.model import ClassRef
from ..core.enums import Attendee, AttendanceStatus
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class AttendanceKey:
    """Composite key one attendance sheet is reconciled under.

    Student sheets are kept per (day, class); teacher sheets per day.
    """

    attendee: Attendee
    day: date
    class_id: Optional[str] = None

    def __post_init__(self):
        if self.attendee == Attendee.STUDENT and not self.class_id:
            raise ValidationError("Please select a class")
        if self.attendee == Attendee.TEACHER and self.class_id:
            raise ValidationError("Teacher attendance is not kept per class")


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one attendance mark."""

    record_id: str
    attendee: Attendee
    subject_id: str
    class_id: Optional[str]
    day: date
    status: AttendanceStatus
    subject_name: Optional[str] = None
    class_ref: Optional[ClassRef] = None


@dataclass(frozen=True)
class ReconcileResult:
    key: AttendanceKey
    written: int
    removed: int
