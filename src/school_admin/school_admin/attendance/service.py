from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Mapping, Optional

from ..access.gate import AccessGate
from ..common.validators import optional_choice, require_choice
from ..core.constants import DEFAULT_HISTORY_LIMIT
from ..core.enums import Attendee, AttendanceStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..students.repository import StudentRepository
from ..teachers.repository import TeacherRepository
from .model import AttendanceKey, AttendanceRecord, ReconcileResult
from .reconciler import AttendanceReconciler
from .repository import AttendanceRepository


@dataclass(frozen=True)
class SheetRow:
    """One line of an attendance sheet: a person and their current mark."""

    subject_id: str
    full_name: str
    status: AttendanceStatus
    record_id: Optional[str] = None


class AttendanceService:
    def __init__(
        self,
        student_attendance: AttendanceRepository,
        teacher_attendance: AttendanceRepository,
        students: StudentRepository,
        teachers: TeacherRepository,
        *,
        gate: Optional[AccessGate] = None,
    ):
        self._repos = {
            Attendee.STUDENT: student_attendance,
            Attendee.TEACHER: teacher_attendance,
        }
        self._students = students
        self._teachers = teachers
        self._gate = gate or AccessGate()
        self._reconcilers = {k: AttendanceReconciler(r, gate=self._gate) for k, r in self._repos.items()}

    def _roster(self, owner: str, key: AttendanceKey) -> list[tuple[str, str]]:
        if key.attendee == Attendee.STUDENT:
            return [(s.student_id, s.full_name) for s in self._students.list_all(owner, class_id=key.class_id)]
        return [(t.teacher_id, t.full_name) for t in self._teachers.list_all(owner)]

    def sheet(self, owner: str, key: AttendanceKey) -> list[SheetRow]:
        """Roster for the key with existing marks, defaulting to present."""
        owner = self._gate.require_owner(owner)
        existing = {r.subject_id: r for r in self._repos[key.attendee].list_for_key(owner, key)}

        rows = []
        for subject_id, full_name in self._roster(owner, key):
            rec = existing.get(subject_id)
            rows.append(
                SheetRow(
                    subject_id=subject_id,
                    full_name=full_name,
                    status=rec.status if rec else AttendanceStatus.PRESENT,
                    record_id=rec.record_id if rec else None,
                )
            )
        return rows

    def student_sheet(self, owner: str, *, day: date, class_id: str) -> list[SheetRow]:
        return self.sheet(owner, AttendanceKey(Attendee.STUDENT, day, class_id))

    def teacher_sheet(self, owner: str, *, day: date) -> list[SheetRow]:
        return self.sheet(owner, AttendanceKey(Attendee.TEACHER, day))

    def save(self, owner: str, key: AttendanceKey, marks: Mapping[str, object]) -> ReconcileResult:
        owner = self._gate.require_owner(owner)
        roster = {str(sid).strip() for sid, _ in self._roster(owner, key)}
        # Blank ids are left for the reconciler to reject.
        ids = [str(sid or "").strip() for sid in marks]
        unknown = [sid for sid in ids if sid and sid not in roster]
        if unknown:
            raise ValidationError(f"Unknown {key.attendee.value} in attendance sheet: {', '.join(unknown)}")
        return self._reconcilers[key.attendee].reconcile(owner, key, marks)

    def save_student_attendance(self, owner: str, *, day: date, class_id: str, marks: Mapping[str, object]) -> ReconcileResult:
        return self.save(owner, AttendanceKey(Attendee.STUDENT, day, class_id), marks)

    def save_teacher_attendance(self, owner: str, *, day: date, marks: Mapping[str, object]) -> ReconcileResult:
        return self.save(owner, AttendanceKey(Attendee.TEACHER, day), marks)

    def history(
        self,
        owner: str,
        attendee: Attendee,
        *,
        search: str = "",
        status: Optional[str] = None,
        class_id: Optional[str] = None,
        day: Optional[date] = None,
        limit: int = DEFAULT_HISTORY_LIMIT,
    ) -> list[AttendanceRecord]:
        owner = self._gate.require_owner(owner)
        records = self._repos[attendee].list_history(
            owner,
            limit=limit,
            class_id=class_id or None,
            day=day,
            status=optional_choice(status if status != "all" else None, AttendanceStatus, "Status"),
        )
        q = (search or "").strip().lower()
        if not q:
            return list(records)
        return [r for r in records if q in (r.subject_name or "").lower()]

    def update_record_status(self, owner: str, attendee: Attendee, record_id: str, status: str) -> AttendanceRecord:
        owner = self._gate.require_owner(owner)
        updated = self._repos[attendee].update_status(owner, record_id, require_choice(status, AttendanceStatus, "Status"))
        if not updated:
            raise NotFoundError("Attendance record not found")
        return updated

    def delete_record(self, owner: str, attendee: Attendee, record_id: str) -> None:
        owner = self._gate.require_owner(owner)
        if not self._repos[attendee].delete(owner, record_id):
            raise NotFoundError("Attendance record not found")
