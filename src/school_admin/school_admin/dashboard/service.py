from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Callable, Optional

from ..access.gate import AccessGate
from ..attendance.repository import AttendanceRepository
from ..classes.repository import ClassRepository
from ..common.datetime_utils import days_ago, today_local
from ..core.constants import DASHBOARD_ATTENDANCE_DAYS, DEFAULT_RECENT_LIMIT
from ..core.enums import AttendanceStatus
from ..financials.repository import FeeRepository, SalaryRepository
from ..financials.service import fee_totals, salary_totals
from ..reports.aggregator import rate
from ..students.model import Student
from ..students.repository import StudentRepository
from ..teachers.model import Teacher
from ..teachers.repository import TeacherRepository


@dataclass(frozen=True)
class DashboardStats:
    total_students: int
    total_teachers: int
    total_classes: int
    student_attendance: float
    teacher_attendance: float
    paid_fees: float
    pending_fees: float
    salaries_paid: float
    recent_students: list[Student]
    recent_teachers: list[Teacher]


class DashboardService:
    def __init__(
        self,
        *,
        students: StudentRepository,
        teachers: TeacherRepository,
        classes: ClassRepository,
        student_attendance: AttendanceRepository,
        teacher_attendance: AttendanceRepository,
        fees: FeeRepository,
        salaries: SalaryRepository,
        gate: Optional[AccessGate] = None,
        today: Callable[[], date] = today_local,
    ):
        self._students = students
        self._teachers = teachers
        self._classes = classes
        self._student_attendance = student_attendance
        self._teacher_attendance = teacher_attendance
        self._fees = fees
        self._salaries = salaries
        self._gate = gate or AccessGate()
        self._today = today

    def _present_rate(self, owner: str, repo: AttendanceRepository) -> float:
        since = days_ago(DASHBOARD_ATTENDANCE_DAYS, today=self._today())
        records = repo.list_range(owner, start=since)
        present = sum(1 for r in records if r.status == AttendanceStatus.PRESENT)
        return rate(present, len(records))

    def stats(self, owner: str) -> DashboardStats:
        owner = self._gate.require_owner(owner)
        fees = fee_totals(list(self._fees.list_all(owner)))
        salaries = salary_totals(list(self._salaries.list_all(owner)))

        return DashboardStats(
            total_students=self._students.count(owner),
            total_teachers=self._teachers.count(owner),
            total_classes=self._classes.count(owner),
            student_attendance=self._present_rate(owner, self._student_attendance),
            teacher_attendance=self._present_rate(owner, self._teacher_attendance),
            paid_fees=fees.paid,
            pending_fees=fees.unpaid,
            salaries_paid=salaries.paid,
            recent_students=list(self._students.list_all(owner, newest_first=True, limit=DEFAULT_RECENT_LIMIT)),
            recent_teachers=list(self._teachers.list_all(owner, newest_first=True, limit=DEFAULT_RECENT_LIMIT)),
        )
