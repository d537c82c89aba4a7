from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Callable, Optional

from ..access.gate import AccessGate
from ..attendance.repository import AttendanceRepository
from ..classes.repository import ClassRepository
from ..common.datetime_utils import iso, parse_month, today_local
from ..common.validators import optional_choice
from ..core.enums import AttendanceStatus, FeeStatus, Gender, SalaryStatus
from ..core.exceptions import NotFoundError
from ..exams.repository import ExamRepository, ScoreRepository
from ..financials.repository import FeeRepository, SalaryRepository
from ..financials.service import fee_totals, salary_totals
from ..students.repository import StudentRepository
from . import aggregator as agg
from .export import to_csv_bytes


@dataclass(frozen=True)
class ReportData:
    rows: list[dict]
    summary: Optional[dict]
    groups: list[dict] = field(default_factory=list)
    headers: tuple[str, ...] = ()
    csv_rows: list[tuple] = field(default_factory=list)

    def to_csv(self) -> bytes:
        return to_csv_bytes(self.headers, self.csv_rows)


EXAM_HEADERS = ("Student Name", "Class", "Marks Obtained", "Max Marks", "Percentage", "Status", "Remarks")
TEACHER_ATTENDANCE_HEADERS = ("Teacher Name", "Date", "Status")
FEE_HEADERS = ("Student Name", "Class", "Fee Type", "Amount", "Due Date", "Paid Date", "Status", "Payment Mode")
SALARY_HEADERS = ("Teacher Name", "Month", "Amount", "Status", "Payment Date", "Payment Mode")
STUDENT_INFO_HEADERS = (
    "Full Name", "Date of Birth", "Gender", "Guardian Name", "Class",
    "Admission Date", "Address", "Contact Phone", "Contact Email",
)


class ReportService:
    """Printable/downloadable reports; every figure is computed on read."""

    def __init__(
        self,
        *,
        students: StudentRepository,
        classes: ClassRepository,
        teacher_attendance: AttendanceRepository,
        fees: FeeRepository,
        salaries: SalaryRepository,
        exams: ExamRepository,
        scores: ScoreRepository,
        gate: Optional[AccessGate] = None,
        today: Callable[[], date] = today_local,
    ):
        self._students = students
        self._classes = classes
        self._teacher_attendance = teacher_attendance
        self._fees = fees
        self._salaries = salaries
        self._exams = exams
        self._scores = scores
        self._gate = gate or AccessGate()
        self._today = today

    def exam_report(self, owner: str, exam_id: str) -> ReportData:
        owner = self._gate.require_owner(owner)
        exam = self._exams.get_by_id(owner, exam_id)
        if not exam:
            raise NotFoundError("Exam not found")

        scores = list(self._scores.list_for_exam(owner, exam_id))
        rows, csv_rows = [], []
        for s in scores:
            pct = agg.round1(agg.percentage(s.marks_obtained, exam.max_marks))
            result = "Pass" if exam.passed(s.marks_obtained) else "Fail"
            class_label = s.student_class.label if s.student_class else ""
            rows.append(
                {
                    "student_id": s.student_id,
                    "student_name": s.student_name or "",
                    "class": class_label,
                    "marks_obtained": s.marks_obtained,
                    "max_marks": exam.max_marks,
                    "percentage": pct,
                    "result": result,
                    "remarks": s.remarks or "",
                }
            )
            csv_rows.append((s.student_name or "", class_label, s.marks_obtained, exam.max_marks, f"{pct:.1f}%", result, s.remarks or ""))

        summary = None
        if scores:
            marks = [s.marks_obtained for s in scores]
            passed = sum(1 for m in marks if exam.passed(m))
            summary = {
                "exam_id": exam.exam_id,
                "title": exam.title,
                "subject": exam.subject,
                "max_marks": exam.max_marks,
                "passing_marks": exam.passing_marks,
                "total_students": len(marks),
                "passed": passed,
                "failed": len(marks) - passed,
                "pass_rate": agg.pass_rate(marks, exam.passing_marks),
                "average": agg.average(marks),
                "average_percentage": agg.rate(sum(marks), len(marks) * exam.max_marks),
                "highest": agg.highest(marks),
                "lowest": agg.lowest(marks),
            }

        return ReportData(rows=rows, summary=summary, headers=EXAM_HEADERS, csv_rows=csv_rows)

    def teacher_attendance_report(
        self,
        owner: str,
        *,
        teacher_id: Optional[str] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> ReportData:
        owner = self._gate.require_owner(owner)
        records = list(self._teacher_attendance.list_range(owner, start=start, end=end, subject_id=teacher_id or None))

        counts = agg.count_by(records, lambda r: r.status.value)
        present = counts.get(AttendanceStatus.PRESENT.value, 0)
        summary = {
            "total": len(records),
            "present": present,
            "absent": counts.get(AttendanceStatus.ABSENT.value, 0),
            "late": counts.get(AttendanceStatus.LATE.value, 0),
            "present_percentage": agg.rate(present, len(records)),
        }
        rows = [
            {"teacher_id": r.subject_id, "teacher_name": r.subject_name or "", "date": iso(r.day), "status": r.status.value}
            for r in records
        ]
        csv_rows = [(r["teacher_name"], r["date"], r["status"]) for r in rows]
        return ReportData(rows=rows, summary=summary, headers=TEACHER_ATTENDANCE_HEADERS, csv_rows=csv_rows)

    def student_fee_report(
        self,
        owner: str,
        *,
        class_id: Optional[str] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
        status: Optional[str] = None,
    ) -> ReportData:
        owner = self._gate.require_owner(owner)
        wanted = optional_choice(status if status != "all" else None, FeeStatus, "Payment status")

        student_ids = None
        if class_id:
            student_ids = [s.student_id for s in self._students.list_all(owner, class_id=class_id)]
            if not student_ids:
                return self._empty_fee_report()

        fees = list(self._fees.list_all(owner, student_ids=student_ids, due_from=start, due_to=end, status=wanted))
        totals = fee_totals(fees)

        rows, csv_rows = [], []
        for f in fees:
            class_label = f.student_class.label if f.student_class else ""
            rows.append(
                {
                    "fee_id": f.fee_id,
                    "student_id": f.student_id,
                    "student_name": f.student_name or "",
                    "class": class_label,
                    "fee_type": f.fee_type,
                    "amount": f.amount,
                    "due_date": iso(f.due_date),
                    "payment_date": iso(f.payment_date),
                    "status": f.status.value,
                    "payment_mode": f.payment_mode.value if f.payment_mode else "",
                }
            )
            csv_rows.append(
                (
                    f.student_name or "", class_label, f.fee_type, f.amount, iso(f.due_date),
                    iso(f.payment_date) or "", f.status.value, f.payment_mode.value if f.payment_mode else "",
                )
            )

        names = {f.student_id: f.student_name or "" for f in fees}
        totals_by_student = agg.group_totals(fees, lambda f: f.student_id, lambda f: f.amount)
        paid_by_student = agg.group_totals(fees, lambda f: f.student_id, lambda f: f.amount if f.status == FeeStatus.PAID else 0)
        groups = [
            {
                "student_id": sid,
                "student_name": names[sid],
                "total": total,
                "paid": paid_by_student[sid],
                "unpaid": total - paid_by_student[sid],
            }
            for sid, total in totals_by_student.items()
        ]

        summary = {
            "total": totals.total,
            "paid": totals.paid,
            "unpaid": totals.unpaid,
            "partial": totals.partial,
            "records": len(fees),
            "collection_rate": agg.rate(totals.paid, totals.total),
        }
        return ReportData(rows=rows, summary=summary, groups=groups, headers=FEE_HEADERS, csv_rows=csv_rows)

    @staticmethod
    def _empty_fee_report() -> ReportData:
        summary = {"total": 0.0, "paid": 0.0, "unpaid": 0.0, "partial": 0.0, "records": 0, "collection_rate": agg.rate(0, 0)}
        return ReportData(rows=[], summary=summary, headers=FEE_HEADERS)

    def teacher_salary_report(
        self,
        owner: str,
        *,
        teacher_id: Optional[str] = None,
        month_from: Optional[str] = None,
        month_to: Optional[str] = None,
        status: Optional[str] = None,
    ) -> ReportData:
        owner = self._gate.require_owner(owner)
        wanted = optional_choice(status if status != "all" else None, SalaryStatus, "Payment status")
        month_from = parse_month(month_from) if month_from else None
        month_to = parse_month(month_to) if month_to else None
        salaries = list(
            self._salaries.list_all(owner, teacher_id=teacher_id or None, month_from=month_from, month_to=month_to, status=wanted)
        )
        totals = salary_totals(salaries)
        paid_records = sum(1 for s in salaries if s.status == SalaryStatus.PAID)

        rows = [
            {
                "salary_id": s.salary_id,
                "teacher_id": s.teacher_id,
                "teacher_name": s.teacher_name or "",
                "month_year": s.month_year,
                "amount": s.amount,
                "status": s.status.value,
                "payment_date": iso(s.payment_date),
                "payment_mode": s.payment_mode.value if s.payment_mode else "",
            }
            for s in salaries
        ]
        csv_rows = [
            (r["teacher_name"], r["month_year"], r["amount"], r["status"], r["payment_date"] or "", r["payment_mode"])
            for r in rows
        ]
        summary = {
            "total": totals.total,
            "paid": totals.paid,
            "unpaid": totals.unpaid,
            "records": len(salaries),
            "paid_records": paid_records,
            "payment_rate": agg.rate(paid_records, len(salaries)),
        }
        return ReportData(rows=rows, summary=summary, headers=SALARY_HEADERS, csv_rows=csv_rows)

    def student_information_report(self, owner: str, *, class_id: Optional[str] = None, teacher_id: Optional[str] = None) -> ReportData:
        owner = self._gate.require_owner(owner)

        class_ids = None
        if teacher_id:
            class_ids = [c.class_id for c in self._classes.list_all(owner, teacher_id=teacher_id)]
            if not class_ids:
                return ReportData(rows=[], summary=self._student_stats([]), headers=STUDENT_INFO_HEADERS)

        students = list(self._students.list_all(owner, class_id=class_id or None, class_ids=class_ids, newest_first=True))

        rows, csv_rows = [], []
        for s in students:
            rows.append(
                {
                    "student_id": s.student_id,
                    "full_name": s.full_name,
                    "date_of_birth": iso(s.date_of_birth),
                    "gender": s.gender.value,
                    "guardian_name": s.guardian_name,
                    "class": s.class_label,
                    "admission_date": iso(s.admission_date),
                    "contact_phone": s.contact_phone,
                    "contact_email": s.contact_email,
                    "photo_url": s.photo_url,
                }
            )
            csv_rows.append(
                (
                    s.full_name, iso(s.date_of_birth), s.gender.value, s.guardian_name, s.class_label,
                    iso(s.admission_date), s.address, s.contact_phone, s.contact_email,
                )
            )
        return ReportData(rows=rows, summary=self._student_stats(students), headers=STUDENT_INFO_HEADERS, csv_rows=csv_rows)

    def _student_stats(self, students) -> dict:
        today = self._today()
        genders = agg.count_by(students, lambda s: s.gender.value)
        return {
            "total": len(students),
            "male": genders.get(Gender.MALE.value, 0),
            "female": genders.get(Gender.FEMALE.value, 0),
            "other": genders.get(Gender.OTHER.value, 0),
            "class_distribution": agg.count_by(students, lambda s: s.class_label or "Unassigned"),
            "age_distribution": agg.count_by(
                (s for s in students if s.date_of_birth), lambda s: agg.age_group(s.date_of_birth, today)
            ),
            "with_email": sum(1 for s in students if s.contact_email),
            "with_phone": sum(1 for s in students if s.contact_phone),
            "with_photo": sum(1 for s in students if s.photo_url),
        }
