from __future__ import annotations

from datetime import date

from src.school_admin.school_admin.attendance.supabase_attendance_repository import (
    STUDENT_ATTENDANCE,
    TEACHER_ATTENDANCE,
    SupabaseAttendanceRepository,
)
from src.school_admin.school_admin.classes.supabase_class_repository import SupabaseClassRepository
from src.school_admin.school_admin.dashboard.service import DashboardService
from src.school_admin.school_admin.financials.supabase_financial_repository import SupabaseFeeRepository, SupabaseSalaryRepository
from src.school_admin.school_admin.students.supabase_student_repository import SupabaseStudentRepository
from src.school_admin.school_admin.teachers.supabase_teacher_repository import SupabaseTeacherRepository

OWNER = "admin@school.test"


def _service(fake_db):
    return DashboardService(
        students=SupabaseStudentRepository(fake_db),
        teachers=SupabaseTeacherRepository(fake_db),
        classes=SupabaseClassRepository(fake_db),
        student_attendance=SupabaseAttendanceRepository(fake_db, STUDENT_ATTENDANCE),
        teacher_attendance=SupabaseAttendanceRepository(fake_db, TEACHER_ATTENDANCE),
        fees=SupabaseFeeRepository(fake_db),
        salaries=SupabaseSalaryRepository(fake_db),
        today=lambda: date(2026, 3, 31),
    )


def test_dashboard_counts_recent_and_money(fake_db):
    for i in range(7):
        fake_db.add("students", {"full_name": f"Student {i}", "gender": "male", "user_email": OWNER})
    fake_db.add("students", {"full_name": "Not mine", "gender": "male", "user_email": "other@school.test"})
    fake_db.add("teachers", {"full_name": "Mr. Rao", "gender": "male", "user_email": OWNER})
    fake_db.add("classes", {"name": "Grade 5", "section": "A", "user_email": OWNER})

    for status in ("paid", "unpaid", "partial"):
        fake_db.add("student_fees", {"student_id": "s1", "amount": 100.0, "status": status, "due_date": "2026-03-01", "user_email": OWNER})
    fake_db.add("teacher_salaries", {"teacher_id": "t1", "amount": 3000.0, "status": "paid", "month_year": "2026-02", "user_email": OWNER})
    fake_db.add("teacher_salaries", {"teacher_id": "t1", "amount": 3000.0, "status": "unpaid", "month_year": "2026-03", "user_email": OWNER})

    stats = _service(fake_db).stats(OWNER)

    assert (stats.total_students, stats.total_teachers, stats.total_classes) == (7, 1, 1)
    assert [s.full_name for s in stats.recent_students] == [f"Student {i}" for i in (6, 5, 4, 3, 2)]
    assert stats.paid_fees == 100.0
    assert stats.pending_fees == 100.0
    assert stats.salaries_paid == 3000.0


def test_teacher_attendance_percentage_covers_last_30_days(fake_db):
    for day, status in (
        ("2026-03-30", "present"),
        ("2026-03-20", "present"),
        ("2026-03-10", "present"),
        ("2026-03-05", "absent"),
        ("2026-01-01", "absent"),
    ):
        fake_db.add("teacher_attendance", {"teacher_id": "t1", "date": day, "status": status, "user_email": OWNER})

    stats = _service(fake_db).stats(OWNER)

    assert stats.teacher_attendance == 75.0


def test_attendance_percentage_without_records_is_zero(fake_db):
    stats = _service(fake_db).stats(OWNER)

    assert stats.teacher_attendance == 0.0
    assert stats.student_attendance == 0.0
