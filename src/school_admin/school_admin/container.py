from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from .access.gate import AccessGate
from .attendance.service import AttendanceService
from .attendance.supabase_attendance_repository import (
    STUDENT_ATTENDANCE,
    TEACHER_ATTENDANCE,
    SupabaseAttendanceRepository,
)
from .auth.service import AuthService
from .auth.supabase_auth_repository import SupabaseAuthRepository
from .classes.service import ClassService
from .classes.supabase_class_repository import SupabaseClassRepository
from .common.submit_guard import SubmitGuard
from .dashboard.service import DashboardService
from .database.connection import DatabaseConnection, SupabaseConfig
from .exams.service import ExamService, MarksService
from .exams.supabase_exam_repository import SupabaseExamRepository, SupabaseScoreRepository
from .financials.service import FeeService, SalaryService
from .financials.supabase_financial_repository import SupabaseFeeRepository, SupabaseSalaryRepository
from .reports.service import ReportService
from .storage.photo_store import SupabasePhotoStore
from .students.service import StudentService
from .students.supabase_student_repository import SupabaseStudentRepository
from .teachers.service import TeacherService
from .teachers.supabase_teacher_repository import SupabaseTeacherRepository


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection
    gate: AccessGate
    submit_guard: SubmitGuard

    students_repo: SupabaseStudentRepository
    teachers_repo: SupabaseTeacherRepository
    classes_repo: SupabaseClassRepository
    student_attendance_repo: SupabaseAttendanceRepository
    teacher_attendance_repo: SupabaseAttendanceRepository
    exams_repo: SupabaseExamRepository
    scores_repo: SupabaseScoreRepository
    fees_repo: SupabaseFeeRepository
    salaries_repo: SupabaseSalaryRepository
    photo_store: SupabasePhotoStore

    auth_service: AuthService
    student_service: StudentService
    teacher_service: TeacherService
    class_service: ClassService
    attendance_service: AttendanceService
    exam_service: ExamService
    marks_service: MarksService
    fee_service: FeeService
    salary_service: SalaryService
    report_service: ReportService
    dashboard_service: DashboardService


def build_container(
    *,
    supabase_config: dict,
    access_token_provider: Optional[Callable[[], Optional[str]]] = None,
) -> Container:
    config = SupabaseConfig(
        url=str(supabase_config.get("url") or ""),
        key=str(supabase_config.get("key") or ""),
        photo_bucket=str(supabase_config.get("photo_bucket") or "photos"),
    )
    conn = DatabaseConnection.get_instance(config, access_token_provider=access_token_provider)
    gate = AccessGate()

    students_repo = SupabaseStudentRepository(conn, gate=gate)
    teachers_repo = SupabaseTeacherRepository(conn, gate=gate)
    classes_repo = SupabaseClassRepository(conn, gate=gate)
    student_attendance_repo = SupabaseAttendanceRepository(conn, STUDENT_ATTENDANCE, gate=gate)
    teacher_attendance_repo = SupabaseAttendanceRepository(conn, TEACHER_ATTENDANCE, gate=gate)
    exams_repo = SupabaseExamRepository(conn, gate=gate)
    scores_repo = SupabaseScoreRepository(conn, gate=gate)
    fees_repo = SupabaseFeeRepository(conn, gate=gate)
    salaries_repo = SupabaseSalaryRepository(conn, gate=gate)
    photo_store = SupabasePhotoStore(conn, bucket=config.photo_bucket)

    return Container(
        conn=conn,
        gate=gate,
        submit_guard=SubmitGuard(),
        students_repo=students_repo,
        teachers_repo=teachers_repo,
        classes_repo=classes_repo,
        student_attendance_repo=student_attendance_repo,
        teacher_attendance_repo=teacher_attendance_repo,
        exams_repo=exams_repo,
        scores_repo=scores_repo,
        fees_repo=fees_repo,
        salaries_repo=salaries_repo,
        photo_store=photo_store,
        auth_service=AuthService(SupabaseAuthRepository(conn)),
        student_service=StudentService(students_repo, photo_store, gate=gate),
        teacher_service=TeacherService(teachers_repo, photo_store, gate=gate),
        class_service=ClassService(classes_repo, gate=gate),
        attendance_service=AttendanceService(
            student_attendance_repo,
            teacher_attendance_repo,
            students_repo,
            teachers_repo,
            gate=gate,
        ),
        exam_service=ExamService(exams_repo, scores_repo, gate=gate),
        marks_service=MarksService(exams_repo, scores_repo, students_repo, gate=gate),
        fee_service=FeeService(fees_repo, gate=gate),
        salary_service=SalaryService(salaries_repo, gate=gate),
        report_service=ReportService(
            students=students_repo,
            classes=classes_repo,
            teacher_attendance=teacher_attendance_repo,
            fees=fees_repo,
            salaries=salaries_repo,
            exams=exams_repo,
            scores=scores_repo,
            gate=gate,
        ),
        dashboard_service=DashboardService(
            students=students_repo,
            teachers=teachers_repo,
            classes=classes_repo,
            student_attendance=student_attendance_repo,
            teacher_attendance=teacher_attendance_repo,
            fees=fees_repo,
            salaries=salaries_repo,
            gate=gate,
        ),
    )
