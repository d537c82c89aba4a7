from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import parse_optional_date, today_local
from ..common.web import api, csv_response, current_owner, login_required, ok
from ..container import Container
from .service import ReportData


def register(app: Flask, container: Container) -> None:
    def _render(data: ReportData, name: str):
        if request.args.get("format") == "csv":
            filename = f"{name}_{today_local().strftime('%Y-%m-%d')}.csv"
            return csv_response(data.to_csv(), filename)
        return ok(rows=data.rows, summary=data.summary, groups=data.groups)

    @app.route("/api/reports/exams/<exam_id>", methods=["GET"], endpoint="report_exam")
    @login_required
    @api
    def report_exam(exam_id: str):
        return _render(container.report_service.exam_report(current_owner(), exam_id), "exam_marks_report")

    @app.route("/api/reports/teacher-attendance", methods=["GET"], endpoint="report_teacher_attendance")
    @login_required
    @api
    def report_teacher_attendance():
        data = container.report_service.teacher_attendance_report(
            current_owner(),
            teacher_id=request.args.get("teacher_id") or None,
            start=parse_optional_date(request.args.get("start"), "start"),
            end=parse_optional_date(request.args.get("end"), "end"),
        )
        return _render(data, "teacher_attendance_report")

    @app.route("/api/reports/student-fees", methods=["GET"], endpoint="report_student_fees")
    @login_required
    @api
    def report_student_fees():
        data = container.report_service.student_fee_report(
            current_owner(),
            class_id=request.args.get("class_id") or None,
            start=parse_optional_date(request.args.get("start"), "start"),
            end=parse_optional_date(request.args.get("end"), "end"),
            status=request.args.get("status") or None,
        )
        return _render(data, "student_fee_report")

    @app.route("/api/reports/teacher-salaries", methods=["GET"], endpoint="report_teacher_salaries")
    @login_required
    @api
    def report_teacher_salaries():
        data = container.report_service.teacher_salary_report(
            current_owner(),
            teacher_id=request.args.get("teacher_id") or None,
            month_from=request.args.get("month_from") or None,
            month_to=request.args.get("month_to") or None,
            status=request.args.get("status") or None,
        )
        return _render(data, "teacher_salary_report")

    @app.route("/api/reports/student-information", methods=["GET"], endpoint="report_student_information")
    @login_required
    @api
    def report_student_information():
        data = container.report_service.student_information_report(
            current_owner(),
            class_id=request.args.get("class_id") or None,
            teacher_id=request.args.get("teacher_id") or None,
        )
        return _render(data, "student_information_report")
