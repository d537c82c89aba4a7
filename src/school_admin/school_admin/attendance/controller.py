from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import parse_optional_date, require_date, today_local
from ..common.web import api, current_owner, form_data, login_required, ok
from ..container import Container
from ..core.enums import Attendee
from ..core.exceptions import ValidationError


def _attendee(value: str) -> Attendee:
    # URLs use the plural: /students, /teachers
    try:
        return Attendee(value.rstrip("s"))
    except ValueError:
        raise ValidationError("Unknown attendance sheet")


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance/students", methods=["GET"], endpoint="student_attendance_sheet")
    @login_required
    @api
    def student_attendance_sheet():
        day = parse_optional_date(request.args.get("date"), "date") or today_local()
        class_id = request.args.get("class_id") or ""
        rows = container.attendance_service.student_sheet(current_owner(), day=day, class_id=class_id)
        return ok(date=day, class_id=class_id, rows=rows)

    @app.route("/api/attendance/students", methods=["POST"], endpoint="student_attendance_save")
    @login_required
    @api
    def student_attendance_save():
        owner = current_owner()
        payload = form_data()
        day = require_date(payload.get("date"), "date")
        class_id = payload.get("class_id") or ""
        marks = payload.get("marks") or {}
        with container.submit_guard.hold(owner, "attendance.students"):
            result = container.attendance_service.save_student_attendance(owner, day=day, class_id=class_id, marks=marks)

        rows = container.attendance_service.student_sheet(owner, day=day, class_id=class_id)
        return ok("Attendance saved successfully!", written=result.written, removed=result.removed, rows=rows)

    @app.route("/api/attendance/teachers", methods=["GET"], endpoint="teacher_attendance_sheet")
    @login_required
    @api
    def teacher_attendance_sheet():
        day = parse_optional_date(request.args.get("date"), "date") or today_local()
        rows = container.attendance_service.teacher_sheet(current_owner(), day=day)
        return ok(date=day, rows=rows)

    @app.route("/api/attendance/teachers", methods=["POST"], endpoint="teacher_attendance_save")
    @login_required
    @api
    def teacher_attendance_save():
        owner = current_owner()
        payload = form_data()
        day = require_date(payload.get("date"), "date")
        marks = payload.get("marks") or {}
        with container.submit_guard.hold(owner, "attendance.teachers"):
            result = container.attendance_service.save_teacher_attendance(owner, day=day, marks=marks)

        rows = container.attendance_service.teacher_sheet(owner, day=day)
        return ok("Attendance saved successfully!", written=result.written, removed=result.removed, rows=rows)

    @app.route("/api/attendance/<kind>/history", methods=["GET"], endpoint="attendance_history")
    @login_required
    @api
    def attendance_history(kind: str):
        records = container.attendance_service.history(
            current_owner(),
            _attendee(kind),
            search=request.args.get("search", ""),
            status=request.args.get("status") or None,
            class_id=request.args.get("class_id") or None,
            day=parse_optional_date(request.args.get("date"), "date"),
        )
        return ok(records=records)

    @app.route("/api/attendance/<kind>/records/<record_id>", methods=["PATCH", "POST"], endpoint="attendance_record_update")
    @login_required
    @api
    def attendance_record_update(kind: str, record_id: str):
        record = container.attendance_service.update_record_status(
            current_owner(), _attendee(kind), record_id, form_data().get("status", "")
        )
        return ok("Attendance updated successfully", record=record)

    @app.route("/api/attendance/<kind>/records/<record_id>", methods=["DELETE"], endpoint="attendance_record_delete")
    @login_required
    @api
    def attendance_record_delete(kind: str, record_id: str):
        container.attendance_service.delete_record(current_owner(), _attendee(kind), record_id)
        return ok("Attendance record deleted successfully")
