from __future__ import annotations

from flask import Flask, request

from ..common.web import api, current_owner, form_data, login_required, ok
from ..container import Container
from ..core.exceptions import ValidationError
from .model import MarkEntry


def _entries(payload) -> dict[str, MarkEntry]:
    raw = payload.get("entries")
    if not isinstance(raw, dict):
        raise ValidationError("Please enter marks for at least one student")

    entries = {}
    for student_id, value in raw.items():
        if isinstance(value, dict):
            entries[str(student_id)] = MarkEntry(marks=str(value.get("marks") or ""), remarks=str(value.get("remarks") or ""))
        else:
            entries[str(student_id)] = MarkEntry(marks="" if value is None else str(value))
    return entries


def register(app: Flask, container: Container) -> None:
    @app.route("/api/exams", methods=["GET"], endpoint="exams_list")
    @login_required
    @api
    def exams_list():
        exams = container.exam_service.list_exams(current_owner(), class_id=request.args.get("class_id") or None)
        return ok(exams=exams)

    @app.route("/api/exams", methods=["POST"], endpoint="exams_create")
    @login_required
    @api
    def exams_create():
        owner = current_owner()
        with container.submit_guard.hold(owner, "exams.create"):
            exam = container.exam_service.create_exam(owner, form_data())
        return ok("Exam created successfully!", status=201, exam=exam)

    @app.route("/api/exams/<exam_id>", methods=["GET"], endpoint="exams_get")
    @login_required
    @api
    def exams_get(exam_id: str):
        return ok(exam=container.exam_service.get_exam(current_owner(), exam_id))

    @app.route("/api/exams/<exam_id>", methods=["PUT", "POST"], endpoint="exams_update")
    @login_required
    @api
    def exams_update(exam_id: str):
        owner = current_owner()
        with container.submit_guard.hold(owner, f"exams.update:{exam_id}"):
            exam = container.exam_service.update_exam(owner, exam_id, form_data())
        return ok("Exam updated successfully!", exam=exam)

    @app.route("/api/exams/<exam_id>", methods=["DELETE"], endpoint="exams_delete")
    @login_required
    @api
    def exams_delete(exam_id: str):
        container.exam_service.delete_exam(current_owner(), exam_id)
        return ok("Exam deleted successfully")

    @app.route("/api/exams/<exam_id>/marks", methods=["GET"], endpoint="marks_sheet")
    @login_required
    @api
    def marks_sheet(exam_id: str):
        exam, rows = container.marks_service.sheet(current_owner(), exam_id)
        return ok(exam=exam, rows=rows)

    @app.route("/api/exams/<exam_id>/marks", methods=["POST"], endpoint="marks_save")
    @login_required
    @api
    def marks_save(exam_id: str):
        owner = current_owner()
        entries = _entries(request.get_json(silent=True) or {})
        with container.submit_guard.hold(owner, f"marks:{exam_id}"):
            saved = container.marks_service.save_marks(owner, exam_id, entries)

        exam, rows = container.marks_service.sheet(owner, exam_id)
        return ok("Marks saved successfully!", saved=saved, exam=exam, rows=rows)
