from __future__ import annotations

from flask import Flask, request

from ..common.web import api, current_owner, form_data, login_required, ok, photo_upload
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/students", methods=["GET"], endpoint="students_list")
    @login_required
    @api
    def students_list():
        students = container.student_service.list_students(
            current_owner(),
            class_id=request.args.get("class_id") or None,
            search=request.args.get("search", ""),
        )
        return ok(students=students)

    @app.route("/api/students", methods=["POST"], endpoint="students_register")
    @login_required
    @api
    def students_register():
        owner = current_owner()
        with container.submit_guard.hold(owner, "students.register"):
            student = container.student_service.register(owner, form_data(), photo=photo_upload())
        return ok("Student registered successfully!", status=201, student=student)

    @app.route("/api/students/<student_id>", methods=["GET"], endpoint="students_get")
    @login_required
    @api
    def students_get(student_id: str):
        return ok(student=container.student_service.get_student(current_owner(), student_id))

    @app.route("/api/students/<student_id>", methods=["PUT", "POST"], endpoint="students_update")
    @login_required
    @api
    def students_update(student_id: str):
        owner = current_owner()
        with container.submit_guard.hold(owner, f"students.update:{student_id}"):
            student = container.student_service.update_student(owner, student_id, form_data(), photo=photo_upload())
        return ok("Student updated successfully!", student=student)

    @app.route("/api/students/<student_id>", methods=["DELETE"], endpoint="students_delete")
    @login_required
    @api
    def students_delete(student_id: str):
        container.student_service.delete_student(current_owner(), student_id)
        return ok("Student deleted successfully")
