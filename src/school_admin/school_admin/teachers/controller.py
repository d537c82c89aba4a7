from __future__ import annotations

from flask import Flask, request

from ..common.web import api, current_owner, form_data, login_required, ok, photo_upload
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/teachers", methods=["GET"], endpoint="teachers_list")
    @login_required
    @api
    def teachers_list():
        teachers = container.teacher_service.list_teachers(current_owner(), search=request.args.get("search", ""))
        return ok(teachers=teachers)

    @app.route("/api/teachers", methods=["POST"], endpoint="teachers_create")
    @login_required
    @api
    def teachers_create():
        owner = current_owner()
        with container.submit_guard.hold(owner, "teachers.create"):
            teacher = container.teacher_service.create_teacher(owner, form_data(), photo=photo_upload())
        return ok("Teacher added successfully!", status=201, teacher=teacher)

    @app.route("/api/teachers/<teacher_id>", methods=["GET"], endpoint="teachers_get")
    @login_required
    @api
    def teachers_get(teacher_id: str):
        return ok(teacher=container.teacher_service.get_teacher(current_owner(), teacher_id))

    @app.route("/api/teachers/<teacher_id>", methods=["PUT", "POST"], endpoint="teachers_update")
    @login_required
    @api
    def teachers_update(teacher_id: str):
        owner = current_owner()
        with container.submit_guard.hold(owner, f"teachers.update:{teacher_id}"):
            teacher = container.teacher_service.update_teacher(owner, teacher_id, form_data(), photo=photo_upload())
        return ok("Teacher updated successfully!", teacher=teacher)

    @app.route("/api/teachers/<teacher_id>", methods=["DELETE"], endpoint="teachers_delete")
    @login_required
    @api
    def teachers_delete(teacher_id: str):
        container.teacher_service.delete_teacher(current_owner(), teacher_id)
        return ok("Teacher deleted successfully")
