from __future__ import annotations

from flask import Flask, request

from ..common.web import api, current_owner, form_data, login_required, ok
from ..container import Container
from ..core.constants import SUBJECTS


def register(app: Flask, container: Container) -> None:
    @app.route("/api/subjects", methods=["GET"], endpoint="subjects_list")
    @login_required
    def subjects_list():
        return ok(subjects=list(SUBJECTS))

    @app.route("/api/classes", methods=["GET"], endpoint="classes_list")
    @login_required
    @api
    def classes_list():
        classes = container.class_service.list_classes(current_owner(), teacher_id=request.args.get("teacher_id") or None)
        return ok(classes=classes)

    @app.route("/api/classes", methods=["POST"], endpoint="classes_create")
    @login_required
    @api
    def classes_create():
        owner = current_owner()
        with container.submit_guard.hold(owner, "classes.create"):
            school_class = container.class_service.create_class(owner, form_data())
        return ok("Class created successfully!", status=201, school_class=school_class)

    @app.route("/api/classes/<class_id>", methods=["GET"], endpoint="classes_get")
    @login_required
    @api
    def classes_get(class_id: str):
        return ok(school_class=container.class_service.get_class(current_owner(), class_id))

    @app.route("/api/classes/<class_id>", methods=["PUT", "POST"], endpoint="classes_update")
    @login_required
    @api
    def classes_update(class_id: str):
        owner = current_owner()
        with container.submit_guard.hold(owner, f"classes.update:{class_id}"):
            school_class = container.class_service.update_class(owner, class_id, form_data())
        return ok("Class updated successfully!", school_class=school_class)

    @app.route("/api/classes/<class_id>", methods=["DELETE"], endpoint="classes_delete")
    @login_required
    @api
    def classes_delete(class_id: str):
        container.class_service.delete_class(current_owner(), class_id)
        return ok("Class deleted successfully")
