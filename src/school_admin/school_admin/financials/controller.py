from __future__ import annotations

from flask import Flask, request

from ..common.web import api, current_owner, form_data, login_required, ok
from ..container import Container
from .service import fee_totals, salary_totals


def register(app: Flask, container: Container) -> None:
    @app.route("/api/fees/options", methods=["GET"], endpoint="fees_options")
    @login_required
    @api
    def fees_options():
        return ok(defaults=container.fee_service.form_defaults())

    @app.route("/api/fees", methods=["GET"], endpoint="fees_list")
    @login_required
    @api
    def fees_list():
        fees = container.fee_service.list_fees(
            current_owner(),
            search=request.args.get("search", ""),
            status=request.args.get("status") or None,
            class_name=request.args.get("class", ""),
        )
        return ok(fees=fees, totals=fee_totals(fees))

    @app.route("/api/fees", methods=["POST"], endpoint="fees_create")
    @login_required
    @api
    def fees_create():
        owner = current_owner()
        with container.submit_guard.hold(owner, "fees.create"):
            fee = container.fee_service.create_fee(owner, form_data())
        return ok("Fee record added successfully!", status=201, fee=fee)

    @app.route("/api/fees/<fee_id>", methods=["PUT", "POST"], endpoint="fees_update")
    @login_required
    @api
    def fees_update(fee_id: str):
        owner = current_owner()
        with container.submit_guard.hold(owner, f"fees.update:{fee_id}"):
            fee = container.fee_service.update_fee(owner, fee_id, form_data())
        return ok("Fee record updated successfully!", fee=fee)

    @app.route("/api/fees/<fee_id>/paid", methods=["POST"], endpoint="fees_mark_paid")
    @login_required
    @api
    def fees_mark_paid(fee_id: str):
        fee = container.fee_service.mark_paid(current_owner(), fee_id)
        return ok("Fee marked as paid", fee=fee)

    @app.route("/api/fees/<fee_id>", methods=["DELETE"], endpoint="fees_delete")
    @login_required
    @api
    def fees_delete(fee_id: str):
        container.fee_service.delete_fee(current_owner(), fee_id)
        return ok("Fee record deleted successfully")

    @app.route("/api/salaries", methods=["GET"], endpoint="salaries_list")
    @login_required
    @api
    def salaries_list():
        salaries = container.salary_service.list_salaries(
            current_owner(),
            search=request.args.get("search", ""),
            status=request.args.get("status") or None,
        )
        return ok(salaries=salaries, totals=salary_totals(salaries))

    @app.route("/api/salaries", methods=["POST"], endpoint="salaries_create")
    @login_required
    @api
    def salaries_create():
        owner = current_owner()
        with container.submit_guard.hold(owner, "salaries.create"):
            salary = container.salary_service.create_salary(owner, form_data())
        return ok("Salary record added successfully!", status=201, salary=salary)

    @app.route("/api/salaries/<salary_id>", methods=["PUT", "POST"], endpoint="salaries_update")
    @login_required
    @api
    def salaries_update(salary_id: str):
        owner = current_owner()
        with container.submit_guard.hold(owner, f"salaries.update:{salary_id}"):
            salary = container.salary_service.update_salary(owner, salary_id, form_data())
        return ok("Salary record updated successfully!", salary=salary)

    @app.route("/api/salaries/<salary_id>/status", methods=["POST"], endpoint="salaries_set_status")
    @login_required
    @api
    def salaries_set_status(salary_id: str):
        form = form_data()
        salary = container.salary_service.set_status(
            current_owner(), salary_id, form.get("status", ""), payment_date=form.get("payment_date")
        )
        return ok("Salary status updated", salary=salary)

    @app.route("/api/salaries/<salary_id>", methods=["DELETE"], endpoint="salaries_delete")
    @login_required
    @api
    def salaries_delete(salary_id: str):
        container.salary_service.delete_salary(current_owner(), salary_id)
        return ok("Salary record deleted successfully")
