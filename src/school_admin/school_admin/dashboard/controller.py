from __future__ import annotations

from flask import Flask

from ..common.web import api, current_owner, login_required, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/dashboard", methods=["GET"], endpoint="dashboard")
    @login_required
    @api
    def dashboard():
        return ok(stats=container.dashboard_service.stats(current_owner()))
