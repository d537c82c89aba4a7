from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, has_request_context

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .auth.controller import register as register_auth
from .classes.controller import register as register_classes
from .common.web import session_access_token
from .container import Container, build_container
from .dashboard.controller import register as register_dashboard
from .exams.controller import register as register_exams
from .financials.controller import register as register_financials
from .reports.controller import register as register_reports
from .students.controller import register as register_students
from .teachers.controller import register as register_teachers

logger = logging.getLogger(__name__)


def _request_access_token():
    # Outside a request (CLI, startup) the client runs with the anon key only.
    if not has_request_context():
        return None
    return session_access_token()


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("starting school-admin settings=%s", settings_module)

    if container is None:
        container = build_container(
            supabase_config=getattr(settings, "SUPABASE_CONFIG"),
            access_token_provider=_request_access_token,
        )

    register_auth(app, container)
    register_dashboard(app, container)
    register_students(app, container)
    register_teachers(app, container)
    register_classes(app, container)
    register_attendance(app, container)
    register_exams(app, container)
    register_financials(app, container)
    register_reports(app, container)

    return app
