"""Helpers shared by the Flask controllers.

Every endpoint answers JSON shaped ``{"success": ..., "message": ...}``.
Success responses carry ``dismiss_after_ms`` so the banner can hide itself;
error responses persist until the next action.
"""
from __future__ import annotations

import dataclasses
import logging
from datetime import date
from enum import Enum
from functools import wraps
from typing import Any, Optional

from flask import current_app, jsonify, request, session
from werkzeug.utils import secure_filename

from ..core.constants import SUCCESS_BANNER_MS
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    BackendError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from ..storage.photo_store import PhotoUpload

logger = logging.getLogger(__name__)

SESSION_EMAIL = "user_email"
SESSION_USER_ID = "user_id"
SESSION_ACCESS_TOKEN = "access_token"
SESSION_REFRESH_TOKEN = "refresh_token"
SESSION_EXPIRES_AT = "expires_at"

ERROR_STATUS = (
    (ValidationError, 400),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
    (ConflictError, 409),
    (BackendError, 502),
)


def current_owner() -> Optional[str]:
    return session.get(SESSION_EMAIL)


def session_access_token() -> Optional[str]:
    """Bearer token of the signed-in user, for binding to a backend client."""
    return session.get(SESSION_ACCESS_TOKEN)


def remember_session(user) -> None:
    session[SESSION_USER_ID] = user.user_id
    session[SESSION_EMAIL] = user.email
    session[SESSION_ACCESS_TOKEN] = user.access_token
    session[SESSION_REFRESH_TOKEN] = user.refresh_token
    session[SESSION_EXPIRES_AT] = user.expires_at


def session_expiring(margin_seconds: int, now: float) -> bool:
    expires_at = session.get(SESSION_EXPIRES_AT)
    return bool(session.get(SESSION_REFRESH_TOKEN)) and expires_at is not None and expires_at - margin_seconds <= now


def to_json(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: to_json(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, date):
        return value.strftime("%Y-%m-%d")
    if isinstance(value, dict):
        return {str(k): to_json(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set)):
        return [to_json(v) for v in value]
    return value


def ok(message: str = "", status: int = 200, **payload):
    body = {"success": True, "message": message, "dismiss_after_ms": SUCCESS_BANNER_MS}
    body.update({k: to_json(v) for k, v in payload.items()})
    return jsonify(body), status


def fail(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if not current_owner():
            return fail("User not authenticated", 401)
        return view(*args, **kwargs)

    return wrapper


def api(view):
    """Translate domain exceptions into JSON error banners."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except AuthorizationError as e:
            # No owner at all means the session is gone; otherwise the row is not ours.
            return fail(str(e), 401 if not current_owner() else 403)
        except tuple(exc for exc, _ in ERROR_STATUS) as e:
            status = next(code for exc, code in ERROR_STATUS if isinstance(e, exc))
            return fail(str(e), status)
        except Exception as e:
            logger.exception("unhandled error endpoint=%s", request.endpoint)
            if bool(current_app.config.get("DEBUG", False)):
                return fail(f"Unexpected error: {e}", 500)
            return fail("Unexpected error, please try again", 500)

    return wrapper


def form_data() -> dict:
    """Request fields from a JSON body or a (multipart) form."""
    if request.is_json:
        return dict(request.get_json(silent=True) or {})
    data = request.form.to_dict()
    for key in request.form:
        values = request.form.getlist(key)
        if len(values) > 1 or key.endswith("[]"):
            data[key.removesuffix("[]")] = values
    return data


def photo_upload(field: str = "photo") -> Optional[PhotoUpload]:
    file = request.files.get(field)
    if not file or not file.filename:
        return None
    return PhotoUpload(filename=secure_filename(file.filename), content_type=file.mimetype or "", data=file.read())


def csv_response(csv_bytes: bytes, filename: str):
    return current_app.response_class(
        csv_bytes,
        mimetype="text/csv",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )
