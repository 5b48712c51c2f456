"""Helpers shared by the JSON controllers."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from ..core.enums import CompensationPolicy
from ..core.exceptions import (
    DomainError,
    InvalidTransitionError,
    LockedPeriodError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)

_TRUE = {"1", "true", "yes", "on"}


def ok(data: Any = None, status: int = 200):
    return jsonify({"success": True, "data": data}), status


def fail(message: str, status: int, *, field: Optional[str] = None):
    body = {"success": False, "message": message}
    if field:
        body["field"] = field
    return jsonify(body), status


def status_for(error: DomainError) -> int:
    if isinstance(error, ValidationError):
        return 400
    if isinstance(error, NotFoundError):
        return 404
    if isinstance(error, (LockedPeriodError, InvalidTransitionError)):
        return 409
    return 400


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        return fail(str(e), status_for(e), field=e.field)

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        return fail(e.description or e.name, e.code or 500)

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        return fail("Internal server error", 500)


def actor() -> Optional[str]:
    value = (request.headers.get("X-User-Id") or "").strip()
    return value or None


def json_body() -> Mapping[str, Any]:
    data = request.get_json(silent=True)
    if not isinstance(data, Mapping):
        raise ValidationError("Request body must be a JSON object", field="body")
    return data


def int_value(value: Any, field_name: str, *, required: bool = True) -> Optional[int]:
    if value is None or (isinstance(value, str) and not value.strip()):
        if required:
            raise ValidationError(f"{field_name} is required", field=field_name)
        return None
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        raise ValidationError(f"{field_name} must be an integer", field=field_name)
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer", field=field_name)


def bool_value(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value or "").strip().lower() in _TRUE


def policy_value(value: Any, default: CompensationPolicy) -> CompensationPolicy:
    if value is None or not str(value).strip():
        return default
    try:
        return CompensationPolicy(str(value).strip().upper())
    except ValueError:
        raise ValidationError(f"Unknown compensation policy '{value}'", field="policy")
