"""JSON API plumbing shared by every blueprint: errors, auth callbacks, request helpers."""

from __future__ import annotations

from datetime import date
from typing import Any

from flask import Flask, jsonify, request
from flask_jwt_extended import get_current_user
from werkzeug.exceptions import BadRequest, HTTPException, NotFound

from ..extensions import get_repositories, jwt
from ..logging_config import get_logger

logger = get_logger(__name__)


class ValidationFailed(BadRequest):
    """400 carrying per-field validation errors."""

    def __init__(self, message: str, errors: dict[str, list[str]] | None = None):
        super().__init__(message)
        self.errors = errors or {}


def json_error(message: str, status: int, **extra: Any):
    payload: dict[str, Any] = {"message": message}
    payload.update(extra)
    return jsonify(payload), status


def not_found(entity: str) -> NotFound:
    return NotFound(f"{entity} not found")


def current_user_id() -> int:
    """Id of the user resolved from the bearer token."""

    user_id = int(get_current_user().id)
    request.fintrack_user_id = user_id  # type: ignore[attr-defined]
    return user_id


def reference_date() -> date:
    """``today`` for aggregations; ``?as_of=YYYY-MM-DD`` overrides the system clock."""

    raw = request.args.get("as_of", "").strip()
    if not raw:
        return date.today()
    try:
        return date.fromisoformat(raw)
    except ValueError as exc:
        raise ValidationFailed(
            "Invalid request data", {"as_of": ["Enter a valid date (YYYY-MM-DD)."]}
        ) from exc


def json_body() -> dict[str, Any]:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationFailed("Invalid request data", {"__all__": ["Expected a JSON object."]})
    return data


def register_error_handlers(app: Flask) -> None:
    """Render every error as ``{"message": ...}`` JSON."""

    @app.errorhandler(ValidationFailed)
    def _validation_failed(exc: ValidationFailed):
        return json_error(exc.description or "Invalid request data", 400, errors=exc.errors)

    @app.errorhandler(HTTPException)
    def _http_error(exc: HTTPException):
        return json_error(exc.description or exc.name, exc.code or 500)

    @app.errorhandler(Exception)
    def _unexpected(exc: Exception):
        logger.exception("Unhandled error")
        return json_error("Internal server error", 500)


def register_jwt_callbacks() -> None:
    """Wire token checks to the user store; failures always read as 401 Unauthorized."""

    @jwt.user_lookup_loader
    def _load_user(_jwt_header: dict, jwt_data: dict):
        try:
            user_id = int(jwt_data["sub"])
        except (KeyError, TypeError, ValueError):
            return None
        return get_repositories().users.get_by_id(user_id)

    @jwt.user_lookup_error_loader
    def _user_missing(_jwt_header: dict, _jwt_data: dict):
        return json_error("Unauthorized", 401)

    @jwt.token_in_blocklist_loader
    def _is_revoked(_jwt_header: dict, jwt_data: dict) -> bool:
        return get_repositories().users.is_token_revoked(jwt_data["jti"])

    @jwt.unauthorized_loader
    def _missing_token(_reason: str):
        return json_error("Unauthorized", 401)

    @jwt.invalid_token_loader
    def _invalid_token(_reason: str):
        return json_error("Unauthorized", 401)

    @jwt.expired_token_loader
    def _expired_token(_jwt_header: dict, _jwt_data: dict):
        return json_error("Unauthorized", 401)

    @jwt.revoked_token_loader
    def _revoked_token(_jwt_header: dict, _jwt_data: dict):
        return json_error("Unauthorized", 401)
