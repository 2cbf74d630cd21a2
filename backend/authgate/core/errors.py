"""RFC 7807 ``application/problem+json`` errors for the auth endpoints."""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any

from flask import Flask, Response, jsonify, request
from marshmallow import ValidationError
from redis.exceptions import RedisError  # type: ignore[import-untyped]
from sqlalchemy.exc import OperationalError
from werkzeug.exceptions import HTTPException

from authgate.core.logger import ensure_request_id

log = logging.getLogger(__name__)

PROBLEM_MIMETYPE = "application/problem+json"


def status_code_name(status: int) -> str:
    """Return the snake_case reason phrase, e.g. ``405 -> "method_not_allowed"``."""
    try:
        phrase = HTTPStatus(status).phrase
    except ValueError:
        return "error"
    return phrase.lower().replace("-", "_").replace(" ", "_")


def problem_response(
    status: int,
    code: str,
    detail: str,
    *,
    details: dict[str, Any] | None = None,
) -> tuple[Response, int]:
    """
    Render a problem document.

    :param status: HTTP status code.
    :param code: Stable, machine-readable error code.
    :param detail: Client-safe summary.
    :param details: Optional structured extras (validation messages).
    :returns: ``(response, status)`` ready to return from a handler.
    """
    problem: dict[str, Any] = {
        "type": "about:blank",
        "title": HTTPStatus(status).phrase,
        "status": int(status),
        "detail": detail,
        "instance": request.path,
        "code": code,
        "request_id": ensure_request_id(),
    }
    if details:
        problem["details"] = details
    resp = jsonify(problem)
    resp.mimetype = PROBLEM_MIMETYPE
    return resp, int(status)


class APIError(Exception):
    """
    Base for errors raised by views and rendered as problem documents.

    Parameters
    ----------
    message : str
        Client-safe description, rendered as ``detail``.
    status_code : int, optional
        HTTP status. Defaults to ``400``.
    code : str, optional
        Machine-readable identifier. Defaults to ``"bad_request"``.
    details : dict[str, Any] | None, optional
        Optional structured payload.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 400,
        code: str = "bad_request",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = int(status_code)
        self.code = code
        self.details = details or {}


class InvalidRequest(APIError):
    """400 when a grant is missing or does not resolve to a user."""

    def __init__(self, message: str = "Invalid request") -> None:
        super().__init__(message, status_code=HTTPStatus.BAD_REQUEST, code="invalid_request")


class Unauthorized(APIError):
    """401 when the caller is not an authorized client or user."""

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message, status_code=HTTPStatus.UNAUTHORIZED, code="unauthorized")


def init_app(app: Flask) -> None:
    """
    Register problem+json handlers.

    Client errors are logged as warnings without traceback; store outages and
    unexpected failures as errors with ``exc_info``. Internal details never
    reach the response body.
    """

    @app.errorhandler(APIError)
    def handle_api_error(err: APIError):
        log.warning("api_error code=%s status=%s detail=%s", err.code, err.status_code, err.message)
        return problem_response(err.status_code, err.code, err.message, details=err.details)

    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        status = int(err.code or HTTPStatus.INTERNAL_SERVER_ERROR)
        code = status_code_name(status)
        if status == HTTPStatus.NOT_FOUND:
            detail = f"Route '{request.path}' not found"
        else:
            detail = (err.description or code.replace("_", " ").capitalize()).strip()
        (log.error if status >= 500 else log.warning)(
            "http_error code=%s status=%s detail=%s", code, status, detail
        )
        return problem_response(status, code, detail)

    @app.errorhandler(ValidationError)
    def handle_validation_error(err: ValidationError):
        log.warning("validation_error messages=%s", err.messages)
        return problem_response(
            HTTPStatus.UNPROCESSABLE_ENTITY,
            "validation_error",
            "Validation failed",
            details={"errors": err.messages},
        )

    @app.errorhandler(OperationalError)
    @app.errorhandler(RedisError)
    def handle_store_unavailable(err: Exception):
        # User directory or code store unreachable
        log.error("store_unavailable error=%s", type(err).__name__, exc_info=True)
        return problem_response(
            HTTPStatus.SERVICE_UNAVAILABLE,
            "service_unavailable",
            "Service temporarily unavailable",
        )

    @app.errorhandler(Exception)
    def handle_unexpected_error(err: Exception):
        log.error("unhandled_exception", exc_info=True)
        return problem_response(
            HTTPStatus.INTERNAL_SERVER_ERROR, "internal_server_error", "Unexpected error"
        )
