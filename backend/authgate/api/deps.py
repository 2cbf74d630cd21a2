"""Shared API helpers for request parsing and cross-cutting concerns."""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from typing import Any, TypeVar

from flask import Response, current_app, jsonify, request

from authgate.core.components import get_components
from authgate.core.errors import Unauthorized
from authgate.security.authenticators import current_user

F = TypeVar("F", bound=Callable[..., Any])


def request_params() -> dict[str, Any]:
    """Merge query string, form fields and JSON body (JSON wins)."""

    params: dict[str, Any] = dict(request.args.to_dict())
    params.update(request.form.to_dict())
    body = request.get_json(silent=True)
    if isinstance(body, dict):
        params.update(body)
    return params


def require_shared_secret(func: F) -> F:
    """Deny the request before the view runs unless the secret gate allows it."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        if not get_components().gate.authorize(request):
            raise Unauthorized("Sorry, you are not allowed to do that.")
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def require_auth(func: F) -> F:
    """Ensure the authenticator chain resolved a user for this request."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        if current_user() is None:
            raise Unauthorized("Authentication required.")
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def json_response(payload: Any, *, status: int = 200) -> Response:
    """Return a JSON response enforcing a consistent MIME type."""

    response = jsonify(payload)
    response.status_code = status
    return response


def no_store(response: Response) -> Response:
    """Mark a response carrying credentials as non-cacheable."""

    response.headers["Cache-Control"] = "no-store"
    response.headers["Pragma"] = "no-cache"
    return response


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            request_endpoint = getattr(request, "endpoint", None)
            current_app.logger.debug(
                "request.elapsed",
                extra={"endpoint": request_endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]
