"""Health check endpoint."""

from __future__ import annotations

from flask import Blueprint, current_app
from redis.exceptions import RedisError  # type: ignore[import-untyped]
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from authgate.api.deps import json_response, timing
from authgate.core.components import get_components
from authgate.core.extensions import REDIS_EXTENSION_KEY, db

bp = Blueprint("health", __name__)


@bp.get("/health")
@timing
def healthcheck():
    """Return service, database and Redis health information."""

    db_status = "ok"
    try:
        db.session.execute(text("SELECT 1"))
    except SQLAlchemyError:
        current_app.logger.exception("healthcheck.db_error")
        db.session.rollback()
        db_status = "fail"

    redis_status = "disabled"
    redis_client = current_app.extensions.get(REDIS_EXTENSION_KEY)
    if redis_client is not None:
        try:
            redis_client.ping()
            redis_status = "ok"
        except RedisError:
            current_app.logger.exception("healthcheck.redis_error")
            redis_status = "fail"

    # The secret lives in Redis when enabled, in the database otherwise
    secret_backend = redis_status if redis_client is not None else db_status
    if secret_backend == "fail":
        secret_status = "unknown"
    elif get_components().settings.get_secret_key():
        secret_status = "configured"
    else:
        secret_status = "missing"
    payload = {
        "status": "ok",
        "db": db_status,
        "redis": redis_status,
        "shared_secret": secret_status,
        "version": current_app.config.get("APP_VERSION", "dev"),
    }
    return json_response(payload)
