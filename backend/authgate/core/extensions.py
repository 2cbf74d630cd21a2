"""Flask extension instances: SQLAlchemy for the user directory, Redis for shared state."""

from __future__ import annotations

import redis  # type: ignore[import-untyped]
from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from redis.exceptions import RedisError  # type: ignore[import-untyped]
from sqlalchemy import MetaData

REDIS_EXTENSION_KEY = "redis_client"

# Deterministic constraint names across SQLite and PostgreSQL
metadata = MetaData(
    naming_convention={
        "ix": "ix_%(table_name)s_%(column_0_name)s",
        "uq": "uq_%(table_name)s_%(column_0_name)s",
        "ck": "ck_%(table_name)s_%(constraint_name)s",
        "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
        "pk": "pk_%(table_name)s",
    }
)

db: SQLAlchemy = SQLAlchemy(session_options={"autoflush": False}, metadata=metadata)


def connect_redis(url: str) -> redis.Redis:
    """Open a client for ``url`` and fail fast when the server is unreachable.

    :raises RuntimeError: If the initial ``PING`` fails.
    """
    client = redis.Redis.from_url(url, socket_connect_timeout=5, health_check_interval=30)
    try:
        client.ping()
    except RedisError as exc:
        raise RuntimeError(f"Failed to connect to Redis at {url!r}") from exc
    return client


def init_app(app: Flask) -> None:
    """Bind SQLAlchemy and, when ``REDIS_URL`` is set, a Redis client.

    Parameters
    ----------
    app: flask.Flask
        Application receiving the extensions. The Redis client, if any, is
        stored in ``app.extensions["redis_client"]``; the auth components pick
        their stores based on its presence.
    """
    db.init_app(app)

    from authgate import models as _models  # noqa: F401  (registers the tables)

    redis_url = app.config.get("REDIS_URL")
    if redis_url:
        app.extensions[REDIS_EXTENSION_KEY] = connect_redis(redis_url)
    else:
        app.extensions.pop(REDIS_EXTENSION_KEY, None)
