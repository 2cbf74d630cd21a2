"""Application settings with environment-based simple classes."""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Final

from dotenv import load_dotenv

# Public selector env var (keep neutral name to avoid collisions)
ENV_VAR: Final[str] = "APP_ENV"  # 'development' | 'testing' | 'production'

MINUTE_IN_SECONDS: Final[int] = 60
WEEK_IN_SECONDS: Final[int] = 7 * 24 * 60 * MINUTE_IN_SECONDS

# Loads .env during development (no-op when the file is missing)
load_dotenv()


def env_bool(name: str, default: bool = False) -> bool:
    """Read a boolean flag; ``1/true/yes/y/on`` (any case) mean ``True``.

    Returns ``default`` only when the variable is unset.
    """
    val = os.getenv(name)
    if val is None:
        return default
    return str(val).strip().lower() in {"1", "true", "yes", "y", "on"}


def env_int(name: str, default: int) -> int:
    """Parse a positive integer from an environment variable.

    Falls back to ``default`` when the variable is unset, blank, not numeric
    or not strictly positive.
    """
    val = os.getenv(name)
    if val is None or not val.strip():
        return default
    try:
        parsed = int(val.strip())
    except ValueError:
        return default
    return parsed if parsed > 0 else default


class BaseConfig:
    """Base configuration shared across environments.

    Attributes
    ----------
    AUTH_NAMESPACE: str
        Root path under which the versioned auth blueprints are mounted.
    SHARED_SECRET: str
        Initial shared secret. Signs every token and gates the authorize
        endpoint. Empty disables authentication entirely.
    SHARED_SECRET_HEADER: str
        Request header carrying the client's copy of the shared secret.
    ACCESS_TOKEN_TTL: int
        Access token lifetime in seconds (5 minutes).
    REFRESH_TOKEN_TTL: int
        Refresh token lifetime in seconds (2 weeks).
    AUTHORIZATION_CODE_TTL: int
        Lifetime of one-time authorization codes in seconds.
    TOKEN_ISSUER: str
        Value of the ``iss`` claim embedded in and required from tokens.
    REDIS_URL: str | None
        When set, authorization codes and the runtime secret live in Redis.
    SQLALCHEMY_DATABASE_URI: str
        Database holding the user directory.
    LOG_LEVEL: str
        Root logging verbosity (``INFO`` by default).
    CORS_ORIGINS: str
        Comma-separated list of allowed origins for CORS.

    Notes
    -----
    Values are primarily sourced from environment variables, enabling
    configuration without code changes.
    """

    AUTH_NAMESPACE = os.getenv("AUTH_NAMESPACE", "/auth")

    # Secrets / security
    SHARED_SECRET = os.getenv("SHARED_SECRET", "")
    SHARED_SECRET_HEADER = os.getenv("SHARED_SECRET_HEADER", "X-Shared-Secret")
    TOKEN_ISSUER = os.getenv("TOKEN_ISSUER", "authgate")

    # Token lifetimes (seconds)
    ACCESS_TOKEN_TTL = env_int("ACCESS_TOKEN_TTL", 5 * MINUTE_IN_SECONDS)
    REFRESH_TOKEN_TTL = env_int("REFRESH_TOKEN_TTL", 2 * WEEK_IN_SECONDS)
    AUTHORIZATION_CODE_TTL = env_int("AUTHORIZATION_CODE_TTL", MINUTE_IN_SECONDS)

    # Stores
    REDIS_URL = os.getenv("REDIS_URL") or None
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///./authgate.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)

    # Flask & JSON
    JSON_SORT_KEYS = False
    PROPAGATE_EXCEPTIONS = False

    # Logging, CORS & proxy
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:3000")
    USE_PROXYFIX = env_bool("USE_PROXYFIX", True)

    # Flask built-ins
    DEBUG = False
    TESTING = False


class DevelopmentConfig(BaseConfig):
    """Configuration tailored for local development."""

    DEBUG = env_bool("FLASK_DEBUG", True)
    CORS_MAX_AGE = 600  # 10 minutes


class TestingConfig(BaseConfig):
    """Configuration for automated test runs.

    Notes
    -----
    - Forces ``TESTING`` mode and disables debug logs.
    - Uses an in-memory SQLite database, which also holds codes and the secret.
    - Ships a fixed shared secret so the authorize endpoint is reachable.
    """

    TESTING = True
    DEBUG = False
    SHARED_SECRET = "test-shared-secret"
    REDIS_URL = None
    SQLALCHEMY_DATABASE_URI = os.getenv("TEST_DATABASE_URL", "sqlite:///:memory:")
    PROPAGATE_EXCEPTIONS = True
    USE_PROXYFIX = False


class ProductionConfig(BaseConfig):
    """Configuration defaults for production deployments."""

    DEBUG = False
    SQLALCHEMY_ECHO = False
    PROPAGATE_EXCEPTIONS = False


# Map names -> classes (simple, explicit)
CONFIG_MAP: Mapping[str, type[BaseConfig]] = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}


def get_config() -> type[BaseConfig]:
    """Return the configuration class inferred from ``APP_ENV``.

    Falls back to :class:`DevelopmentConfig` when ``APP_ENV`` is unset or
    unknown.
    """
    name = os.getenv(ENV_VAR, "development").strip().lower()
    return CONFIG_MAP.get(name, DevelopmentConfig)
