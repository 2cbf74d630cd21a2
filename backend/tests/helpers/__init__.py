"""Shared test helpers."""

from __future__ import annotations

from authgate.core.config import TestingConfig

# Shared secret configured on every test app and in-memory settings store
SECRET = "unit-test-shared-secret-0123456789abcdef"


class TestConfig(TestingConfig):
    """Testing configuration with quiet logs and a long shared secret."""

    __test__ = False

    LOG_LEVEL = "WARNING"
    SHARED_SECRET = SECRET
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
