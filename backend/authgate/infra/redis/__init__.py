"""Redis-backed stores."""

from __future__ import annotations

from .redis_authorization_code_store import RedisAuthorizationCodeStore
from .redis_settings_store import RedisSettingsStore

__all__ = ["RedisAuthorizationCodeStore", "RedisSettingsStore"]
