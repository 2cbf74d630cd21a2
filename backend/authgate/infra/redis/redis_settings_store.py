from __future__ import annotations

from typing import cast

import redis  # type: ignore[import-untyped]

SETTINGS_KEY = "settings:authgate"
SECRET_FIELD = "secret_key"


class RedisSettingsStore:
    """
    Shared secret kept in a Redis hash so every worker sees a rotation at once.
    """

    def __init__(self, r: redis.Redis, *, key: str = SETTINGS_KEY):
        self.r = r
        self.key = key

    def get_secret_key(self) -> str | None:
        raw = cast(bytes | str | None, self.r.hget(self.key, SECRET_FIELD))
        if not raw:
            return None
        return raw.decode() if isinstance(raw, bytes | bytearray) else str(raw)

    def set_secret_key(self, value: str) -> None:
        if value:
            self.r.hset(self.key, SECRET_FIELD, value)
        else:
            self.r.hdel(self.key, SECRET_FIELD)

    def seed_secret_key(self, value: str) -> bool:
        """Store ``value`` only when no secret exists yet. :returns: True if stored."""
        if not value:
            return False
        return cast(int, self.r.hsetnx(self.key, SECRET_FIELD, value)) == 1
