# comments in English; reST docstrings
from __future__ import annotations

from dataclasses import dataclass
from typing import cast

import redis  # type: ignore[import-untyped]

from authgate.services._shared.ports import AuthorizationCodeStore, new_authorization_code


@dataclass(slots=True)
class RedisAuthorizationCodeStore(AuthorizationCodeStore):
    """
    Redis-backed one-time authorization codes.

    Codes are plain keys holding the user id, expired by Redis itself.
    ``consume`` relies on ``GETDEL`` so lookup and invalidation are a single
    atomic command across every worker sharing the instance.

    :param r: A Redis client (already connected).
    """

    r: redis.Redis

    @staticmethod
    def _k(code: str) -> str:
        return f"ac:{code}"

    def issue(self, user_id: int, *, ttl: int) -> str:
        code = new_authorization_code()
        # NX: a collision would silently rebind someone else's code
        while not self.r.set(self._k(code), str(int(user_id)), ex=max(1, int(ttl)), nx=True):
            code = new_authorization_code()
        return code

    def consume(self, code: str) -> int | None:
        raw = cast(bytes | str | None, self.r.getdel(self._k(code)))
        if raw is None:
            return None
        value = raw.decode() if isinstance(raw, bytes | bytearray) else str(raw)
        return int(value) if value.isdigit() else None
