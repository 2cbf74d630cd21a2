from __future__ import annotations

import secrets
import threading
from dataclasses import dataclass
from typing import Protocol

from authgate.services._shared.dto import Clock, system_clock


def new_authorization_code() -> str:
    """Generate a random, URL-safe one-time authorization code."""
    return secrets.token_urlsafe(24)


class AuthorizationCodeStore(Protocol):
    """
    Stateful store for one-time authorization codes.

    ``consume`` MUST be atomic: the lookup and the invalidation happen as one
    step, so two concurrent consumers of the same code cannot both succeed.
    """

    def issue(self, user_id: int, *, ttl: int) -> str:
        """Create a code bound to ``user_id`` that expires after ``ttl`` seconds."""

    def consume(self, code: str) -> int | None:
        """Return the bound user id and invalidate the code, or ``None``."""


@dataclass(frozen=True, slots=True)
class _Entry:
    user_id: int
    expires_at: float


class InMemoryAuthorizationCodeStore(AuthorizationCodeStore):
    """
    In-memory code store with consume-once semantics.

    .. note::
       Uses a threading lock so check-and-delete is atomic within a process.
    """

    def __init__(self, *, clock: Clock = system_clock) -> None:
        self._codes: dict[str, _Entry] = {}
        self._lock = threading.Lock()
        self._clock = clock

    def issue(self, user_id: int, *, ttl: int) -> str:
        code = new_authorization_code()
        now = self._clock()
        with self._lock:
            # Unredeemed codes are only ever dropped here
            for stale in [c for c, e in self._codes.items() if e.expires_at <= now]:
                del self._codes[stale]
            self._codes[code] = _Entry(user_id=int(user_id), expires_at=now + ttl)
        return code

    def consume(self, code: str) -> int | None:
        with self._lock:
            entry = self._codes.pop(code, None)
        if entry is None or entry.expires_at <= self._clock():
            return None
        return entry.user_id
