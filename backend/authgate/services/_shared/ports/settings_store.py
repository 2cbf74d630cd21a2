from __future__ import annotations

import secrets
import threading
from typing import Protocol


def generate_secret_key(nbytes: int = 32) -> str:
    """Return a new random URL-safe shared secret."""
    return secrets.token_urlsafe(nbytes)


class SettingsStore(Protocol):
    """
    Port for the settings store holding the shared secret.

    Reads happen on every sign/verify so a rotation takes effect immediately.
    """

    def get_secret_key(self) -> str | None: ...

    def set_secret_key(self, value: str) -> None: ...


class InMemorySettingsStore(SettingsStore):
    """Process-local settings store, seeded from configuration."""

    def __init__(self, secret_key: str | None = None) -> None:
        self._secret_key = secret_key or None
        self._lock = threading.Lock()

    def get_secret_key(self) -> str | None:
        return self._secret_key

    def set_secret_key(self, value: str) -> None:
        with self._lock:
            self._secret_key = value or None
