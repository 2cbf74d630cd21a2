"""Shared-secret permission check guarding the token exchange endpoint."""

from __future__ import annotations

import hmac
import logging
from collections.abc import Mapping
from typing import Protocol

from authgate.services._shared.ports.settings_store import SettingsStore

log = logging.getLogger(__name__)


class HasHeaders(Protocol):
    """Anything exposing request headers (a werkzeug ``Request`` in practice)."""

    @property
    def headers(self) -> Mapping[str, str]: ...


class SecretGate:
    """
    Authorize a caller by the shared secret it presents in a header.

    Allowed only when both the configured secret and the header value are
    non-empty and byte-for-byte equal. No trimming, no case folding.
    """

    def __init__(self, settings: SettingsStore, *, header_name: str = "X-Shared-Secret") -> None:
        self.settings = settings
        self.header_name = header_name

    def authorize(self, request: HasHeaders) -> bool:
        secret_key = self.settings.get_secret_key()
        header_key = request.headers.get(self.header_name)

        if not secret_key or not header_key:
            log.warning("secret_gate.denied reason=%s", "no_header" if secret_key else "no_secret")
            return False

        allowed = hmac.compare_digest(secret_key.encode("utf-8"), header_key.encode("utf-8"))
        if not allowed:
            log.warning("secret_gate.denied reason=mismatch")
        return allowed
