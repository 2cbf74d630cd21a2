"""
authgate.services._shared.ports
===============================

Collection of *ports* (hexagonal interfaces) that define the contracts the
token core needs from its external collaborators.

Modules
-------
- :mod:`settings_store`:
    Defines :class:`~.SettingsStore`, the source of the shared secret.

- :mod:`authorization_code_store`:
    Defines :class:`~.AuthorizationCodeStore`: one-time code issuance and
    atomic consume-once lookup.

- :mod:`user_directory`:
    Defines :class:`~.UserDirectory`: identity lookup by id or by code.

Design Notes
------------
Concrete adapters (Redis, SQL) live under ``authgate.infra``; the in-memory
implementations here back unit tests.
"""

from __future__ import annotations

from .authorization_code_store import (
    AuthorizationCodeStore,
    InMemoryAuthorizationCodeStore,
    new_authorization_code,
)
from .settings_store import InMemorySettingsStore, SettingsStore, generate_secret_key
from .user_directory import InMemoryUserDirectory, UserDirectory

__all__ = [
    "AuthorizationCodeStore",
    "InMemoryAuthorizationCodeStore",
    "InMemorySettingsStore",
    "InMemoryUserDirectory",
    "SettingsStore",
    "UserDirectory",
    "generate_secret_key",
    "new_authorization_code",
]
