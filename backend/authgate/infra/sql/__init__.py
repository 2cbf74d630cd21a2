"""SQL-backed user directory, authorization codes and settings."""

from __future__ import annotations

from .sql_authorization_code_store import SQLAuthorizationCodeStore
from .sql_settings_store import SQLSettingsStore
from .sql_user_directory import SQLUserDirectory

__all__ = ["SQLAuthorizationCodeStore", "SQLSettingsStore", "SQLUserDirectory"]
