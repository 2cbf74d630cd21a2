"""SQLAlchemy models registered on the shared metadata."""

from __future__ import annotations

from .authorization_code import AuthorizationCode
from .setting import Setting
from .user import User

__all__ = ["AuthorizationCode", "Setting", "User"]
