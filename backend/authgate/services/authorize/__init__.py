"""Code / refresh-token exchange orchestration."""

from __future__ import annotations

from .dto import AuthorizeIn, GrantType, TokenPairOut
from .service import AuthorizeService

__all__ = ["AuthorizeIn", "AuthorizeService", "GrantType", "TokenPairOut"]
