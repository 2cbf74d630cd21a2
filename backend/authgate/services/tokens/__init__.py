"""Access/refresh token issuance and validation."""

from __future__ import annotations

from .codec import TokenCodec
from .dto import IssuedToken, TokenKind, TokenTTLConfig
from .service import TokenService

__all__ = ["IssuedToken", "TokenCodec", "TokenKind", "TokenService", "TokenTTLConfig"]
