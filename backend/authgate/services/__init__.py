"""Service layer public API.

Re-exports
----------
- Base primitives (from ``authgate.services._shared``)
    * :class:`BaseService`, :class:`UserIdentity`

- Token core (from ``authgate.services.tokens``)
    * :class:`TokenCodec`, :class:`TokenService`, :class:`TokenKind`

- Exchange (from ``authgate.services.authorize``)
    * :class:`AuthorizeService` and its DTOs
"""

from __future__ import annotations

from authgate.services._shared.base import BaseService
from authgate.services._shared.dto import UserIdentity
from authgate.services.authorize import AuthorizeIn, AuthorizeService, GrantType, TokenPairOut
from authgate.services.tokens import (
    IssuedToken,
    TokenCodec,
    TokenKind,
    TokenService,
    TokenTTLConfig,
)

__all__ = [
    "AuthorizeIn",
    "AuthorizeService",
    "BaseService",
    "GrantType",
    "IssuedToken",
    "TokenCodec",
    "TokenKind",
    "TokenPairOut",
    "TokenService",
    "TokenTTLConfig",
    "UserIdentity",
]
