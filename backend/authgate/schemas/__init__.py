"""Convenience exports for application schemas."""

from __future__ import annotations

from .auth import AuthorizeSchema, TokenPairSchema, WhoAmISchema

__all__ = [
    "AuthorizeSchema",
    "TokenPairSchema",
    "WhoAmISchema",
]
