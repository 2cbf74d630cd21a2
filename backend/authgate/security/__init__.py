"""Request-time authentication and the shared-secret gate."""

from __future__ import annotations

from .authenticators import (
    Authenticator,
    AuthenticatorChain,
    BearerTokenAuthenticator,
    current_user,
)
from .gate import SecretGate

__all__ = [
    "Authenticator",
    "AuthenticatorChain",
    "BearerTokenAuthenticator",
    "SecretGate",
    "current_user",
]
