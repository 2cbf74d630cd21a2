# authgate/services/tokens/dto.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from authgate.core.config import MINUTE_IN_SECONDS, WEEK_IN_SECONDS


class TokenKind(str, Enum):
    """Discriminator stored in the ``type`` claim of every token."""

    ACCESS = "access"
    REFRESH = "refresh"


# --------------------------- Output DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class IssuedToken:
    """
    A freshly minted token and its absolute expiration.

    :param token: Encoded, signed token.
    :type token: str
    :param kind: Access or refresh.
    :type kind: TokenKind
    :param expires_at: Expiration as unix seconds.
    :type expires_at: int
    """

    token: str
    kind: TokenKind
    expires_at: int


# ------------------------ Config DTO (optional) --------------------------- #


@dataclass(frozen=True, slots=True)
class TokenTTLConfig:
    """
    Token emission configuration.

    :param access_ttl: Access token lifetime in seconds.
    :type access_ttl: int
    :param refresh_ttl: Refresh token lifetime in seconds.
    :type refresh_ttl: int
    """

    access_ttl: int = 5 * MINUTE_IN_SECONDS
    refresh_ttl: int = 2 * WEEK_IN_SECONDS
