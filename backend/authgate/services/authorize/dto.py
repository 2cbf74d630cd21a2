# authgate/services/authorize/dto.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class GrantType(str, Enum):
    """Which credential an exchange was resolved from."""

    AUTHORIZATION_CODE = "authorization_code"
    REFRESH_TOKEN = "refresh_token"


# ---------------------------- Input DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class AuthorizeIn:
    """
    Input DTO for a code or refresh-token exchange.

    :param code: One-time authorization code, possibly blank.
    :type code: str | None
    :param refresh_token: Encoded refresh token, possibly blank.
    :type refresh_token: str | None
    """

    code: str | None = None
    refresh_token: str | None = None


# --------------------------- Output DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class TokenPairOut:
    """
    Output DTO with a fresh access/refresh pair and absolute expirations.

    :param access_token: Encoded access token.
    :param access_token_expiration: Unix seconds at which it expires.
    :param refresh_token: Encoded refresh token.
    :param refresh_token_expiration: Unix seconds at which it expires.
    :param user_id: Identity the pair was minted for.
    :param grant_type: Grant the user was resolved from.
    """

    access_token: str
    access_token_expiration: int
    refresh_token: str
    refresh_token_expiration: int
    user_id: int
    grant_type: GrantType
