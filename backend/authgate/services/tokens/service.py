# authgate/services/tokens/service.py
from __future__ import annotations

from typing import Any
from uuid import uuid4

from authgate.services._shared.dto import Clock, UserIdentity, system_clock
from authgate.services._shared.errors import (
    InvalidGrantError,
    MalformedTokenError,
    UserNotFoundError,
    WrongTokenKindError,
)
from authgate.services._shared.ports.user_directory import UserDirectory
from authgate.services.tokens.codec import TokenCodec
from authgate.services.tokens.dto import IssuedToken, TokenKind, TokenTTLConfig


class TokenService:
    """
    Typed construction and validation of access and refresh tokens.

    Every token carries the user id (``sub``), a kind discriminator (``type``)
    and a unique ``jti``. Each ``resolve_*`` method checks the discriminator on
    top of the codec's signature and expiration checks, so an access token is
    never accepted where a refresh token is required, or vice versa.

    Access tokens resolve from their claims alone. Refresh tokens and
    authorization codes consult the user directory to re-confirm the user.
    """

    def __init__(
        self,
        *,
        codec: TokenCodec,
        directory: UserDirectory,
        ttl_cfg: TokenTTLConfig | None = None,
        clock: Clock = system_clock,
    ) -> None:
        """
        :param codec: Signs and verifies claim sets.
        :param directory: User lookup and authorization-code consumption.
        :param ttl_cfg: Default access/refresh lifetimes.
        :param clock: Callable returning the current unix time.
        """
        self.codec = codec
        self.directory = directory
        self.cfg = ttl_cfg or TokenTTLConfig()
        self.clock = clock

    # ------------------------------------------------------------------ #
    # Issuance
    # ------------------------------------------------------------------ #

    def issue_access_token(self, user: UserIdentity, ttl: int | None = None) -> IssuedToken:
        """Mint a short-lived access token for ``user``."""
        return self._issue(user, TokenKind.ACCESS, self.cfg.access_ttl if ttl is None else ttl)

    def issue_refresh_token(self, user: UserIdentity, ttl: int | None = None) -> IssuedToken:
        """Mint a long-lived refresh token for ``user``."""
        return self._issue(user, TokenKind.REFRESH, self.cfg.refresh_ttl if ttl is None else ttl)

    def _issue(self, user: UserIdentity, kind: TokenKind, ttl: int) -> IssuedToken:
        now = int(self.clock())
        expires_at = now + int(ttl)
        claims: dict[str, Any] = {
            "sub": str(user.user_id),
            "type": kind.value,
            "jti": uuid4().hex,
            "iat": now,
        }
        if user.display_name:
            claims["name"] = user.display_name
        token = self.codec.sign(claims, expires_at)
        return IssuedToken(token=token, kind=kind, expires_at=expires_at)

    # ------------------------------------------------------------------ #
    # Resolution
    # ------------------------------------------------------------------ #

    def resolve_user_from_access_token(self, token: str) -> UserIdentity:
        """
        Resolve the identity embedded in an access token.

        :raises TokenError: On any signature, expiration, shape or kind failure.
        """
        claims = self._verify(token, TokenKind.ACCESS)
        name = claims.get("name")
        return UserIdentity(
            user_id=self._coerce_user_id(claims.get("sub")),
            display_name=name if isinstance(name, str) else None,
        )

    def resolve_user_from_refresh_token(self, token: str) -> UserIdentity:
        """
        Resolve and re-confirm the user behind a refresh token.

        The token is not consumed; it stays valid until it expires.

        :raises TokenError: On any signature, expiration, shape or kind failure.
        :raises UserNotFoundError: When the directory no longer knows the user.
        """
        claims = self._verify(token, TokenKind.REFRESH)
        user_id = self._coerce_user_id(claims.get("sub"))
        user = self.directory.get_user(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    def resolve_user_from_authorization_code(self, code: str) -> UserIdentity:
        """
        Exchange a one-time authorization code for its user.

        The directory invalidates the code as part of the lookup.

        :raises InvalidGrantError: Unknown, expired or already used code.
        """
        user = self.directory.resolve_and_consume(code)
        if user is None:
            raise InvalidGrantError("Invalid authorization code.")
        return user

    # ------------------------------------------------------------------ #
    # Utilities
    # ------------------------------------------------------------------ #

    def _verify(self, token: str, expected: TokenKind) -> dict[str, Any]:
        claims = self.codec.verify(token)
        actual = claims.get("type")
        if actual != expected.value:
            raise WrongTokenKindError(expected=expected.value, actual=actual)
        return claims

    @staticmethod
    def _coerce_user_id(subject: Any) -> int:
        """Ensure the token subject can be treated as an integer user id."""
        if isinstance(subject, int) and not isinstance(subject, bool):
            return subject
        if isinstance(subject, str) and subject.isdigit():
            return int(subject)
        raise MalformedTokenError("Invalid token subject.")
