"""Signing and verification of claim sets into opaque bearer tokens."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import jwt

from authgate.services._shared.dto import Clock, system_clock
from authgate.services._shared.errors import (
    ExpiredTokenError,
    InvalidSignatureError,
    MalformedTokenError,
)
from authgate.services._shared.ports.settings_store import SettingsStore


class TokenCodec:
    """
    HMAC-SHA256 signed JWT codec keyed by the shared secret.

    The secret is read from the settings store on every call, so rotating it
    invalidates every token signed under the previous value. Signature checks
    are delegated to PyJWT, which compares digests in constant time.

    Expiration is checked here against the injected clock rather than by PyJWT:
    a token is valid while ``now < exp`` and expired from ``now == exp`` on.
    """

    ALGORITHM = "HS256"

    def __init__(
        self,
        settings: SettingsStore,
        *,
        issuer: str = "authgate",
        clock: Clock = system_clock,
    ) -> None:
        """
        :param settings: Source of the shared secret.
        :param issuer: Value written to and required from the ``iss`` claim.
        :param clock: Callable returning the current unix time.
        """
        self.settings = settings
        self.issuer = issuer
        self.clock = clock

    def _secret(self) -> str:
        secret = self.settings.get_secret_key()
        if not secret:
            raise InvalidSignatureError("No shared secret configured.")
        return secret

    def sign(self, claims: Mapping[str, Any], expires_at: int) -> str:
        """
        Serialize ``claims`` with an absolute expiration and sign the result.

        :param claims: Claim set to embed. ``exp`` and ``iss`` are overwritten.
        :param expires_at: Absolute expiration as unix seconds.
        :returns: Compact ``header.payload.signature`` token.
        :raises InvalidSignatureError: When no shared secret is configured.
        """
        payload = dict(claims)
        payload.setdefault("iat", int(self.clock()))
        payload["exp"] = int(expires_at)
        payload["iss"] = self.issuer
        return jwt.encode(payload, self._secret(), algorithm=self.ALGORITHM)

    def verify(self, token: str) -> dict[str, Any]:
        """
        Verify ``token`` and return its claims.

        :raises MalformedTokenError: Token cannot be parsed or lacks ``exp``/``iss``.
        :raises InvalidSignatureError: Signature mismatch or no secret configured.
        :raises ExpiredTokenError: ``exp`` is at or before the current time.
        """
        if not isinstance(token, str) or not token:
            raise MalformedTokenError("Empty token.")
        secret = self._secret()
        try:
            claims: dict[str, Any] = jwt.decode(
                token,
                secret,
                algorithms=[self.ALGORITHM],
                issuer=self.issuer,
                options={
                    "verify_exp": False,
                    "verify_iat": False,
                    "require": ["exp", "iss"],
                },
            )
        except jwt.InvalidSignatureError as exc:
            raise InvalidSignatureError("Token signature mismatch.") from exc
        except jwt.InvalidTokenError as exc:
            raise MalformedTokenError(str(exc)) from exc

        exp = claims.get("exp")
        if not isinstance(exp, int) or isinstance(exp, bool):
            raise MalformedTokenError("Expiration claim must be an integer.")
        if self.clock() >= exp:
            raise ExpiredTokenError("Token expired.")
        return claims
