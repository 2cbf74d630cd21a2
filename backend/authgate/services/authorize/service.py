# authgate/services/authorize/service.py
from __future__ import annotations

from authgate.services._shared.base import BaseService
from authgate.services._shared.dto import UserIdentity
from authgate.services._shared.errors import InvalidGrantError, ServiceError
from authgate.services.authorize.dto import AuthorizeIn, GrantType, TokenPairOut
from authgate.services.tokens.service import TokenService

MISSING_GRANT_MESSAGE = "Missing authorization code or refresh token."
INVALID_GRANT_MESSAGE = "Invalid authorization code or refresh token."


class AuthorizeService(BaseService):
    """
    Code / refresh-token exchange.

    Holds no token state: each call resolves a user from exactly one grant and
    mints a new access/refresh pair. A refresh token is not consumed by the
    exchange, so it can be replayed until it expires (rolling renewal). An
    authorization code is consumed by the directory and works once.
    """

    def __init__(self, *, tokens: TokenService) -> None:
        """
        :param tokens: Token issuance and resolution.
        """
        super().__init__()
        self.tokens = tokens

    def authorize(self, dto: AuthorizeIn) -> TokenPairOut:
        """
        Resolve the user behind the grant and mint a fresh token pair.

        Precedence: a non-blank refresh token wins over a code when both are
        supplied.

        :param dto: Exchange input. Values are trimmed before use.
        :returns: Access and refresh tokens with absolute expirations.
        :raises InvalidGrantError: Both grants blank, or the grant resolves to no user.
        """
        code = (dto.code or "").strip()
        refresh_token = (dto.refresh_token or "").strip()

        if not code and not refresh_token:
            raise InvalidGrantError(MISSING_GRANT_MESSAGE)

        grant_type = GrantType.REFRESH_TOKEN if refresh_token else GrantType.AUTHORIZATION_CODE
        user = self._resolve(grant_type, refresh_token or code)

        access = self.tokens.issue_access_token(user)
        refresh = self.tokens.issue_refresh_token(user)

        self.log.info(
            "authorize.issued",
            extra={"user_id": user.user_id, "grant_type": grant_type.value},
        )
        return TokenPairOut(
            access_token=access.token,
            access_token_expiration=access.expires_at,
            refresh_token=refresh.token,
            refresh_token_expiration=refresh.expires_at,
            user_id=user.user_id,
            grant_type=grant_type,
        )

    def _resolve(self, grant_type: GrantType, value: str) -> UserIdentity:
        try:
            if grant_type is GrantType.REFRESH_TOKEN:
                return self.tokens.resolve_user_from_refresh_token(value)
            return self.tokens.resolve_user_from_authorization_code(value)
        except ServiceError as exc:
            self.log.debug(
                "authorize.rejected reason=%s",
                type(exc).__name__,
                extra={"grant_type": grant_type.value},
            )
            raise InvalidGrantError(INVALID_GRANT_MESSAGE) from exc
