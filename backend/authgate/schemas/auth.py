"""Authentication-related Marshmallow schemas."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields


class AuthorizeSchema(Schema):
    """Input payload for the code / refresh-token exchange.

    Both fields are optional here; the service decides which grant applies.
    """

    class Meta:
        unknown = EXCLUDE

    code = fields.String(load_default=None, allow_none=True)
    refresh_token = fields.String(data_key="refreshToken", load_default=None, allow_none=True)


class TokenPairSchema(Schema):
    """Response payload with both tokens and their absolute expirations."""

    access_token = fields.String(data_key="accessToken", required=True)
    access_token_expiration = fields.Integer(data_key="accessTokenExpiration", required=True)
    refresh_token = fields.String(data_key="refreshToken", required=True)
    refresh_token_expiration = fields.Integer(data_key="refreshTokenExpiration", required=True)


class WhoAmISchema(Schema):
    """Response payload exposing the identity resolved for the request."""

    id = fields.Integer(attribute="user_id", required=True)
    display_name = fields.String(data_key="displayName", allow_none=True)
