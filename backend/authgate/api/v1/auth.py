"""Token exchange and identity endpoints."""

from __future__ import annotations

from flask import Blueprint
from marshmallow import ValidationError

from authgate.api.deps import (
    json_response,
    no_store,
    request_params,
    require_auth,
    require_shared_secret,
    timing,
)
from authgate.core.components import get_components
from authgate.core.errors import InvalidRequest
from authgate.schemas import AuthorizeSchema, TokenPairSchema, WhoAmISchema
from authgate.security.authenticators import current_user
from authgate.services._shared.errors import ServiceError
from authgate.services.authorize.dto import AuthorizeIn
from authgate.services.authorize.service import INVALID_GRANT_MESSAGE, AuthorizeService

bp = Blueprint("auth", __name__)

authorize_schema = AuthorizeSchema()
token_pair_schema = TokenPairSchema()
whoami_schema = WhoAmISchema()


@bp.post("/authorize")
@require_shared_secret
@timing
def authorize():
    """Exchange an authorization code or a refresh token for a new token pair."""

    try:
        data = authorize_schema.load(request_params())
    except ValidationError as exc:
        # Grants that are not strings can never match a code or token
        raise InvalidRequest(INVALID_GRANT_MESSAGE) from exc
    service = AuthorizeService(tokens=get_components().tokens)
    try:
        pair = service.authorize(
            AuthorizeIn(code=data["code"], refresh_token=data["refresh_token"])
        )
    except ServiceError as exc:
        raise service.translate_exceptions(exc) from exc
    return no_store(json_response(token_pair_schema.dump(pair)))


@bp.get("/whoami")
@require_auth
@timing
def whoami():
    """Return the identity the bearer token resolved to."""

    return json_response(whoami_schema.dump(current_user()))
