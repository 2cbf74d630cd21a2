"""
Request authentication chain.

Resolves the current user for every request before the view runs. Each
authenticator either returns an identity or ``None`` ("no opinion"); the first
identity wins. An identity established upstream is never replaced.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Protocol

from flask import Flask, g, request

from authgate.services._shared.dto import UserIdentity
from authgate.services._shared.errors import TokenError
from authgate.services.tokens.service import TokenService

log = logging.getLogger(__name__)


class AuthRequest(Protocol):
    """Subset of a werkzeug ``Request`` the authenticators read."""

    @property
    def headers(self) -> Mapping[str, str]: ...


class Authenticator(Protocol):
    """A single way of turning a request into an identity."""

    name: str

    def authenticate(self, request: AuthRequest) -> UserIdentity | None: ...


class BearerTokenAuthenticator:
    """
    Resolve ``Authorization: <scheme> <access-token>`` to a user.

    Missing or malformed headers and invalid tokens all yield ``None``: the
    request simply stays anonymous.
    """

    name = "bearer"

    def __init__(self, tokens: TokenService) -> None:
        self.tokens = tokens

    def authenticate(self, request: AuthRequest) -> UserIdentity | None:
        header = request.headers.get("Authorization")
        if not header:
            return None

        parts = header.split()
        if len(parts) < 2:
            return None

        try:
            return self.tokens.resolve_user_from_access_token(parts[1])
        except TokenError as exc:
            log.debug("bearer.rejected reason=%s", type(exc).__name__)
            return None


class AuthenticatorChain:
    """Ordered authenticators with first-resolved-wins semantics."""

    def __init__(self, authenticators: Iterable[Authenticator]) -> None:
        self.authenticators: list[Authenticator] = list(authenticators)

    def resolve(
        self, request: AuthRequest, current: UserIdentity | None = None
    ) -> UserIdentity | None:
        """
        Return ``current`` when already set, else the first resolved identity.

        Never raises: a failing authenticator is logged and skipped.
        """
        if current is not None:
            return current

        for authenticator in self.authenticators:
            try:
                identity = authenticator.authenticate(request)
            except Exception:
                log.exception("authenticator.failed", extra={"authenticator": authenticator.name})
                continue
            if identity is not None:
                log.debug(
                    "authenticator.resolved",
                    extra={"authenticator": authenticator.name, "user_id": identity.user_id},
                )
                return identity
        return None


def current_user() -> UserIdentity | None:
    """Return the identity resolved for the current request, if any."""
    return g.get("current_user")


def init_app(app: Flask, chain: AuthenticatorChain) -> None:
    """Run ``chain`` before every request and store the result on ``g``."""

    app.extensions["authenticator_chain"] = chain

    @app.before_request
    def _determine_current_user() -> None:
        g.current_user = chain.resolve(request, g.get("current_user"))

    @app.teardown_request
    def _forget_current_user(exc: BaseException | None) -> None:
        # ``g`` outlives the request when an app context was already pushed
        g.pop("current_user", None)
