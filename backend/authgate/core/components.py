"""Build the auth component graph once per app and expose it to views."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from flask import Flask, current_app

from authgate.core.extensions import REDIS_EXTENSION_KEY, db
from authgate.infra.redis.redis_authorization_code_store import RedisAuthorizationCodeStore
from authgate.infra.redis.redis_settings_store import RedisSettingsStore
from authgate.infra.sql import SQLAuthorizationCodeStore, SQLSettingsStore, SQLUserDirectory
from authgate.security import authenticators
from authgate.security.authenticators import AuthenticatorChain, BearerTokenAuthenticator
from authgate.security.gate import SecretGate
from authgate.services._shared.dto import Clock, system_clock
from authgate.services._shared.ports import AuthorizationCodeStore, SettingsStore, UserDirectory
from authgate.services.tokens import TokenCodec, TokenService, TokenTTLConfig

EXTENSION_KEY = "authgate"

log = logging.getLogger(__name__)


@dataclass(slots=True)
class AuthComponents:
    """Everything the auth endpoints and the request hook need."""

    settings: SettingsStore
    code_store: AuthorizationCodeStore
    directory: UserDirectory
    codec: TokenCodec
    tokens: TokenService
    gate: SecretGate
    chain: AuthenticatorChain


def build_components(
    app: Flask,
    *,
    clock: Clock = system_clock,
    settings: SettingsStore | None = None,
    code_store: AuthorizationCodeStore | None = None,
    directory: UserDirectory | None = None,
) -> AuthComponents:
    """
    Wire stores, codec, services and the gate from ``app.config``.

    With ``REDIS_URL`` configured the secret and the codes live in Redis
    (the configured ``SHARED_SECRET`` only seeds an empty store); otherwise
    they live in the ``settings`` and ``authorization_codes`` tables next to
    ``users``. Either way every process sharing the backend (server workers,
    ``flask auth`` commands) sees the same state. Any collaborator may be
    passed in explicitly.
    """
    cfg = app.config
    redis_client = app.extensions.get(REDIS_EXTENSION_KEY)

    if settings is None:
        if redis_client is not None:
            redis_settings = RedisSettingsStore(redis_client)
            redis_settings.seed_secret_key(cfg.get("SHARED_SECRET", ""))
            settings = redis_settings
        else:
            settings = SQLSettingsStore(
                session_factory=lambda: db.session, default=cfg.get("SHARED_SECRET") or None
            )

    if code_store is None:
        if redis_client is not None:
            code_store = RedisAuthorizationCodeStore(r=redis_client)
        else:
            code_store = SQLAuthorizationCodeStore(session_factory=lambda: db.session, clock=clock)

    if directory is None:
        directory = SQLUserDirectory(
            session_factory=lambda: db.session,
            code_store=code_store,
            code_ttl=int(cfg.get("AUTHORIZATION_CODE_TTL", 60)),
        )

    defaults = TokenTTLConfig()
    codec = TokenCodec(settings, issuer=cfg.get("TOKEN_ISSUER", "authgate"), clock=clock)
    tokens = TokenService(
        codec=codec,
        directory=directory,
        ttl_cfg=TokenTTLConfig(
            access_ttl=int(cfg.get("ACCESS_TOKEN_TTL", defaults.access_ttl)),
            refresh_ttl=int(cfg.get("REFRESH_TOKEN_TTL", defaults.refresh_ttl)),
        ),
        clock=clock,
    )
    gate = SecretGate(settings, header_name=cfg.get("SHARED_SECRET_HEADER", "X-Shared-Secret"))
    chain = AuthenticatorChain([BearerTokenAuthenticator(tokens)])

    # SQL stores need an app context, so only the configured value is checked then
    configured = settings.get_secret_key() if redis_client is not None else cfg.get("SHARED_SECRET")
    if not configured:
        log.warning("No shared secret configured; token exchange and verification are disabled.")

    return AuthComponents(
        settings=settings,
        code_store=code_store,
        directory=directory,
        codec=codec,
        tokens=tokens,
        gate=gate,
        chain=chain,
    )


def init_app(app: Flask) -> AuthComponents:
    """Register the component graph and the per-request authentication hook."""
    components = build_components(app)
    app.extensions[EXTENSION_KEY] = components
    authenticators.init_app(app, components.chain)
    return components


def get_components() -> AuthComponents:
    """Return the components bound to the current app."""
    return current_app.extensions[EXTENSION_KEY]
