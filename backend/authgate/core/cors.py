"""CORS configuration helper for the auth namespace."""

from __future__ import annotations

from flask import Flask
from flask_cors import CORS


def init_app(app: Flask) -> None:
    """Configure CORS for the auth endpoints based on application config.

    Parameters
    ----------
    app: flask.Flask
        Application whose ``CORS_ORIGINS`` and ``CORS_MAX_AGE`` settings are
        consulted. When ``CORS_ORIGINS`` is blank or ``"*"`` the policy allows
        any origin but disables credential support.

    Notes
    -----
    The shared-secret header is listed explicitly so browsers let it through
    preflight requests.
    """
    raw_origins = app.config.get("CORS_ORIGINS", "")
    origins = [o.strip() for o in raw_origins.split(",") if o.strip()]
    wildcard = len(origins) == 0 or origins == ["*"]
    namespace = app.config.get("AUTH_NAMESPACE", "/auth").rstrip("/")

    CORS(
        app,
        resources={rf"{namespace}/*": {"origins": "*" if wildcard else origins}},
        allow_headers=[
            "Authorization",
            "Content-Type",
            app.config.get("SHARED_SECRET_HEADER", "X-Shared-Secret"),
        ],
        supports_credentials=not wildcard,
        max_age=app.config.get("CORS_MAX_AGE", 600),
    )
