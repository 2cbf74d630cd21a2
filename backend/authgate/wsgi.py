"""WSGI entrypoint: ``gunicorn authgate.wsgi:app``."""

from __future__ import annotations

from authgate import create_app

app = create_app()
