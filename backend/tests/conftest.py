"""Pytest fixtures for the auth service.

Each test gets a fresh application bound to its own in-memory SQLite database,
which also holds the secret and the authorization codes, so no state leaks
between cases. The framework-free fixtures use in-memory doubles instead.
"""

from __future__ import annotations

import fakeredis
import pytest
from authgate.core.components import get_components
from authgate.core.extensions import db as _db
from authgate.factory import create_app
from authgate.services._shared.dto import UserIdentity
from authgate.services._shared.ports import (
    InMemoryAuthorizationCodeStore,
    InMemorySettingsStore,
    InMemoryUserDirectory,
)
from authgate.services.tokens import TokenCodec, TokenService

from tests.helpers import SECRET, TestConfig
from tests.helpers.clock import FakeClock

# --------------------------------------------------------------------------- #
# Application layer
# --------------------------------------------------------------------------- #


@pytest.fixture()
def app():
    """Create a Flask application with the schema created in its database."""
    application = create_app(TestConfig)
    with application.app_context():
        _db.create_all()
        yield application
        _db.session.remove()
        _db.drop_all()


@pytest.fixture()
def client(app):
    """Return a Flask test client."""
    return app.test_client()


@pytest.fixture()
def session(app):
    """Expose the Flask-scoped SQLAlchemy session."""
    return _db.session


@pytest.fixture()
def components(app):
    """Auth components wired by the app factory."""
    return get_components()


@pytest.fixture(autouse=True)
def _factories_session(request):
    """Wire Factory Boy's session helper when a test uses the database."""
    if "session" not in request.fixturenames:
        yield
        return
    from tests.factories import SQLAlchemySession

    SQLAlchemySession.set(request.getfixturevalue("session"))
    yield
    SQLAlchemySession.set(None)


# --------------------------------------------------------------------------- #
# Framework-free token core
# --------------------------------------------------------------------------- #


@pytest.fixture()
def clock() -> FakeClock:
    """A clock pinned to a fixed instant."""
    return FakeClock()


@pytest.fixture()
def settings() -> InMemorySettingsStore:
    """Settings store holding the shared secret."""
    return InMemorySettingsStore(SECRET)


@pytest.fixture()
def codec(settings, clock) -> TokenCodec:
    return TokenCodec(settings, issuer="authgate", clock=clock)


@pytest.fixture()
def code_store(clock) -> InMemoryAuthorizationCodeStore:
    return InMemoryAuthorizationCodeStore(clock=clock)


@pytest.fixture()
def directory(code_store) -> InMemoryUserDirectory:
    """Directory knowing user 42 only."""
    directory = InMemoryUserDirectory(code_store=code_store, code_ttl=60)
    directory.add(42, "Ada")
    return directory


@pytest.fixture()
def user_42(directory) -> UserIdentity:
    return directory.get_user(42)


@pytest.fixture()
def tokens(codec, directory, clock) -> TokenService:
    """TokenService wired to in-memory doubles and the fake clock."""
    return TokenService(codec=codec, directory=directory, clock=clock)


@pytest.fixture()
def fake_redis():
    """Provide a fresh FakeRedis instance for each test."""
    r = fakeredis.FakeRedis()
    r.flushall()
    return r
