"""Unit tests for the SQL-backed authorization-code and settings stores."""

from __future__ import annotations

import pytest
from authgate.infra.sql import SQLAuthorizationCodeStore, SQLSettingsStore
from authgate.models import AuthorizationCode
from sqlalchemy import func, select

from tests.factories.user import UserFactory


def _pending_codes(session) -> int:
    return session.execute(select(func.count()).select_from(AuthorizationCode)).scalar_one()


class TestSQLAuthorizationCodeStore:
    """Codes shared through the ``authorization_codes`` table."""

    @pytest.fixture()
    def store(self, session, clock):
        return SQLAuthorizationCodeStore(session_factory=lambda: session, clock=clock)

    @pytest.fixture()
    def user(self, session):
        return UserFactory()

    def test_issue_and_consume_once(self, store, user):
        code = store.issue(user.id, ttl=60)

        assert store.consume(code) == user.id
        assert store.consume(code) is None

    def test_unknown_code(self, store):
        assert store.consume("missing") is None

    def test_code_expires_at_ttl(self, store, user, clock):
        code = store.issue(user.id, ttl=60)
        clock.advance(60)

        assert store.consume(code) is None

    def test_expired_code_is_still_burnt(self, store, user, clock, session):
        code = store.issue(user.id, ttl=60)
        clock.advance(61)
        store.consume(code)

        assert _pending_codes(session) == 0

    def test_issue_prunes_expired_codes(self, store, user, clock, session):
        store.issue(user.id, ttl=60)
        store.issue(user.id, ttl=60)
        clock.advance(60)

        fresh = store.issue(user.id, ttl=60)

        assert _pending_codes(session) == 1
        assert store.consume(fresh) == user.id

    def test_code_visible_to_another_store_instance(self, store, user, session, clock):
        """A second process bound to the same database redeems the code."""
        code = store.issue(user.id, ttl=60)
        other = SQLAuthorizationCodeStore(session_factory=lambda: session, clock=clock)

        assert other.consume(code) == user.id
        assert store.consume(code) is None


class TestSQLSettingsStore:
    """Shared secret kept in the ``settings`` table."""

    @pytest.fixture()
    def store(self, session):
        return SQLSettingsStore(session_factory=lambda: session, default="from-config")

    def test_configured_default_until_stored(self, store):
        assert store.get_secret_key() == "from-config"

    def test_no_default_means_no_secret(self, session):
        assert SQLSettingsStore(session_factory=lambda: session).get_secret_key() is None

    def test_stored_secret_wins_over_default(self, store, session):
        store.set_secret_key("rotated")

        restarted = SQLSettingsStore(session_factory=lambda: session, default="from-config")
        assert restarted.get_secret_key() == "rotated"

    def test_second_rotation_updates_the_row(self, store):
        store.set_secret_key("first")
        store.set_secret_key("second")

        assert store.get_secret_key() == "second"

    def test_blank_secret_disables_exchange(self, store):
        store.set_secret_key("rotated")
        store.set_secret_key("")

        assert store.get_secret_key() is None
