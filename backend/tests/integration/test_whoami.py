"""Integration tests for bearer authentication on ``/whoami``."""

from __future__ import annotations

import pytest

from tests.factories.user import UserFactory
from tests.helpers.assertions import assert_problem
from tests.helpers.headers import bearer, secret_header

WHOAMI_URL = "/auth/v1/whoami"


@pytest.fixture()
def user(session):
    return UserFactory(login="grace", display_name="Grace")


def test_bearer_token_resolves_user(client, components, user):
    """An access token in the Authorization header identifies the caller."""

    token = components.tokens.issue_access_token(components.directory.get_user(user.id)).token

    resp = client.get(WHOAMI_URL, headers=bearer(token))

    assert resp.status_code == 200
    assert resp.get_json() == {"id": user.id, "displayName": "Grace"}


def test_tokens_from_exchange_authenticate(app, client, components, user):
    code = components.directory.issue_authorization_code(user.id)
    pair = client.post(
        "/auth/v1/authorize", json={"code": code}, headers=secret_header(app)
    ).get_json()

    resp = client.get(WHOAMI_URL, headers=bearer(pair["accessToken"]))

    assert resp.get_json()["id"] == user.id


@pytest.mark.parametrize(
    "headers",
    [{}, {"Authorization": "Malformed"}, {"Authorization": "Bearer not.a.token"}],
)
def test_anonymous_requests_are_rejected(client, headers):
    resp = client.get(WHOAMI_URL, headers=headers)

    assert_problem(resp, 401, "unauthorized")


def test_refresh_token_is_not_a_bearer_credential(client, components, user):
    refresh = components.tokens.issue_refresh_token(components.directory.get_user(user.id))

    resp = client.get(WHOAMI_URL, headers=bearer(refresh.token))

    assert_problem(resp, 401, "unauthorized")


def test_identity_does_not_leak_between_requests(client, components, user):
    token = components.tokens.issue_access_token(components.directory.get_user(user.id)).token

    assert client.get(WHOAMI_URL, headers=bearer(token)).status_code == 200
    assert client.get(WHOAMI_URL).status_code == 401


def test_rotation_revokes_access_tokens(client, components, user):
    token = components.tokens.issue_access_token(components.directory.get_user(user.id)).token

    components.settings.set_secret_key("rotated-secret-0123456789abcdef0123")

    assert_problem(client.get(WHOAMI_URL, headers=bearer(token)), 401, "unauthorized")
