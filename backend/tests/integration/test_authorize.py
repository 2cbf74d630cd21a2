"""Integration tests for the token exchange endpoint."""

from __future__ import annotations

import time

import pytest

from tests.factories.user import UserFactory
from tests.helpers.assertions import assert_json_keys, assert_problem
from tests.helpers.headers import secret_header

AUTHORIZE_URL = "/auth/v1/authorize"
TOKEN_KEYS = {"accessToken", "accessTokenExpiration", "refreshToken", "refreshTokenExpiration"}


@pytest.fixture()
def user(session):
    """Persisted, active directory user."""
    return UserFactory(login="ada", display_name="Ada")


@pytest.fixture()
def code(components, user) -> str:
    return components.directory.issue_authorization_code(user.id)


def test_code_exchange_returns_token_pair(app, client, components, user, code):
    """A valid code yields both tokens with absolute expirations."""

    before = int(time.time())
    resp = client.post(AUTHORIZE_URL, json={"code": code}, headers=secret_header(app))
    after = int(time.time())

    assert resp.status_code == 200
    data = resp.get_json()
    assert set(data) == TOKEN_KEYS
    assert before + 300 <= data["accessTokenExpiration"] <= after + 300
    assert before + 1_209_600 <= data["refreshTokenExpiration"] <= after + 1_209_600
    assert components.tokens.resolve_user_from_access_token(data["accessToken"]).user_id == user.id
    assert resp.headers["Cache-Control"] == "no-store"


def test_code_accepted_as_form_field(app, client, code):
    resp = client.post(AUTHORIZE_URL, data={"code": code}, headers=secret_header(app))

    assert resp.status_code == 200


def test_code_accepted_in_query_string(app, client, code):
    resp = client.post(f"{AUTHORIZE_URL}?code={code}", headers=secret_header(app))

    assert resp.status_code == 200


def test_code_works_only_once(app, client, code):
    first = client.post(AUTHORIZE_URL, json={"code": code}, headers=secret_header(app))
    second = client.post(AUTHORIZE_URL, json={"code": code}, headers=secret_header(app))

    assert first.status_code == 200
    body = assert_problem(second, 400, "invalid_request")
    assert body["detail"] == "Invalid authorization code or refresh token."


@pytest.mark.parametrize("payload", [{}, {"code": "", "refreshToken": ""}, {"code": "  "}])
def test_missing_grant(app, client, payload):
    resp = client.post(AUTHORIZE_URL, json=payload, headers=secret_header(app))

    body = assert_problem(resp, 400, "invalid_request")
    assert body["detail"] == "Missing authorization code or refresh token."
    assert "accessToken" not in body


def test_refresh_exchange_is_repeatable(app, client, components, user):
    """The same refresh token keeps working until it expires."""

    refresh = components.tokens.issue_refresh_token(components.directory.get_user(user.id))

    for _ in range(2):
        resp = client.post(
            AUTHORIZE_URL, json={"refreshToken": refresh.token}, headers=secret_header(app)
        )
        assert resp.status_code == 200
        assert_json_keys(resp.get_json(), TOKEN_KEYS)


def test_expired_refresh_token(app, client, components, user):
    expired = components.codec.sign(
        {"sub": str(user.id), "type": "refresh"}, int(time.time()) - 1
    )

    resp = client.post(AUTHORIZE_URL, json={"refreshToken": expired}, headers=secret_header(app))

    assert_problem(resp, 400, "invalid_request")


def test_access_token_is_not_a_refresh_token(app, client, components, user):
    access = components.tokens.issue_access_token(components.directory.get_user(user.id))

    resp = client.post(
        AUTHORIZE_URL, json={"refreshToken": access.token}, headers=secret_header(app)
    )

    assert_problem(resp, 400, "invalid_request")


def test_refresh_for_deactivated_user(app, client, components, user, session):
    refresh = components.tokens.issue_refresh_token(components.directory.get_user(user.id))
    user.is_active = False
    session.flush()

    resp = client.post(
        AUTHORIZE_URL, json={"refreshToken": refresh.token}, headers=secret_header(app)
    )

    assert_problem(resp, 400, "invalid_request")


@pytest.mark.parametrize("headers", [{}, {"X-Shared-Secret": "wrong"}, {"X-Shared-Secret": ""}])
def test_secret_required(client, code, headers):
    """Without the shared secret the grant is never looked at."""

    resp = client.post(AUTHORIZE_URL, json={"code": code}, headers=headers)

    body = assert_problem(resp, 401, "unauthorized")
    assert body["detail"] == "Sorry, you are not allowed to do that."


def test_denied_request_does_not_burn_code(app, client, code):
    client.post(AUTHORIZE_URL, json={"code": code}, headers={"X-Shared-Secret": "wrong"})

    resp = client.post(AUTHORIZE_URL, json={"code": code}, headers=secret_header(app))

    assert resp.status_code == 200


def test_get_is_not_allowed(app, client):
    resp = client.get(AUTHORIZE_URL, headers=secret_header(app))

    assert_problem(resp, 405, "method_not_allowed")
