"""Integration tests for health, CORS and generic error handling."""

from __future__ import annotations

import pytest
from authgate.core.errors import status_code_name
from marshmallow import ValidationError

from tests.helpers.assertions import assert_problem
from tests.helpers.headers import secret_header


def test_health_endpoint(client):
    """Health check reports each dependency."""

    resp = client.get("/auth/v1/health")

    assert resp.status_code == 200
    assert resp.get_json() == {
        "status": "ok",
        "db": "ok",
        "redis": "disabled",
        "shared_secret": "configured",
        "version": "dev",
    }


def test_health_reports_missing_secret(client, components):
    components.settings.set_secret_key("")

    assert client.get("/auth/v1/health").get_json()["shared_secret"] == "missing"


def test_unknown_route_is_problem_json(client):
    body = assert_problem(client.get("/auth/v1/nope"), 404, "not_found")

    assert body["detail"] == "Route '/auth/v1/nope' not found"
    assert body["instance"] == "/auth/v1/nope"


def test_cors_preflight_allows_secret_header(client):
    resp = client.options(
        "/auth/v1/authorize",
        headers={
            "Origin": "http://localhost:3000",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "X-Shared-Secret",
        },
    )

    assert resp.headers["Access-Control-Allow-Origin"] == "http://localhost:3000"
    assert "x-shared-secret" in resp.headers["Access-Control-Allow-Headers"].lower()


@pytest.mark.parametrize("payload", [{"code": 123}, {"refreshToken": ["a", "b"]}])
def test_non_string_grant_is_invalid_request(app, client, payload):
    resp = client.post("/auth/v1/authorize", json=payload, headers=secret_header(app))

    body = assert_problem(resp, 400, "invalid_request")
    assert body["detail"] == "Invalid authorization code or refresh token."


def test_schema_errors_outside_the_exchange_are_validation_errors(app, client):
    @app.get("/_schema_error")
    def _schema_error():
        raise ValidationError({"field": ["Not a valid string."]})

    body = assert_problem(client.get("/_schema_error"), 422, "validation_error")
    assert body["details"]["errors"] == {"field": ["Not a valid string."]}


def test_status_code_names():
    assert status_code_name(405) == "method_not_allowed"
    assert status_code_name(503) == "service_unavailable"
    assert status_code_name(599) == "error"
