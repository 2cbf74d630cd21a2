"""Assertion helper utilities for tests."""

from __future__ import annotations


def assert_json_keys(data: dict, required: set[str]) -> None:
    """Ensure that all required keys are present in ``data``.

    Parameters
    ----------
    data:
        JSON object under test.
    required:
        Set of required keys that must exist in ``data``.
    """

    missing = required - data.keys()
    assert not missing, f"Missing keys: {', '.join(sorted(missing))}"


def assert_problem(response, status: int, code: str) -> dict:
    """Validate an RFC 7807 error response and return its body.

    Parameters
    ----------
    response:
        Flask test response.
    status:
        Expected HTTP status.
    code:
        Expected machine-readable ``code`` member.
    """

    assert response.status_code == status
    assert response.mimetype == "application/problem+json"
    body = response.get_json()
    assert_json_keys(body, {"type", "title", "status", "detail", "code", "request_id"})
    assert body["status"] == status
    assert body["code"] == code
    return body
