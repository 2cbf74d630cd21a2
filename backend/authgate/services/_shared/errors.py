"""
Domain-level exceptions used within the service layer.

These exceptions are **framework-agnostic** and should never import or depend
on Flask or HTTP directly. They serve as stable contracts between the token
layer, the user directory and the application services.

The translation to HTTP responses (RFC 7807) is handled by
``authgate/core/errors.py`` via ``BaseService.translate_exceptions()``.
"""

from __future__ import annotations

from dataclasses import dataclass

# --------------------------------------------------------------------------- #
# Base types
# --------------------------------------------------------------------------- #


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    Notes
    -----
    - These are *not* HTTP errors.
    - The API layer or BaseService will later translate them to APIError.
    """


class TokenError(ServiceError):
    """Base class for every reason a token fails verification."""


# --------------------------------------------------------------------------- #
# Token verification failures
# --------------------------------------------------------------------------- #


class MalformedTokenError(TokenError):
    """The token cannot be split into a decodable payload and signature."""


class InvalidSignatureError(TokenError):
    """The signature does not match the payload under the current secret."""


class ExpiredTokenError(TokenError):
    """The token's expiration timestamp has been reached."""


@dataclass(slots=True)
class WrongTokenKindError(TokenError):
    """
    Raised when a well-formed token of one kind is offered as another.

    :param expected: Token kind required by the caller.
    :type expected: str
    :param actual: Token kind found in the claims (may be ``None``).
    :type actual: str | None
    """

    expected: str
    actual: str | None

    def __str__(self) -> str:  # pragma: no cover
        return f"Expected {self.expected} token, got {self.actual!r}"


# --------------------------------------------------------------------------- #
# Grant / directory failures
# --------------------------------------------------------------------------- #


class InvalidGrantError(ServiceError):
    """Raised when an authorization grant is missing or resolves to no user."""


@dataclass(slots=True)
class UserNotFoundError(ServiceError):
    """
    Raised when a token references a user the directory no longer knows.

    :param user_id: Identifier carried by the token.
    :type user_id: int | str
    """

    user_id: int | str

    def __str__(self) -> str:  # pragma: no cover
        return f"User not found: {self.user_id}"
