from __future__ import annotations

from typing import Protocol

from authgate.services._shared.dto import UserIdentity
from authgate.services._shared.ports.authorization_code_store import (
    AuthorizationCodeStore,
)


class UserDirectory(Protocol):
    """
    Port onto the host's user directory.

    Resolves identities by numeric id and by one-time authorization code.
    """

    def get_user(self, user_id: int) -> UserIdentity | None:
        """Return the active user with ``user_id`` or ``None``."""

    def resolve_and_consume(self, code: str) -> UserIdentity | None:
        """Resolve the user bound to ``code`` and invalidate the code."""

    def issue_authorization_code(self, user_id: int) -> str:
        """Create a one-time code for ``user_id``."""


class InMemoryUserDirectory(UserDirectory):
    """Deterministic directory used in unit tests and local runs."""

    def __init__(
        self,
        *,
        code_store: AuthorizationCodeStore,
        users: dict[int, UserIdentity] | None = None,
        code_ttl: int = 60,
    ) -> None:
        self.code_store = code_store
        self.code_ttl = code_ttl
        self._users: dict[int, UserIdentity] = dict(users or {})

    def add(self, user_id: int, display_name: str | None = None) -> UserIdentity:
        identity = UserIdentity(user_id=int(user_id), display_name=display_name)
        self._users[identity.user_id] = identity
        return identity

    def remove(self, user_id: int) -> None:
        self._users.pop(int(user_id), None)

    def get_user(self, user_id: int) -> UserIdentity | None:
        return self._users.get(int(user_id))

    def resolve_and_consume(self, code: str) -> UserIdentity | None:
        user_id = self.code_store.consume(code)
        if user_id is None:
            return None
        return self.get_user(user_id)

    def issue_authorization_code(self, user_id: int) -> str:
        return self.code_store.issue(int(user_id), ttl=self.code_ttl)
