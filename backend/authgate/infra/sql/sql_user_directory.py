# comments in English; reST docstrings
from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from sqlalchemy.orm import Session

from authgate.models.user import User
from authgate.repositories.user import UserRepository
from authgate.services._shared.dto import UserIdentity
from authgate.services._shared.ports import AuthorizationCodeStore, UserDirectory


def _to_identity(user: User) -> UserIdentity:
    return UserIdentity(user_id=user.id, display_name=user.display_name or user.login)


@dataclass(slots=True)
class SQLUserDirectory(UserDirectory):
    """
    User directory over the ``users`` table plus an authorization-code store.

    :param session_factory: Returns the session to query (the Flask-scoped one).
    :param code_store: One-time code store; owns consume-once atomicity.
    :param code_ttl: Lifetime of newly issued codes, in seconds.
    """

    session_factory: Callable[[], Session]
    code_store: AuthorizationCodeStore
    code_ttl: int = 60

    def _users(self) -> UserRepository:
        return UserRepository(session=self.session_factory())

    def get_user(self, user_id: int) -> UserIdentity | None:
        user = self._users().get_active(int(user_id))
        return _to_identity(user) if user is not None else None

    def resolve_and_consume(self, code: str) -> UserIdentity | None:
        # Consume first: a code is burnt even if its user has since gone away.
        user_id = self.code_store.consume(code)
        if user_id is None:
            return None
        return self.get_user(user_id)

    def issue_authorization_code(self, user_id: int) -> str:
        """
        Issue a one-time code for an active user.

        :raises LookupError: When the user is missing or inactive.
        """
        if self.get_user(user_id) is None:
            raise LookupError(f"User {user_id} not found or inactive.")
        return self.code_store.issue(int(user_id), ttl=self.code_ttl)
