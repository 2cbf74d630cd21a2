"""User repository for directory lookups."""

from __future__ import annotations

from typing import cast

from sqlalchemy import select
from sqlalchemy.orm import Session

from authgate.models.user import User


class UserRepository:
    """Persistence-only repository for :class:`User`.

    It NEVER handles tokens or codes, only DB-level user lookup and creation.
    No commit/rollback here: callers own the transaction.
    """

    def __init__(self, *, session: Session) -> None:
        self.session = session

    def get(self, user_id: int) -> User | None:
        """Fetch a user by primary key, active or not."""
        return self.session.get(User, user_id)

    def get_active(self, user_id: int) -> User | None:
        """Fetch a user by primary key only when it is active.

        :param user_id: Identifier of the user.
        :type user_id: int
        :returns: User instance or ``None`` when missing or deactivated.
        :rtype: User | None
        """
        stmt = select(User).where(User.id == user_id, User.is_active.is_(True))
        return cast(User | None, self.session.execute(stmt).scalars().first())

    def get_by_login(self, login: str) -> User | None:
        stmt = select(User).where(User.login == login.strip())
        return cast(User | None, self.session.execute(stmt).scalars().first())

    def add(self, user: User) -> User:
        """Stage ``user`` and flush so its id is assigned."""
        self.session.add(user)
        self.session.flush()
        return user
