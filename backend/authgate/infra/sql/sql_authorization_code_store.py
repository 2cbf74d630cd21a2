# comments in English; reST docstrings
from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from authgate.models.authorization_code import AuthorizationCode
from authgate.services._shared.dto import Clock, system_clock
from authgate.services._shared.ports import AuthorizationCodeStore, new_authorization_code


@dataclass(slots=True)
class SQLAuthorizationCodeStore(AuthorizationCodeStore):
    """
    Authorization codes in the ``authorization_codes`` table.

    Every process bound to the same database sees the same codes, so a code
    printed by ``flask auth issue-code`` is redeemable on any server worker.
    ``consume`` reads the row and then deletes it by primary key; only the
    caller whose ``DELETE`` removed the row (``rowcount == 1``) gets the user,
    so two concurrent redemptions cannot both succeed.

    Unlike :class:`~authgate.repositories.user.UserRepository`, this store
    commits: issuing or burning a code is its own unit of work.

    :param session_factory: Returns the session to use (the Flask-scoped one).
    :param clock: Unix-time source compared against ``expires_at``.
    """

    session_factory: Callable[[], Session]
    clock: Clock = system_clock

    def issue(self, user_id: int, *, ttl: int) -> str:
        session = self.session_factory()
        now = self.clock()
        code = new_authorization_code()
        try:
            # Unredeemed codes are only ever dropped here
            session.execute(
                delete(AuthorizationCode).where(AuthorizationCode.expires_at <= now),
                execution_options={"synchronize_session": False},
            )
            session.add(AuthorizationCode(code=code, user_id=int(user_id), expires_at=now + ttl))
            session.commit()
        except SQLAlchemyError:
            session.rollback()
            raise
        return code

    def consume(self, code: str) -> int | None:
        session = self.session_factory()
        try:
            row = session.execute(
                select(AuthorizationCode.user_id, AuthorizationCode.expires_at).where(
                    AuthorizationCode.code == code
                )
            ).first()
            if row is None:
                return None
            deleted = session.execute(
                delete(AuthorizationCode).where(AuthorizationCode.code == code),
                execution_options={"synchronize_session": False},
            ).rowcount
            session.commit()
        except SQLAlchemyError:
            session.rollback()
            raise

        if deleted != 1 or row.expires_at <= self.clock():
            return None
        return int(row.user_id)
