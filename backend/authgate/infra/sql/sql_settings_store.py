from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from authgate.models.setting import Setting
from authgate.services._shared.ports import SettingsStore

SECRET_KEY_SETTING = "secret_key"


@dataclass(slots=True)
class SQLSettingsStore(SettingsStore):
    """
    Shared secret kept in the ``settings`` table.

    Until a row exists (first ``rotate-secret``) the configured ``default``
    is served, so a restart with a stale ``SHARED_SECRET`` never undoes a
    rotation. A stored blank value disables the secret.

    :param session_factory: Returns the session to use (the Flask-scoped one).
    :param default: Secret from configuration, used while no row is stored.
    """

    session_factory: Callable[[], Session]
    default: str | None = None

    def get_secret_key(self) -> str | None:
        # Always read from the database; another process may have rotated it
        row = (
            self.session_factory()
            .execute(select(Setting.value).where(Setting.key == SECRET_KEY_SETTING))
            .first()
        )
        if row is None:
            return self.default or None
        return row.value or None

    def set_secret_key(self, value: str) -> None:
        session = self.session_factory()
        try:
            setting = session.get(Setting, SECRET_KEY_SETTING)
            if setting is None:
                session.add(Setting(key=SECRET_KEY_SETTING, value=value or None))
            else:
                setting.value = value or None
            session.commit()
        except SQLAlchemyError:
            session.rollback()
            raise
