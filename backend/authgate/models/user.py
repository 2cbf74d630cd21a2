"""User model backing the SQL user directory."""

from __future__ import annotations

from sqlalchemy import Boolean, Integer, String, UniqueConstraint, true
from sqlalchemy.orm import Mapped, mapped_column, validates

from authgate.core.extensions import db

from .base import TimestampMixin


class User(TimestampMixin, db.Model):
    """
    Directory entry a token can be issued for.

    Fields
    ------
    login : str
        Unique handle. Stored trimmed.
    email : str | None
        Optional contact address, stored normalized (lowercase, trimmed).
    display_name : str | None
        Human-readable name embedded in access tokens.
    is_active : bool
        Inactive users never resolve, so their tokens stop working on refresh.
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    login: Mapped[str] = mapped_column(String(60), nullable=False)
    email: Mapped[str | None] = mapped_column(String(254), nullable=True)
    display_name: Mapped[str | None] = mapped_column(String(250), nullable=True)
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=true()
    )

    __table_args__ = (
        UniqueConstraint("login", name="uq_users_login"),
        UniqueConstraint("email", name="uq_users_email"),
    )

    def __repr__(self) -> str:
        return f"<User id={self.id} login={self.login!r}>"

    @validates("login")
    def _normalize_login(self, key: str, value: str) -> str:
        """
        Trim and require a login.

        :raises ValueError: If the login is missing or only whitespace.
        """
        if not isinstance(value, str) or not value.strip():
            raise ValueError("Login is required.")
        return value.strip()

    @validates("email")
    def _normalize_email(self, key: str, value: str | None) -> str | None:
        if value is None:
            return None
        v = value.strip().lower()
        if not v:
            return None
        # Minimal sanity check; full validation happens at the CLI layer.
        if "@" not in v or "." not in v.split("@")[-1]:
            raise ValueError("Email format looks invalid.")
        return v
