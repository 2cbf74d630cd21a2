"""One-time authorization codes shared by every process on the database."""

from __future__ import annotations

from sqlalchemy import Float, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from authgate.core.extensions import db


class AuthorizationCode(db.Model):
    """
    Pending code bound to a directory user.

    Rows are deleted when redeemed; ``expires_at`` is a unix timestamp so it
    compares directly against the injected clock.
    """

    __tablename__ = "authorization_codes"

    code: Mapped[str] = mapped_column(String(64), primary_key=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    expires_at: Mapped[float] = mapped_column(Float, nullable=False, index=True)

    def __repr__(self) -> str:
        return f"<AuthorizationCode user_id={self.user_id} expires_at={self.expires_at}>"
