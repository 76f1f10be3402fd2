# src/beam_stage/models/user.py
"""SQLAlchemy model for user accounts owned by the auth provider."""

from __future__ import annotations

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from beam_stage.db.session import Base

ROLE_USER = "USER"
ROLE_ADMIN = "ADMIN"


class User(Base):
    """Account record mirrored from the authentication provider.

    Rows are written by the sign-in flow; this service only reads them.
    """

    __tablename__ = "user"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str | None] = mapped_column(Text, nullable=True)
    email: Mapped[str | None] = mapped_column(Text, nullable=True, unique=True)
    image: Mapped[str | None] = mapped_column(Text, nullable=True)
    role: Mapped[str] = mapped_column(String(16), nullable=False, default=ROLE_USER)

    @property
    def is_admin(self) -> bool:
        """Return True for administrators allowed to moderate content."""
        return self.role == ROLE_ADMIN
