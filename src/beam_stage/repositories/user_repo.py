"""Data access helpers for reading user accounts."""
from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from beam_stage.models import User

__all__ = ["UserRepository"]


class UserRepository:
    """Read-only access to accounts managed by the auth provider."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def search_by_name(self, query: str, limit: int) -> list[User]:
        """Return users whose name contains ``query``, alphabetically."""
        escaped = query.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
        stmt = (
            select(User)
            .where(User.name.ilike(f"%{escaped}%", escape="\\"))
            .order_by(User.name, User.id)
            .limit(limit)
        )
        return list(self.session.execute(stmt).scalars())
