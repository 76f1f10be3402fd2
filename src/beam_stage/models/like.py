# src/beam_stage/models/like.py
"""Model capturing which users liked which posts."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from beam_stage.db.session import Base, utcnow

if TYPE_CHECKING:
    from .post import Post
    from .user import User


class LikedPost(Base):
    """Per-user like on a post."""

    __tablename__ = "liked_posts"
    __table_args__ = (Index("ix_liked_posts_user_id", "user_id"),)

    # Composite primary key prevents duplicate likes from the same user.
    post_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("post.id", ondelete="CASCADE"),
        primary_key=True,
    )
    user_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("user.id"),
        primary_key=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    post: Mapped[Post] = relationship("Post", back_populates="liked_by")
    user: Mapped[User] = relationship("User")
