# src/beam_stage/models/post.py
"""SQLAlchemy models for posts and related attributes."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from beam_stage.db.session import Base, utcnow

if TYPE_CHECKING:
    from .comment import Comment
    from .like import LikedPost
    from .user import User


class Post(Base):
    """Primary content entity produced by users.

    ``content_html`` is always derived from ``content`` by the renderer at
    write time and is never set on its own.
    """

    __tablename__ = "post"
    __table_args__ = (
        Index("ix_post_author_id", "author_id"),
        Index("ix_post_created_at", "created_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    content_html: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
    # Moderation flag; hidden posts are visible to their author and admins only.
    hidden: Mapped[bool] = mapped_column(default=False, nullable=False)
    author_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("user.id"),
        nullable=False,
    )

    author: Mapped[User] = relationship("User")
    comments: Mapped[list[Comment]] = relationship(
        "Comment",
        back_populates="post",
        order_by="Comment.created_at",
        passive_deletes=True,
    )
    liked_by: Mapped[list[LikedPost]] = relationship(
        "LikedPost",
        back_populates="post",
        order_by="LikedPost.created_at",
        passive_deletes=True,
    )
