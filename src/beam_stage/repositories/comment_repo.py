"""Data access helpers for working with comments."""
from __future__ import annotations

from sqlalchemy import delete, select
from sqlalchemy.orm import Session, selectinload

from beam_stage.models import Comment

__all__ = ["CommentRepository"]


class CommentRepository:
    """Thin wrapper around database access for comment entities."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def get_with_author(self, comment_id: int) -> Comment | None:
        """Return a comment with its author loaded."""
        stmt = (
            select(Comment)
            .options(selectinload(Comment.author))
            .where(Comment.id == comment_id)
        )
        return self.session.execute(stmt).scalars().first()

    def get_author_id(self, comment_id: int) -> str | None:
        """Return only the author reference of a comment."""
        stmt = select(Comment.author_id).where(Comment.id == comment_id)
        return self.session.execute(stmt).scalar_one_or_none()

    def create(
        self,
        *,
        post_id: int,
        content: str,
        content_html: str,
        author_id: str,
    ) -> Comment:
        """Insert a new comment and return the persisted ORM instance."""
        comment = Comment(
            post_id=post_id,
            content=content,
            content_html=content_html,
            author_id=author_id,
        )
        self.session.add(comment)
        self.session.flush()
        return comment

    def update_content(self, comment_id: int, *, content: str, content_html: str) -> Comment | None:
        """Overwrite the markdown and rendered HTML of a comment."""
        comment = self.session.get(Comment, comment_id)
        if comment is None:
            return None
        comment.content = content
        comment.content_html = content_html
        self.session.flush()
        return comment

    def delete(self, comment_id: int) -> int:
        """Delete a comment and return the number of removed rows."""
        result = self.session.execute(delete(Comment).where(Comment.id == comment_id))
        return result.rowcount
