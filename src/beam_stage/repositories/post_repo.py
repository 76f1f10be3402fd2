"""Data access helpers for working with posts."""
from __future__ import annotations

from sqlalchemy import ColumnElement, delete, func, insert, or_, select
from sqlalchemy.orm import Session, selectinload

from beam_stage.models import Comment, LikedPost, Post

__all__ = ["PostRepository"]


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class PostRepository:
    """Thin wrapper around database access for post entities."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    @staticmethod
    def _feed_filters(author_id: str | None, include_hidden: bool) -> list[ColumnElement[bool]]:
        filters: list[ColumnElement[bool]] = []
        if not include_hidden:
            filters.append(Post.hidden.is_(False))
        if author_id is not None:
            filters.append(Post.author_id == author_id)
        return filters

    def list_feed(
        self,
        *,
        take: int,
        skip: int,
        author_id: str | None,
        include_hidden: bool,
    ) -> list[tuple[Post, int]]:
        """Return a page of posts, newest first, each with its comment count.

        Args:
            take: Maximum number of posts in the page.
            skip: Number of posts to skip before the page starts.
            author_id: Restrict to posts by this author when given.
            include_hidden: Include moderated posts (admin view).
        """
        comment_count = (
            select(func.count(Comment.id))
            .where(Comment.post_id == Post.id)
            .correlate(Post)
            .scalar_subquery()
        )
        stmt = (
            select(Post, comment_count.label("comment_count"))
            .options(
                selectinload(Post.author),
                selectinload(Post.liked_by).selectinload(LikedPost.user),
            )
            .where(*self._feed_filters(author_id, include_hidden))
            .order_by(Post.created_at.desc(), Post.id.desc())
            .offset(skip)
            .limit(take)
        )
        return [(row[0], int(row[1])) for row in self.session.execute(stmt).all()]

    def count_feed(self, *, author_id: str | None, include_hidden: bool) -> int:
        """Count posts matching the feed filter, ignoring pagination."""
        stmt = select(func.count(Post.id)).where(*self._feed_filters(author_id, include_hidden))
        return int(self.session.execute(stmt).scalar_one())

    def get_detail(self, post_id: int) -> Post | None:
        """Return a post with author, likers and comments eagerly loaded."""
        stmt = (
            select(Post)
            .options(
                selectinload(Post.author),
                selectinload(Post.liked_by).selectinload(LikedPost.user),
                selectinload(Post.comments).selectinload(Comment.author),
            )
            .where(Post.id == post_id)
        )
        return self.session.execute(stmt).scalars().first()

    def get_by_id(self, post_id: int) -> Post | None:
        """Return a post by identifier."""
        return self.session.get(Post, post_id)

    def get_author_id(self, post_id: int) -> str | None:
        """Return only the author reference of a post, or None if it is missing."""
        stmt = select(Post.author_id).where(Post.id == post_id)
        return self.session.execute(stmt).scalar_one_or_none()

    def search_visible(self, query: str, limit: int) -> list[Post]:
        """Return non-hidden posts whose title or content matches ``query``.

        PostgreSQL uses its full-text search; other dialects fall back to a
        case-insensitive substring match.
        """
        match: ColumnElement[bool]
        if self.session.get_bind().dialect.name == "postgresql":
            tsquery = func.plainto_tsquery("english", query)
            match = or_(
                func.to_tsvector("english", Post.title).op("@@")(tsquery),
                func.to_tsvector("english", Post.content).op("@@")(tsquery),
            )
        else:
            pattern = f"%{_escape_like(query)}%"
            match = or_(
                Post.title.ilike(pattern, escape="\\"),
                Post.content.ilike(pattern, escape="\\"),
            )
        stmt = (
            select(Post)
            .where(Post.hidden.is_(False), match)
            .order_by(Post.created_at.desc(), Post.id.desc())
            .limit(limit)
        )
        return list(self.session.execute(stmt).scalars())

    def create(
        self,
        *,
        title: str,
        content: str,
        content_html: str,
        author_id: str,
    ) -> Post:
        """Insert a new post and return the persisted ORM instance."""
        post = Post(
            title=title,
            content=content,
            content_html=content_html,
            author_id=author_id,
        )
        self.session.add(post)
        self.session.flush()
        return post

    def update_content(
        self,
        post_id: int,
        *,
        title: str,
        content: str,
        content_html: str,
    ) -> Post | None:
        """Overwrite the title, markdown and rendered HTML of a post."""
        post = self.get_by_id(post_id)
        if post is None:
            return None
        post.title = title
        post.content = content
        post.content_html = content_html
        self.session.flush()
        return post

    def delete(self, post_id: int) -> int:
        """Delete a post; comments and likes are removed by the store's cascade."""
        result = self.session.execute(delete(Post).where(Post.id == post_id))
        return result.rowcount

    def set_hidden(self, post_id: int, hidden: bool) -> Post | None:
        """Flip the moderation flag of a post."""
        post = self.get_by_id(post_id)
        if post is None:
            return None
        post.hidden = hidden
        self.session.flush()
        return post

    def add_like(self, post_id: int, user_id: str) -> None:
        """Insert a like; the composite key rejects duplicates."""
        self.session.execute(insert(LikedPost).values(post_id=post_id, user_id=user_id))

    def remove_like(self, post_id: int, user_id: str) -> int:
        """Delete a like and return the number of removed rows."""
        result = self.session.execute(
            delete(LikedPost).where(
                LikedPost.post_id == post_id,
                LikedPost.user_id == user_id,
            )
        )
        return result.rowcount
