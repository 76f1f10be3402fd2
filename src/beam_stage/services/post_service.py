"""Post lifecycle and access control.

Every operation runs on behalf of an authenticated ``Caller``. Ownership and
moderation rules live here; persistence goes through ``PostRepository`` and
markdown is rendered on every write so stored HTML never drifts from the
source.
"""
from __future__ import annotations

import logging
from collections.abc import Callable

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from beam_stage.core.settings import settings
from beam_stage.models import Post
from beam_stage.repositories.post_repo import PostRepository
from beam_stage.schemas.post import (
    FeedPost,
    FeedResponse,
    Liker,
    PostCreate,
    PostDetail,
    PostIdResponse,
    PostResponse,
    PostSearchResult,
    PostUpdate,
)
from beam_stage.schemas.user import Caller, UserSummary
from beam_stage.services.errors import ForbiddenError, NotFoundError, StoreConflictError
from beam_stage.services.markdown import render_markdown
from beam_stage.services.slack import NewPostNotice

logger = logging.getLogger(__name__)

NotifyCallback = Callable[[NewPostNotice], None]


def _to_feed_post(post: Post, comment_count: int) -> FeedPost:
    return FeedPost(
        id=post.id,
        title=post.title,
        content_html=post.content_html,
        created_at=post.created_at,
        hidden=post.hidden,
        author=UserSummary.model_validate(post.author),
        liked_by=[Liker.model_validate(like) for like in post.liked_by],
        comment_count=comment_count,
    )


class PostService:
    """Post operations performed on behalf of a single caller.

    Args:
        session: Database session for the current request.
        caller: Authenticated identity issuing the calls.
        notify: Scheduler for the new-post announcement. It is invoked after
            the post is committed and must not block on delivery.
    """

    def __init__(
        self,
        session: Session,
        caller: Caller,
        notify: NotifyCallback | None = None,
    ) -> None:
        self.session = session
        self.caller = caller
        self.repo = PostRepository(session)
        self._notify = notify

    def _ensure_author(self, post_id: int) -> None:
        # A missing post has no author, so it fails the same way as someone else's post.
        author_id = self.repo.get_author_id(post_id)
        if author_id != self.caller.id:
            raise ForbiddenError()

    def _ensure_admin(self) -> None:
        if not self.caller.is_admin:
            raise ForbiddenError()

    def feed(
        self,
        *,
        take: int | None = None,
        skip: int = 0,
        author_id: str | None = None,
    ) -> FeedResponse:
        """Return a page of the feed and the total number of matching posts.

        Hidden posts are only included for administrators.
        """
        page_size = min(take or settings.feed_page_size, settings.feed_page_size)
        include_hidden = self.caller.is_admin
        rows = self.repo.list_feed(
            take=page_size,
            skip=skip,
            author_id=author_id,
            include_hidden=include_hidden,
        )
        post_count = self.repo.count_feed(author_id=author_id, include_hidden=include_hidden)
        return FeedResponse(
            posts=[_to_feed_post(post, count) for post, count in rows],
            post_count=post_count,
        )

    def detail(self, post_id: int) -> PostDetail:
        """Return a post with its comments.

        Raises:
            NotFoundError: If the post does not exist, or is hidden and the
                caller is neither its author nor an administrator.
        """
        post = self.repo.get_detail(post_id)
        belongs_to_caller = post is not None and post.author_id == self.caller.id
        if post is None or (post.hidden and not belongs_to_caller and not self.caller.is_admin):
            raise NotFoundError(f"No post with id '{post_id}'")
        return PostDetail.model_validate(post)

    def search(self, query: str) -> list[PostSearchResult]:
        """Return up to the configured number of visible posts matching ``query``."""
        posts = self.repo.search_visible(query, settings.search_result_limit)
        return [PostSearchResult.model_validate(post) for post in posts]

    def add(self, data: PostCreate) -> PostResponse:
        """Create a post owned by the caller and schedule its announcement."""
        try:
            post = self.repo.create(
                title=data.title,
                content=data.content,
                content_html=render_markdown(data.content),
                author_id=self.caller.id,
            )
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            raise StoreConflictError(f"Unknown author '{self.caller.id}'") from exc

        self.session.refresh(post)
        logger.info("Post %s created by %s", post.id, self.caller.id)

        if self._notify is not None:
            self._notify(
                NewPostNotice(
                    post_id=post.id,
                    title=post.title,
                    content=post.content,
                    author_name=self.caller.name,
                )
            )
        return PostResponse.model_validate(post)

    def edit(self, post_id: int, data: PostUpdate) -> PostResponse:
        """Replace the title and content of the caller's post.

        Raises:
            ForbiddenError: If the caller is not the author, including when
                the post does not exist.
        """
        self._ensure_author(post_id)
        post = self.repo.update_content(
            post_id,
            title=data.title,
            content=data.content,
            content_html=render_markdown(data.content),
        )
        if post is None:
            # Deleted between the ownership check and the write.
            self.session.rollback()
            raise NotFoundError(f"No post with id '{post_id}'")
        self.session.commit()
        self.session.refresh(post)
        return PostResponse.model_validate(post)

    def delete(self, post_id: int) -> int:
        """Delete the caller's post; comments and likes go with it."""
        self._ensure_author(post_id)
        if self.repo.delete(post_id) == 0:
            self.session.rollback()
            raise StoreConflictError(f"Post '{post_id}' was already deleted")
        self.session.commit()
        logger.info("Post %s deleted by %s", post_id, self.caller.id)
        return post_id

    def like(self, post_id: int) -> int:
        """Record that the caller likes a post.

        Raises:
            StoreConflictError: If the caller already liked the post or the
                post does not exist.
        """
        try:
            self.repo.add_like(post_id, self.caller.id)
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            raise StoreConflictError(f"Cannot like post '{post_id}'") from exc
        return post_id

    def unlike(self, post_id: int) -> int:
        """Remove the caller's like from a post.

        Raises:
            StoreConflictError: If the caller has not liked the post.
        """
        if self.repo.remove_like(post_id, self.caller.id) == 0:
            self.session.rollback()
            raise StoreConflictError(f"Post '{post_id}' is not liked")
        self.session.commit()
        return post_id

    def _set_hidden(self, post_id: int, hidden: bool) -> PostIdResponse:
        self._ensure_admin()
        post = self.repo.set_hidden(post_id, hidden)
        if post is None:
            raise NotFoundError(f"No post with id '{post_id}'")
        self.session.commit()
        logger.info(
            "Post %s %s by %s",
            post_id,
            "hidden" if hidden else "unhidden",
            self.caller.id,
        )
        return PostIdResponse(id=post_id)

    def hide(self, post_id: int) -> PostIdResponse:
        """Hide a post from everyone but its author and administrators."""
        return self._set_hidden(post_id, True)

    def unhide(self, post_id: int) -> PostIdResponse:
        """Make a hidden post visible again."""
        return self._set_hidden(post_id, False)
