"""Comment lifecycle and ownership checks."""
from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from beam_stage.repositories.comment_repo import CommentRepository
from beam_stage.repositories.post_repo import PostRepository
from beam_stage.schemas.comment import CommentCreate, CommentResponse, CommentUpdate
from beam_stage.schemas.user import Caller
from beam_stage.services.errors import ForbiddenError, NotFoundError, StoreConflictError
from beam_stage.services.markdown import render_markdown

logger = logging.getLogger(__name__)


class CommentService:
    """Comment operations performed on behalf of a single caller."""

    def __init__(self, session: Session, caller: Caller) -> None:
        self.session = session
        self.caller = caller
        self.repo = CommentRepository(session)
        self.posts = PostRepository(session)

    def _ensure_author(self, comment_id: int) -> None:
        if self.repo.get_author_id(comment_id) != self.caller.id:
            raise ForbiddenError()

    def _response(self, comment_id: int) -> CommentResponse:
        comment = self.repo.get_with_author(comment_id)
        if comment is None:
            raise NotFoundError(f"No comment with id '{comment_id}'")
        return CommentResponse.model_validate(comment)

    def add(self, data: CommentCreate) -> CommentResponse:
        """Comment on a post the caller is allowed to see.

        Raises:
            NotFoundError: If the post does not exist or is hidden from the caller.
        """
        post = self.posts.get_by_id(data.post_id)
        if post is None or (
            post.hidden and post.author_id != self.caller.id and not self.caller.is_admin
        ):
            raise NotFoundError(f"No post with id '{data.post_id}'")

        comment = self.repo.create(
            post_id=data.post_id,
            content=data.content,
            content_html=render_markdown(data.content),
            author_id=self.caller.id,
        )
        self.session.commit()
        logger.info("Comment %s added to post %s by %s", comment.id, data.post_id, self.caller.id)
        return self._response(comment.id)

    def edit(self, comment_id: int, data: CommentUpdate) -> CommentResponse:
        """Replace the content of the caller's comment."""
        self._ensure_author(comment_id)
        comment = self.repo.update_content(
            comment_id,
            content=data.content,
            content_html=render_markdown(data.content),
        )
        if comment is None:
            self.session.rollback()
            raise NotFoundError(f"No comment with id '{comment_id}'")
        self.session.commit()
        return self._response(comment_id)

    def delete(self, comment_id: int) -> int:
        """Delete the caller's comment."""
        self._ensure_author(comment_id)
        if self.repo.delete(comment_id) == 0:
            self.session.rollback()
            raise StoreConflictError(f"Comment '{comment_id}' was already deleted")
        self.session.commit()
        return comment_id
