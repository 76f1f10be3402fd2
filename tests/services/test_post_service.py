# tests/services/test_post_service.py
"""Service-level tests for post and comment rules."""

import pytest

from beam_stage.schemas import CommentCreate, PostCreate, PostUpdate
from beam_stage.schemas.user import Caller
from beam_stage.services import CommentService, PostService
from beam_stage.services.errors import ForbiddenError, NotFoundError, StoreConflictError


def test_add_notifies_after_commit(db_session, caller) -> None:
    notices = []
    service = PostService(db_session, caller, notify=notices.append)

    post = service.add(PostCreate(title="Launch", content="We are **live**"))

    assert [notice.post_id for notice in notices] == [post.id]
    assert notices[0].author_name == "Alice"
    assert post.content_html == "<p>We are <strong>live</strong></p>\n"


def test_add_without_notifier(db_session, caller) -> None:
    post = PostService(db_session, caller).add(PostCreate(title="Quiet", content="shh"))
    assert post.author_id == caller.id


def test_failed_add_does_not_notify(db_session) -> None:
    notices = []
    service = PostService(db_session, Caller(id="ghost"), notify=notices.append)
    with pytest.raises(StoreConflictError):
        service.add(PostCreate(title="t", content="c"))
    assert notices == []


def test_feed_caps_page_size(db_session, caller, make_post) -> None:
    for i in range(3):
        make_post(f"post {i}")
    feed = PostService(db_session, caller).feed(take=500)
    assert len(feed.posts) == 3
    assert feed.post_count == 3


def test_edit_leaves_other_users_post_untouched(db_session, other_caller, test_post) -> None:
    service = PostService(db_session, other_caller)
    with pytest.raises(ForbiddenError):
        service.edit(test_post.id, PostUpdate(title="x", content="y"))
    db_session.refresh(test_post)
    assert test_post.title == "Hello"


def test_hide_by_admin_and_missing_post(db_session, admin_caller, caller, test_post) -> None:
    with pytest.raises(ForbiddenError):
        PostService(db_session, caller).hide(test_post.id)

    admin = PostService(db_session, admin_caller)
    assert admin.hide(test_post.id).id == test_post.id
    with pytest.raises(NotFoundError):
        PostService(db_session, Caller(id="user-bob")).detail(test_post.id)
    assert PostService(db_session, caller).detail(test_post.id).hidden is True

    with pytest.raises(NotFoundError):
        admin.unhide(12345)


def test_unlike_without_like_conflicts(db_session, caller, test_post) -> None:
    service = PostService(db_session, caller)
    with pytest.raises(StoreConflictError):
        service.unlike(test_post.id)
    assert service.like(test_post.id) == test_post.id
    with pytest.raises(StoreConflictError):
        service.like(test_post.id)
    assert service.unlike(test_post.id) == test_post.id


def test_comment_service_hides_moderated_posts(db_session, other_caller, make_post) -> None:
    post = make_post(hidden=True)
    with pytest.raises(NotFoundError):
        CommentService(db_session, other_caller).add(CommentCreate(post_id=post.id, content="hi"))


def test_comment_edit_by_other_user_is_forbidden(db_session, caller, other_caller, test_post) -> None:
    comment = CommentService(db_session, caller).add(CommentCreate(post_id=test_post.id, content="hi"))
    with pytest.raises(ForbiddenError):
        CommentService(db_session, other_caller).delete(comment.id)
