"""Shared API dependencies for authentication and common functionality."""

from typing import Annotated

from fastapi import BackgroundTasks, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy.orm import Session

from beam_stage.core.security import decode_access_token
from beam_stage.db.session import get_db
from beam_stage.models import ROLE_ADMIN
from beam_stage.schemas.user import Caller
from beam_stage.services.comment_service import CommentService
from beam_stage.services.post_service import NotifyCallback, PostService
from beam_stage.services.slack import NewPostNotice, SlackNotifier, get_slack_notifier

# HTTP Bearer scheme for JWT authentication; missing headers are reported as 401 below.
bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def _unauthorized(detail: str = "Could not validate credentials") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_caller(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> Caller:
    """Resolve the authenticated caller from the bearer token.

    Runs before any endpoint touches the database.

    Raises:
        HTTPException: If the token is missing, invalid or has no subject.
    """
    if credentials is None:
        raise _unauthorized("Not authenticated")
    try:
        payload = decode_access_token(credentials.credentials)
    except JWTError as err:
        raise _unauthorized() from err

    subject = payload.get("sub")
    if not subject:
        raise _unauthorized()
    return Caller(
        id=str(subject),
        name=payload.get("name"),
        is_admin=payload.get("role") == ROLE_ADMIN,
    )


# Type alias for current caller dependency
CallerDep = Annotated[Caller, Depends(get_current_caller)]


def get_slack_notifier_dep() -> SlackNotifier:
    """Return the shared Slack notifier."""
    return get_slack_notifier()


def get_notify_callback(
    background_tasks: BackgroundTasks,
    notifier: Annotated[SlackNotifier, Depends(get_slack_notifier_dep)],
) -> NotifyCallback:
    """Schedule new-post announcements to run after the response is sent."""

    def schedule(notice: NewPostNotice) -> None:
        background_tasks.add_task(notifier.post_created, notice)

    return schedule


def get_post_service(
    db: SessionDep,
    caller: CallerDep,
    notify: Annotated[NotifyCallback, Depends(get_notify_callback)],
) -> PostService:
    """Build the post service for the current request."""
    return PostService(db, caller, notify=notify)


def get_comment_service(db: SessionDep, caller: CallerDep) -> CommentService:
    """Build the comment service for the current request."""
    return CommentService(db, caller)


PostServiceDep = Annotated[PostService, Depends(get_post_service)]
CommentServiceDep = Annotated[CommentService, Depends(get_comment_service)]
