# src/beam_stage/models/__init__.py
"""SQLAlchemy models for the Beam application."""

from .comment import Comment
from .like import LikedPost
from .post import Post
from .user import ROLE_ADMIN, ROLE_USER, User

__all__ = [
    "Comment",
    "LikedPost",
    "Post",
    "ROLE_ADMIN", "ROLE_USER", "User",
]
