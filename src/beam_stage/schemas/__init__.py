# src/beam_stage/schemas/__init__.py
"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .comment import CommentCreate, CommentResponse, CommentUpdate
from .post import (
    FeedPost,
    FeedResponse,
    PostCreate,
    PostDetail,
    PostIdResponse,
    PostResponse,
    PostSearchResult,
    PostUpdate,
)
from .user import Caller, UserSummary

__all__ = [
    "Caller", "UserSummary",
    "CommentCreate", "CommentResponse", "CommentUpdate",
    "FeedPost", "FeedResponse",
    "PostCreate", "PostDetail", "PostIdResponse", "PostResponse",
    "PostSearchResult", "PostUpdate",
]
