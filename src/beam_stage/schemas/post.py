"""Post-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from .comment import CommentResponse
from .user import LikerUser, UserSummary


class PostCreate(BaseModel):
    """Schema for creating a new post."""

    title: str = Field(..., min_length=1, max_length=255, description="Post title")
    content: str = Field(..., min_length=1, description="Markdown content")


class PostUpdate(PostCreate):
    """Schema for editing a post; title and content are both replaced."""


class Liker(BaseModel):
    """Entry in a post's ordered list of likers."""

    user: LikerUser

    model_config = ConfigDict(from_attributes=True)


class FeedPost(BaseModel):
    """Post summary used in the feed; carries no raw markdown or comment bodies."""

    id: int
    title: str
    content_html: str
    created_at: datetime
    hidden: bool
    author: UserSummary
    liked_by: list[Liker]
    comment_count: int

    model_config = ConfigDict(from_attributes=True)


class FeedResponse(BaseModel):
    """One page of the feed plus the unpaginated total for the same filter."""

    posts: list[FeedPost]
    post_count: int


class PostDetail(BaseModel):
    """Full post including markdown source and all comments."""

    id: int
    title: str
    content: str
    content_html: str
    created_at: datetime
    hidden: bool
    author: UserSummary
    liked_by: list[Liker]
    comments: list[CommentResponse]

    model_config = ConfigDict(from_attributes=True)


class PostResponse(BaseModel):
    """Post row returned by create and edit."""

    id: int
    title: str
    content: str
    content_html: str
    created_at: datetime
    hidden: bool
    author_id: str

    model_config = ConfigDict(from_attributes=True)


class PostSearchResult(BaseModel):
    """Search hit; only enough to link to the post."""

    id: int
    title: str

    model_config = ConfigDict(from_attributes=True)


class PostIdResponse(BaseModel):
    """Identifier of the post a moderation action applied to."""

    id: int

    model_config = ConfigDict(from_attributes=True)
