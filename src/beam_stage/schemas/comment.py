"""Comment-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from .user import UserSummary


class CommentCreate(BaseModel):
    """Schema for adding a comment to a post."""

    post_id: int = Field(..., description="Post being commented on")
    content: str = Field(..., min_length=1, description="Markdown content")


class CommentUpdate(BaseModel):
    """Schema for replacing a comment's content."""

    content: str = Field(..., min_length=1, description="Markdown content")


class CommentResponse(BaseModel):
    """Comment as returned inside post details and by comment mutations."""

    id: int
    post_id: int
    content: str
    content_html: str
    created_at: datetime
    author: UserSummary

    model_config = ConfigDict(from_attributes=True)
