"""User-related Pydantic schemas."""

from pydantic import BaseModel, ConfigDict, Field


class Caller(BaseModel):
    """Authenticated identity attached to the current request."""

    id: str = Field(..., min_length=1, description="Identifier issued by the auth provider")
    name: str | None = Field(None, description="Display name used in notifications")
    is_admin: bool = Field(False, description="True when the caller may moderate posts")

    model_config = ConfigDict(frozen=True)


class UserSummary(BaseModel):
    """Author details embedded in post and comment payloads."""

    id: str
    name: str | None
    image: str | None = None

    model_config = ConfigDict(from_attributes=True)


class LikerUser(BaseModel):
    """Minimal user reference listed among a post's likers."""

    id: str
    name: str | None

    model_config = ConfigDict(from_attributes=True)


class MentionCandidate(BaseModel):
    """User offered by the @-mention autocomplete."""

    id: str
    name: str | None
    image: str | None = None

    model_config = ConfigDict(from_attributes=True)
