# src/beam_stage/api/v1/endpoints/posts.py
"""Post-related endpoints for the Beam API."""

from fastapi import APIRouter, Depends, Query, status

from beam_stage.api.v1.dependencies import PostServiceDep, get_current_caller
from beam_stage.schemas.post import (
    FeedResponse,
    PostCreate,
    PostDetail,
    PostIdResponse,
    PostResponse,
    PostSearchResult,
    PostUpdate,
)

# Authentication applies to every route before any handler runs.
router = APIRouter(
    prefix="/posts",
    tags=["posts"],
    dependencies=[Depends(get_current_caller)],
)


@router.get("/feed", response_model=FeedResponse)
async def get_feed(
    service: PostServiceDep,
    take: int = Query(50, ge=1, le=50, description="Maximum number of posts to return"),
    skip: int = Query(0, ge=0, description="Number of posts to skip"),
    author_id: str | None = Query(None, description="Only posts by this author"),
) -> FeedResponse:
    """List posts newest first, with the total count for pagination.

    Args:
        service: Post service bound to the caller
        take: Page size (max 50)
        skip: Offset of the page
        author_id: Optional author filter

    Returns:
        The page of posts and the number of posts matching the filter
    """
    return service.feed(take=take, skip=skip, author_id=author_id)


@router.get("/search", response_model=list[PostSearchResult])
async def search_posts(
    service: PostServiceDep,
    query: str = Query(..., min_length=1, description="Text to look for in title or content"),
) -> list[PostSearchResult]:
    """Search visible posts by title and content."""
    return service.search(query)


@router.get("/{post_id}", response_model=PostDetail)
async def get_post(post_id: int, service: PostServiceDep) -> PostDetail:
    """Get a post with its comments.

    Raises:
        NotFoundError: If the post does not exist or is hidden from the caller
    """
    return service.detail(post_id)


@router.post("/", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
async def create_post(post_data: PostCreate, service: PostServiceDep) -> PostResponse:
    """Create a post owned by the caller.

    The Slack announcement is sent after the response and never fails the request.
    """
    return service.add(post_data)


@router.put("/{post_id}", response_model=PostResponse)
async def edit_post(post_id: int, post_data: PostUpdate, service: PostServiceDep) -> PostResponse:
    """Replace the title and content of the caller's own post."""
    return service.edit(post_id, post_data)


@router.delete("/{post_id}", response_model=PostIdResponse)
async def delete_post(post_id: int, service: PostServiceDep) -> PostIdResponse:
    """Delete the caller's own post."""
    return PostIdResponse(id=service.delete(post_id))


@router.post("/{post_id}/like", response_model=PostIdResponse)
async def like_post(post_id: int, service: PostServiceDep) -> PostIdResponse:
    """Like a post; liking twice is a conflict."""
    return PostIdResponse(id=service.like(post_id))


@router.delete("/{post_id}/like", response_model=PostIdResponse)
async def unlike_post(post_id: int, service: PostServiceDep) -> PostIdResponse:
    """Remove the caller's like; a conflict if there is none."""
    return PostIdResponse(id=service.unlike(post_id))


@router.post("/{post_id}/hide", response_model=PostIdResponse)
async def hide_post(post_id: int, service: PostServiceDep) -> PostIdResponse:
    """Hide a post (administrators only)."""
    return service.hide(post_id)


@router.post("/{post_id}/unhide", response_model=PostIdResponse)
async def unhide_post(post_id: int, service: PostServiceDep) -> PostIdResponse:
    """Make a hidden post visible again (administrators only)."""
    return service.unhide(post_id)
