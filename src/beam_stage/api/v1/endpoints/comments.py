# src/beam_stage/api/v1/endpoints/comments.py
"""Comment-related endpoints for the Beam API."""

from fastapi import APIRouter, Depends, status

from beam_stage.api.v1.dependencies import CommentServiceDep, get_current_caller
from beam_stage.schemas.comment import CommentCreate, CommentResponse, CommentUpdate

router = APIRouter(
    prefix="/comments",
    tags=["comments"],
    dependencies=[Depends(get_current_caller)],
)


@router.post("/", response_model=CommentResponse, status_code=status.HTTP_201_CREATED)
async def add_comment(comment_data: CommentCreate, service: CommentServiceDep) -> CommentResponse:
    """Comment on a post visible to the caller."""
    return service.add(comment_data)


@router.put("/{comment_id}", response_model=CommentResponse)
async def edit_comment(
    comment_id: int,
    comment_data: CommentUpdate,
    service: CommentServiceDep,
) -> CommentResponse:
    """Replace the content of the caller's own comment."""
    return service.edit(comment_id, comment_data)


@router.delete("/{comment_id}")
async def delete_comment(comment_id: int, service: CommentServiceDep) -> dict[str, int]:
    """Delete the caller's own comment."""
    return {"id": service.delete(comment_id)}
