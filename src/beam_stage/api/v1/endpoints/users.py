# src/beam_stage/api/v1/endpoints/users.py
"""User lookup endpoints for the Beam API."""

from fastapi import APIRouter, Depends, Query

from beam_stage.api.v1.dependencies import SessionDep, get_current_caller
from beam_stage.core.settings import settings
from beam_stage.repositories.user_repo import UserRepository
from beam_stage.schemas.user import MentionCandidate

router = APIRouter(
    prefix="/users",
    tags=["users"],
    dependencies=[Depends(get_current_caller)],
)


@router.get("/mentions", response_model=list[MentionCandidate])
async def mention_candidates(
    db: SessionDep,
    query: str = Query("", description="Text typed after the @ trigger"),
) -> list[MentionCandidate]:
    """Suggest users for the editor's @-mention autocomplete."""
    users = UserRepository(db).search_by_name(query, settings.mention_result_limit)
    return [MentionCandidate.model_validate(user) for user in users]
