# src/campus_qa/api/v1/endpoints/votes.py
"""Vote-related endpoints."""

from typing import Literal

from fastapi import APIRouter, Query

from campus_qa.api.v1.dependencies import CurrentProfileDep, SessionDep
from campus_qa.schemas.vote import MyVoteResponse, VoteCreate, VoteResponse
from campus_qa.services.voting import cast_vote, get_my_vote

router = APIRouter(prefix="/votes", tags=["votes"])


@router.post("", response_model=VoteResponse)
def cast_vote_endpoint(
    vote_data: VoteCreate,
    current_profile: CurrentProfileDep,
    db: SessionDep,
) -> VoteResponse:
    """Cast, flip or (by repeating the same value) remove a vote."""
    result = cast_vote(
        db,
        current_profile,
        vote_data.target_type,
        vote_data.target_id,
        vote_data.value,
    )
    return VoteResponse(
        action=result.action.value,
        reputation_delta=result.reputation_delta,
        new_score=result.new_score,
    )


@router.get("/mine", response_model=MyVoteResponse)
def my_vote_endpoint(
    current_profile: CurrentProfileDep,
    db: SessionDep,
    target_type: Literal["question", "answer"] = Query(...),
    target_id: int = Query(...),
) -> MyVoteResponse:
    return MyVoteResponse(value=get_my_vote(db, current_profile, target_type, target_id))
