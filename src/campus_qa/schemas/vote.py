# src/campus_qa/schemas/vote.py
"""Vote-related Pydantic schemas."""

from typing import Literal

from pydantic import BaseModel, Field


class VoteCreate(BaseModel):
    """Schema for casting a vote."""

    target_type: Literal["question", "answer"]
    target_id: int
    value: Literal[-1, 1] = Field(..., description="1 for upvote, -1 for downvote")


class VoteResponse(BaseModel):
    action: Literal["created", "removed", "changed"]
    reputation_delta: int
    new_score: int


class MyVoteResponse(BaseModel):
    value: Literal[-1, 0, 1]
