# src/campus_qa/schemas/moderation.py
"""Moderation-related Pydantic schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class PendingPostResponse(BaseModel):
    """Entry of the moderation queue."""

    id: int
    type: Literal["question", "answer"]
    title: str | None = None
    content: str
    author_pseudonym: str | None
    created_at: datetime
    is_stale: bool = Field(..., description="True when waiting longer than the stale threshold")
    question_id: int | None = None

    model_config = ConfigDict(from_attributes=True)


class ModerationResult(BaseModel):
    id: int
    type: Literal["question", "answer"]
    status: str
