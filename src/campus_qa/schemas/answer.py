# src/campus_qa/schemas/answer.py
"""Answer-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from .common import AuthorResponse


class AnswerCreate(BaseModel):
    """Schema for answering a question."""

    content: str = Field(..., max_length=30_000, description="Rich-text body")


class AnswerCreated(BaseModel):
    id: int
    question_id: int
    status: str

    model_config = ConfigDict(from_attributes=True)


class AnswerResponse(BaseModel):
    id: int
    question_id: int
    content: str
    status: str
    is_accepted: bool
    created_at: datetime
    vote_score: int
    author: AuthorResponse

    model_config = ConfigDict(from_attributes=True)


class AcceptResponse(BaseModel):
    id: int
    question_id: int
    is_accepted: bool

    model_config = ConfigDict(from_attributes=True)
