# src/campus_qa/schemas/question.py
"""Question-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from .answer import AnswerResponse
from .common import AuthorResponse, TagRef


class QuestionCreate(BaseModel):
    """Schema for posting a new question."""

    title: str = Field(..., max_length=300, description="Question title")
    content: str = Field(..., max_length=30_000, description="Rich-text body")
    tags: list[str] = Field(default_factory=list, description="Free-form tag names")


class QuestionCreated(BaseModel):
    """Result of posting a question; PENDING unless auto-approve is on."""

    id: int
    status: str

    model_config = ConfigDict(from_attributes=True)


class QuestionResponse(BaseModel):
    """Question decorated with its computed counters."""

    id: int
    title: str
    content: str
    views: int
    status: str
    created_at: datetime
    vote_score: int
    answer_count: int
    author: AuthorResponse
    tags: list[TagRef]

    model_config = ConfigDict(from_attributes=True)


class QuestionDetailResponse(BaseModel):
    question: QuestionResponse
    answers: list[AnswerResponse]
    my_vote: int = Field(0, description="Caller's vote on the question, 0 when none")

    model_config = ConfigDict(from_attributes=True)


class HotQuestionResponse(BaseModel):
    question: QuestionResponse
    hot_score: float

    model_config = ConfigDict(from_attributes=True)


class SearchResultResponse(BaseModel):
    question: QuestionResponse
    relevance_score: int

    model_config = ConfigDict(from_attributes=True)
