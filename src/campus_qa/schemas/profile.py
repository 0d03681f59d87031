# src/campus_qa/schemas/profile.py
"""Profile and user directory schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class PseudonymUpdate(BaseModel):
    pseudonym: str = Field(..., description="3-20 letters, numbers or underscores")


class PseudonymAvailability(BaseModel):
    pseudonym: str
    available: bool


class MeResponse(BaseModel):
    """The caller's own profile."""

    id: int
    pseudonym: str | None
    reputation: int
    role: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class UserResponse(BaseModel):
    """Public directory entry."""

    id: int
    pseudonym: str | None
    reputation: int
    role: str
    created_at: datetime
    question_count: int
    answer_count: int

    model_config = ConfigDict(from_attributes=True)


class ProfileQuestionResponse(BaseModel):
    id: int
    title: str
    vote_score: int
    answer_count: int
    views: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ProfileAnswerResponse(BaseModel):
    id: int
    content: str
    vote_score: int
    is_accepted: bool
    created_at: datetime
    question_id: int
    question_title: str

    model_config = ConfigDict(from_attributes=True)


class UserDetailResponse(UserResponse):
    questions: list[ProfileQuestionResponse]
    answers: list[ProfileAnswerResponse]
