"""Shared Pydantic schemas for common API elements."""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ErrorResponse(BaseModel):
    """Body returned for rejected operations."""

    detail: str
    suggestions: list[str] | None = Field(
        default=None,
        description="Hints for fixing content that failed moderation.",
    )


class CountResponse(BaseModel):
    count: int


class AuthorResponse(BaseModel):
    """Public author card; identity subject and email are never included."""

    id: int
    pseudonym: str | None
    reputation: int

    model_config = ConfigDict(from_attributes=True)


class TagRef(BaseModel):
    id: int
    name: str

    model_config = ConfigDict(from_attributes=True)
