# src/campus_qa/schemas/tag.py
"""Tag schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class TagResponse(BaseModel):
    id: int
    name: str
    question_count: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
