# src/campus_qa/schemas/stats.py
"""Community statistics schemas."""

from pydantic import BaseModel, ConfigDict


class CommunityStatsResponse(BaseModel):
    question_count: int
    answer_count: int
    user_count: int
    tag_count: int

    model_config = ConfigDict(from_attributes=True)
