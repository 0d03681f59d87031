# src/campus_qa/schemas/faq.py
"""AI FAQ schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class FaqResponse(BaseModel):
    id: int
    topic: str
    question: str
    answer: str
    source_question_id: int | None
    generated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class FaqRunResponse(BaseModel):
    """Summary of one FAQ generation run."""

    success: bool = True
    generated: int
    eligible: int = 0
    errors: list[str] | None = None
    error: str | None = None
