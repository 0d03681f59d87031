"""Generated FAQ entries."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from campus_qa.db.session import Base
from campus_qa.db.time import utcnow


class AiFaq(Base):
    """FAQ entry summarised by the LLM from a question and its best answer.

    Written only by the generation job; everything else reads.
    """

    __tablename__ = "ai_faq"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    topic: Mapped[str] = mapped_column(Text, nullable=False)
    question: Mapped[str] = mapped_column(Text, nullable=False)
    answer: Mapped[str] = mapped_column(Text, nullable=False)
    source_question_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("question.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    generated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
