"""SQLAlchemy model for answers."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, CheckConstraint, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from campus_qa.db.session import Base
from campus_qa.db.time import utcnow
from campus_qa.models.status import POST_STATUS_PENDING, POST_STATUSES

if TYPE_CHECKING:
    from campus_qa.models.profile import Profile
    from campus_qa.models.question import Question

_STATUS_CHECK = "status IN ({})".format(", ".join(f"'{s}'" for s in POST_STATUSES))


class Answer(Base):
    """An answer to exactly one question.

    At most one answer per question carries ``is_accepted``; the acceptance
    service maintains this inside a single transaction.
    """

    __tablename__ = "answer"
    __table_args__ = (
        CheckConstraint(_STATUS_CHECK, name="ck_answer_status"),
        Index("ix_answer_question_id_status", "question_id", "status"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[str] = mapped_column(String(16), nullable=False, default=POST_STATUS_PENDING)
    is_accepted: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    question_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("question.id", ondelete="CASCADE"),
        nullable=False,
    )
    author_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("profile.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )

    question: Mapped[Question] = relationship("Question", back_populates="answers")
    author: Mapped[Profile] = relationship("Profile", lazy="joined")
