"""Models capturing voting interactions on questions and answers."""

from datetime import datetime

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    SmallInteger,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from campus_qa.db.session import Base
from campus_qa.db.time import utcnow


class Vote(Base):
    """Signed vote from one profile on exactly one question or answer."""

    __tablename__ = "vote"
    __table_args__ = (
        CheckConstraint("value IN (1, -1)", name="ck_vote_value"),
        CheckConstraint(
            "(question_id IS NULL) <> (answer_id IS NULL)",
            name="ck_vote_single_target",
        ),
        # One vote per (voter, target); NULLs never collide so the pair of
        # constraints covers both target kinds.
        UniqueConstraint("profile_id", "question_id", name="uq_vote_profile_question"),
        UniqueConstraint("profile_id", "answer_id", name="uq_vote_profile_answer"),
        Index("ix_vote_question_id", "question_id"),
        Index("ix_vote_answer_id", "answer_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    profile_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("profile.id", ondelete="CASCADE"),
        nullable=False,
    )
    question_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("question.id", ondelete="CASCADE"),
        nullable=True,
    )
    answer_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("answer.id", ondelete="CASCADE"),
        nullable=True,
    )

    # 1 = upvote, -1 = downvote.
    value: Mapped[int] = mapped_column(SmallInteger, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
