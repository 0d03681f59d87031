"""SQLAlchemy models for questions and their tags."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Table,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from campus_qa.db.session import Base
from campus_qa.db.time import utcnow
from campus_qa.models.status import POST_STATUS_PENDING, POST_STATUSES

if TYPE_CHECKING:
    from campus_qa.models.answer import Answer
    from campus_qa.models.profile import Profile

TITLE_MAX_LENGTH = 300
CONTENT_MAX_LENGTH = 30_000

_STATUS_CHECK = "status IN ({})".format(", ".join(f"'{s}'" for s in POST_STATUSES))

question_tag = Table(
    "question_tag",
    Base.metadata,
    Column("question_id", Integer, ForeignKey("question.id", ondelete="CASCADE"), primary_key=True),
    Column("tag_id", Integer, ForeignKey("tag.id", ondelete="CASCADE"), primary_key=True),
)


class Tag(Base):
    """Lowercase topic label, created lazily on first use and never deleted."""

    __tablename__ = "tag"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    questions: Mapped[list[Question]] = relationship(
        "Question",
        secondary=question_tag,
        back_populates="tags",
    )


class Question(Base):
    """A question posted by a profile and gated by the moderation lifecycle."""

    __tablename__ = "question"
    __table_args__ = (
        CheckConstraint(_STATUS_CHECK, name="ck_question_status"),
        CheckConstraint("views >= 0", name="ck_question_views"),
        Index("ix_question_status_created_at", "status", "created_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(TITLE_MAX_LENGTH), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    views: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    status: Mapped[str] = mapped_column(String(16), nullable=False, default=POST_STATUS_PENDING)

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

    author: Mapped[Profile] = relationship("Profile", lazy="joined")
    tags: Mapped[list[Tag]] = relationship(
        "Tag",
        secondary=question_tag,
        back_populates="questions",
        order_by="Tag.name",
    )
    answers: Mapped[list[Answer]] = relationship(
        "Answer",
        back_populates="question",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
