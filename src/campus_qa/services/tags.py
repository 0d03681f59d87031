"""Tag upserts and tag-centric read paths."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from campus_qa.models import Question, Tag, question_tag
from campus_qa.models.status import POST_STATUS_APPROVED
from campus_qa.services.aggregates import QuestionSummary, summarize_questions
from campus_qa.services.errors import ContentValidationError, NotFoundError

MAX_TAG_LENGTH = 64


@dataclass(frozen=True)
class TagWithCount:
    id: int
    name: str
    question_count: int
    created_at: datetime


def normalize_tag_names(names: Iterable[str]) -> list[str]:
    """Trim, lowercase and deduplicate tag names, keeping first-seen order.

    Raises:
        ContentValidationError: If a tag is longer than 64 characters.
    """
    seen: dict[str, None] = {}
    for raw in names:
        name = raw.strip().lower()
        if len(name) > MAX_TAG_LENGTH:
            raise ContentValidationError(f"Tags must be {MAX_TAG_LENGTH} characters or less")
        if name:
            seen.setdefault(name, None)
    return list(seen)


def upsert_tags(db: Session, names: Iterable[str]) -> list[Tag]:
    """Return Tag rows for ``names``, creating the missing ones.

    Rows are flushed but not committed so they join the caller's
    transaction.
    """
    normalized = normalize_tag_names(names)
    if not normalized:
        return []

    existing = {tag.name: tag for tag in db.query(Tag).filter(Tag.name.in_(normalized)).all()}
    tags: list[Tag] = []
    for name in normalized:
        tag = existing.get(name)
        if tag is None:
            tag = Tag(name=name)
            try:
                with db.begin_nested():
                    db.add(tag)
            except IntegrityError:
                # Lost a race with another request creating the same tag.
                tag = db.query(Tag).filter(Tag.name == name).one()
        tags.append(tag)
    return tags


def _approved_counts(db: Session):
    return (
        db.query(Tag, func.count(Question.id))
        .outerjoin(question_tag, question_tag.c.tag_id == Tag.id)
        .outerjoin(
            Question,
            (Question.id == question_tag.c.question_id)
            & (Question.status == POST_STATUS_APPROVED),
        )
        .group_by(Tag.id)
    )


def _with_count(row: tuple[Tag, int]) -> TagWithCount:
    tag, count = row
    return TagWithCount(id=tag.id, name=tag.name, question_count=int(count), created_at=tag.created_at)


def list_tags(db: Session) -> list[TagWithCount]:
    """Return all tags alphabetically with their APPROVED question counts."""
    return [_with_count(row) for row in _approved_counts(db).order_by(Tag.name.asc()).all()]


def get_tag(db: Session, name: str) -> TagWithCount:
    """Return one tag by (case-insensitive) name."""
    row = _approved_counts(db).filter(Tag.name == name.strip().lower()).first()
    if row is None:
        raise NotFoundError("Tag not found")
    return _with_count(row)


def popular_tags(db: Session, limit: int = 10) -> list[TagWithCount]:
    """Return tags with at least one APPROVED question, most used first."""
    count = func.count(Question.id)
    rows = (
        _approved_counts(db)
        .having(count > 0)
        .order_by(count.desc(), Tag.name.asc())
        .limit(limit)
        .all()
    )
    return [_with_count(row) for row in rows]


def questions_by_tag(db: Session, name: str, page: int = 1, page_size: int = 20) -> list[QuestionSummary]:
    """Return APPROVED questions carrying a tag, newest first."""
    questions = (
        db.query(Question)
        .filter(
            Question.status == POST_STATUS_APPROVED,
            Question.tags.any(Tag.name == name.strip().lower()),
        )
        .order_by(Question.created_at.desc(), Question.id.desc())
        .offset((page - 1) * page_size)
        .limit(page_size)
        .all()
    )
    return summarize_questions(db, questions)


def count_tags(db: Session) -> int:
    return db.query(Tag).count()
