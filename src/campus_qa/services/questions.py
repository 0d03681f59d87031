"""Question creation and the question read paths."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime
from typing import Final

from sqlalchemy import update
from sqlalchemy.orm import Session

from campus_qa.models import Answer, Profile, Question
from campus_qa.models.question import CONTENT_MAX_LENGTH, TITLE_MAX_LENGTH
from campus_qa.models.status import POST_STATUS_APPROVED
from campus_qa.services.aggregates import (
    AuthorSummary,
    QuestionSummary,
    TagSummary,
    answer_vote_scores,
    question_vote_score,
    summarize_questions,
)
from campus_qa.services.content_moderation import validate_question_content
from campus_qa.services.errors import ContentValidationError, NotFoundError
from campus_qa.services.lifecycle import initial_status, is_visible, visibility_clause
from campus_qa.services.profiles import require_pseudonym
from campus_qa.services.tags import upsert_tags

FEED_ALL: Final[str] = "all"
FEED_UNANSWERED: Final[str] = "unanswered"
FEED_HOT: Final[str] = "hot"
FEEDS: Final[tuple[str, ...]] = (FEED_ALL, FEED_UNANSWERED, FEED_HOT)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnswerView:
    id: int
    question_id: int
    content: str
    status: str
    is_accepted: bool
    created_at: datetime
    vote_score: int
    author: AuthorSummary


@dataclass(frozen=True)
class QuestionDetail:
    question: QuestionSummary
    answers: list[AnswerView] = field(default_factory=list)


def create_question(
    db: Session,
    author: Profile,
    title: str,
    content: str,
    tag_names: Iterable[str],
    auto_approve: bool,
) -> Question:
    """Validate and store a new question.

    Args:
        db: Database session.
        author: Profile posting the question; must have a pseudonym.
        title: Question title, at most 300 characters.
        content: Rich-text body, at most 30,000 characters.
        tag_names: Free-form tag names; normalised and upserted.
        auto_approve: Current auto-approve flag, read once per request.

    Returns:
        The persisted question, APPROVED when auto-approve is on and
        PENDING otherwise.

    Raises:
        ForbiddenError: If the author has not chosen a pseudonym.
        ContentValidationError: If the content fails any quality check.
    """
    require_pseudonym(author, "posting questions")

    title = title.strip()
    if not title:
        raise ContentValidationError("Title is required")
    if len(title) > TITLE_MAX_LENGTH:
        raise ContentValidationError("Title must be 300 characters or less")
    if not content or not content.strip():
        raise ContentValidationError("Content is required")
    if len(content) > CONTENT_MAX_LENGTH:
        raise ContentValidationError("Content must be 30,000 characters or less")

    verdict = validate_question_content(title, content)
    if not verdict.is_valid:
        raise ContentValidationError(verdict.reason or "Content validation failed", verdict.suggestions)

    question = Question(
        title=title,
        content=content,
        status=initial_status(auto_approve),
        author_id=author.id,
    )
    question.tags = upsert_tags(db, tag_names)
    db.add(question)
    db.commit()
    db.refresh(question)
    logger.info("Question %s created by profile %s as %s", question.id, author.id, question.status)
    return question


def get_visible_question(db: Session, question_id: int, viewer: Profile | None) -> Question:
    """Return a question the viewer may read, else raise :class:`NotFoundError`."""
    question = db.get(Question, question_id)
    if question is None or not is_visible(question, viewer):
        raise NotFoundError("Question not found")
    return question


def increment_views(db: Session, question_id: int) -> None:
    """Bump the view counter by one as a single UPDATE."""
    db.execute(
        update(Question)
        .where(Question.id == question_id)
        .values(views=Question.views + 1)
        .execution_options(synchronize_session="evaluate")
    )
    db.commit()


def list_answers(db: Session, question_id: int, viewer: Profile | None) -> list[AnswerView]:
    """Return answers visible to ``viewer``, accepted first then oldest first."""
    answers = (
        db.query(Answer)
        .filter(Answer.question_id == question_id, visibility_clause(Answer, viewer))
        .order_by(Answer.is_accepted.desc(), Answer.created_at.asc(), Answer.id.asc())
        .all()
    )
    scores = answer_vote_scores(db, [answer.id for answer in answers])
    return [
        AnswerView(
            id=answer.id,
            question_id=answer.question_id,
            content=answer.content,
            status=answer.status,
            is_accepted=answer.is_accepted,
            created_at=answer.created_at,
            vote_score=scores[answer.id],
            author=AuthorSummary.of(answer.author),
        )
        for answer in answers
    ]


def get_question_detail(
    db: Session,
    question_id: int,
    viewer: Profile | None,
    count_view: bool = True,
) -> QuestionDetail:
    """Return a question with its answers and bump its view counter."""
    question = get_visible_question(db, question_id, viewer)
    if count_view:
        increment_views(db, question.id)
        db.refresh(question)

    answers = list_answers(db, question.id, viewer)
    summary = QuestionSummary(
        id=question.id,
        title=question.title,
        content=question.content,
        views=question.views,
        status=question.status,
        created_at=question.created_at,
        vote_score=question_vote_score(db, question.id),
        answer_count=sum(1 for answer in answers if answer.status == POST_STATUS_APPROVED),
        author=AuthorSummary.of(question.author),
        tags=[TagSummary(id=tag.id, name=tag.name) for tag in question.tags],
    )
    return QuestionDetail(question=summary, answers=answers)


def _unanswered_clause():
    return ~Question.answers.any(Answer.status == POST_STATUS_APPROVED)


def list_questions(
    db: Session,
    feed: str = FEED_ALL,
    page: int = 1,
    page_size: int = 20,
) -> list[QuestionSummary]:
    """Return a page of APPROVED questions for one of the feeds.

    ``all`` is newest first, ``unanswered`` keeps only questions without an
    approved answer, ``hot`` orders by views then recency.
    """
    if feed not in FEEDS:
        raise ValueError(f"Unknown feed: {feed}")

    query = db.query(Question).filter(Question.status == POST_STATUS_APPROVED)
    if feed == FEED_UNANSWERED:
        query = query.filter(_unanswered_clause())

    if feed == FEED_HOT:
        query = query.order_by(Question.views.desc(), Question.created_at.desc())
    else:
        query = query.order_by(Question.created_at.desc(), Question.id.desc())

    questions = query.offset((page - 1) * page_size).limit(page_size).all()
    return summarize_questions(db, questions)


def count_unanswered(db: Session) -> int:
    """Return how many APPROVED questions have no approved answer."""
    return (
        db.query(Question)
        .filter(Question.status == POST_STATUS_APPROVED, _unanswered_clause())
        .count()
    )
