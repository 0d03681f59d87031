"""Aggregate helpers shared by the read paths.

Vote scores are never stored; every read sums the ledger.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import datetime

from sqlalchemy import func
from sqlalchemy.orm import Session

from campus_qa.models import Answer, Profile, Question, Vote
from campus_qa.models.status import POST_STATUS_APPROVED


@dataclass(frozen=True)
class AuthorSummary:
    """Public view of a profile; never carries identity or email."""

    id: int
    pseudonym: str | None
    reputation: int

    @classmethod
    def of(cls, profile: Profile) -> AuthorSummary:
        return cls(id=profile.id, pseudonym=profile.pseudonym, reputation=profile.reputation)


@dataclass(frozen=True)
class TagSummary:
    id: int
    name: str


@dataclass(frozen=True)
class QuestionSummary:
    """Question row decorated with its computed counters."""

    id: int
    title: str
    content: str
    views: int
    status: str
    created_at: datetime
    vote_score: int
    answer_count: int
    author: AuthorSummary
    tags: list[TagSummary] = field(default_factory=list)


def question_vote_score(db: Session, question_id: int) -> int:
    """Return the sum of all vote values on a question."""
    total = db.query(func.sum(Vote.value)).filter(Vote.question_id == question_id).scalar()
    return int(total or 0)


def answer_vote_score(db: Session, answer_id: int) -> int:
    """Return the sum of all vote values on an answer."""
    total = db.query(func.sum(Vote.value)).filter(Vote.answer_id == answer_id).scalar()
    return int(total or 0)


def question_vote_scores(db: Session, question_ids: Iterable[int]) -> dict[int, int]:
    """Return ``{question_id: score}`` for every id, defaulting to 0."""
    ids = list(question_ids)
    scores = dict.fromkeys(ids, 0)
    if not ids:
        return scores
    rows = (
        db.query(Vote.question_id, func.sum(Vote.value))
        .filter(Vote.question_id.in_(ids))
        .group_by(Vote.question_id)
        .all()
    )
    for question_id, total in rows:
        scores[question_id] = int(total or 0)
    return scores


def answer_vote_scores(db: Session, answer_ids: Iterable[int]) -> dict[int, int]:
    """Return ``{answer_id: score}`` for every id, defaulting to 0."""
    ids = list(answer_ids)
    scores = dict.fromkeys(ids, 0)
    if not ids:
        return scores
    rows = (
        db.query(Vote.answer_id, func.sum(Vote.value))
        .filter(Vote.answer_id.in_(ids))
        .group_by(Vote.answer_id)
        .all()
    )
    for answer_id, total in rows:
        scores[answer_id] = int(total or 0)
    return scores


def approved_answer_counts(db: Session, question_ids: Iterable[int]) -> dict[int, int]:
    """Return ``{question_id: number of APPROVED answers}``."""
    ids = list(question_ids)
    counts = dict.fromkeys(ids, 0)
    if not ids:
        return counts
    rows = (
        db.query(Answer.question_id, func.count(Answer.id))
        .filter(Answer.question_id.in_(ids), Answer.status == POST_STATUS_APPROVED)
        .group_by(Answer.question_id)
        .all()
    )
    for question_id, count in rows:
        counts[question_id] = int(count)
    return counts


def summarize_questions(db: Session, questions: Sequence[Question]) -> list[QuestionSummary]:
    """Attach vote scores and answer counts to questions, preserving order."""
    ids = [question.id for question in questions]
    scores = question_vote_scores(db, ids)
    counts = approved_answer_counts(db, ids)
    return [
        QuestionSummary(
            id=question.id,
            title=question.title,
            content=question.content,
            views=question.views,
            status=question.status,
            created_at=question.created_at,
            vote_score=scores[question.id],
            answer_count=counts[question.id],
            author=AuthorSummary.of(question.author),
            tags=[TagSummary(id=tag.id, name=tag.name) for tag in question.tags],
        )
        for question in questions
    ]
