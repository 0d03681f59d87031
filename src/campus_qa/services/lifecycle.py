# src/campus_qa/services/lifecycle.py
"""Moderation lifecycle shared by questions and answers.

States: PENDING -> APPROVED | REJECTED. Both targets are terminal, and only
a moderator can move a post out of PENDING.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Final

from sqlalchemy import or_, true
from sqlalchemy.orm import Session
from sqlalchemy.sql.elements import ColumnElement

from campus_qa.core.settings import settings
from campus_qa.db.time import as_utc, utcnow
from campus_qa.models import Answer, GlobalSettings, Profile, Question
from campus_qa.models.status import (
    POST_STATUS_APPROVED,
    POST_STATUS_PENDING,
    POST_STATUS_REJECTED,
)
from campus_qa.models.system import GLOBAL_SETTINGS_ID
from campus_qa.services.errors import ForbiddenError, NotFoundError, StateConflictError

KIND_QUESTION: Final[str] = "question"
KIND_ANSWER: Final[str] = "answer"

_MODELS: Final[dict[str, type[Question] | type[Answer]]] = {
    KIND_QUESTION: Question,
    KIND_ANSWER: Answer,
}

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PendingPost:
    """Entry of the moderation queue."""

    id: int
    type: str
    content: str
    author_pseudonym: str | None
    created_at: datetime
    is_stale: bool
    title: str | None = None
    question_id: int | None = None


def get_auto_approve(db: Session) -> bool:
    """Return the auto-approve flag; a missing singleton reads as off."""
    row = db.get(GlobalSettings, GLOBAL_SETTINGS_ID)
    return bool(row.auto_approve_enabled) if row else False


def get_global_settings(db: Session) -> GlobalSettings:
    """Return the settings singleton, or an unsaved default when absent."""
    row = db.get(GlobalSettings, GLOBAL_SETTINGS_ID)
    if row is None:
        now = utcnow()
        row = GlobalSettings(
            id=GLOBAL_SETTINGS_ID,
            auto_approve_enabled=False,
            created_at=now,
            updated_at=now,
        )
    return row


def store_auto_approve(db: Session, enabled: bool) -> GlobalSettings:
    """Upsert the auto-approve flag without any role check.

    Used by operator tooling; request handlers go through
    :func:`set_auto_approve`.
    """
    row = db.get(GlobalSettings, GLOBAL_SETTINGS_ID)
    if row is None:
        row = GlobalSettings(id=GLOBAL_SETTINGS_ID, auto_approve_enabled=enabled)
        db.add(row)
    else:
        row.auto_approve_enabled = enabled
    db.commit()
    db.refresh(row)
    logger.info("Auto-approve set to %s", enabled)
    return row


def set_auto_approve(db: Session, enabled: bool, actor: Profile) -> GlobalSettings:
    """Toggle auto-approval of new content. Moderators only."""
    require_moderator(actor, "Only moderators can change settings")
    return store_auto_approve(db, enabled)


def initial_status(auto_approve: bool) -> str:
    """Return the status a freshly created post starts in."""
    return POST_STATUS_APPROVED if auto_approve else POST_STATUS_PENDING


def require_moderator(profile: Profile, detail: str = "Only moderators can do this") -> None:
    """Raise :class:`ForbiddenError` unless ``profile`` is a moderator."""
    if not profile.is_moderator:
        raise ForbiddenError(detail)


def visibility_clause(model: type[Question] | type[Answer], viewer: Profile | None) -> ColumnElement[bool]:
    """Return the row filter deciding which posts ``viewer`` may read.

    Anonymous readers see APPROVED rows, authors additionally see their own
    rows in any state, and moderators see everything.
    """
    if viewer is None:
        return model.status == POST_STATUS_APPROVED
    if viewer.is_moderator:
        return true()
    return or_(model.status == POST_STATUS_APPROVED, model.author_id == viewer.id)


def is_visible(post: Question | Answer, viewer: Profile | None) -> bool:
    """In-memory twin of :func:`visibility_clause`."""
    if post.status == POST_STATUS_APPROVED:
        return True
    if viewer is None:
        return False
    return viewer.is_moderator or post.author_id == viewer.id


def _transition(db: Session, kind: str, post_id: int, moderator: Profile, target: str) -> Question | Answer:
    verb = "approve" if target == POST_STATUS_APPROVED else "reject"
    require_moderator(moderator, f"Only moderators can {verb} posts")

    model = _MODELS.get(kind)
    if model is None:
        raise ValueError(f"Unknown post kind: {kind}")

    label = kind.capitalize()
    post = db.get(model, post_id)
    if post is None:
        raise NotFoundError(f"{label} not found")
    if post.status != POST_STATUS_PENDING:
        raise StateConflictError(f"{label} is not pending approval")

    post.status = target
    db.commit()
    db.refresh(post)
    logger.info("%s %s moved to %s by profile %s", label, post_id, target, moderator.id)
    return post


def approve_post(db: Session, kind: str, post_id: int, moderator: Profile) -> Question | Answer:
    """Move a PENDING question or answer to APPROVED."""
    return _transition(db, kind, post_id, moderator, POST_STATUS_APPROVED)


def reject_post(db: Session, kind: str, post_id: int, moderator: Profile) -> Question | Answer:
    """Move a PENDING question or answer to REJECTED."""
    return _transition(db, kind, post_id, moderator, POST_STATUS_REJECTED)


def pending_queue(db: Session, moderator: Profile, now: datetime | None = None) -> list[PendingPost]:
    """Return PENDING questions and answers merged oldest first.

    Entries older than ``STALE_PENDING_HOURS`` are flagged as stale so the
    queue can surface them first.
    """
    require_moderator(moderator, "Only moderators can access the moderation queue")

    current = as_utc(now or utcnow())
    threshold = current - timedelta(hours=settings.stale_pending_hours)

    questions = (
        db.query(Question)
        .filter(Question.status == POST_STATUS_PENDING)
        .order_by(Question.created_at.asc())
        .all()
    )
    answers = (
        db.query(Answer)
        .filter(Answer.status == POST_STATUS_PENDING)
        .order_by(Answer.created_at.asc())
        .all()
    )

    entries = [
        PendingPost(
            id=question.id,
            type=KIND_QUESTION,
            title=question.title,
            content=question.content,
            author_pseudonym=question.author.pseudonym,
            created_at=question.created_at,
            is_stale=as_utc(question.created_at) < threshold,
        )
        for question in questions
    ]
    entries.extend(
        PendingPost(
            id=answer.id,
            type=KIND_ANSWER,
            content=answer.content,
            author_pseudonym=answer.author.pseudonym,
            created_at=answer.created_at,
            is_stale=as_utc(answer.created_at) < threshold,
            question_id=answer.question_id,
        )
        for answer in answers
    )
    entries.sort(key=lambda entry: as_utc(entry.created_at))
    return entries


def pending_count(db: Session, viewer: Profile) -> int:
    """Return the number of PENDING posts; non-moderators always see 0."""
    if not viewer.is_moderator:
        return 0
    questions = db.query(Question).filter(Question.status == POST_STATUS_PENDING).count()
    answers = db.query(Answer).filter(Answer.status == POST_STATUS_PENDING).count()
    return questions + answers
