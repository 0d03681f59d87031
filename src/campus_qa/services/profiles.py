"""Profile onboarding and the public user directory."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Final

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from campus_qa.models import Answer, Profile, Question
from campus_qa.models.status import POST_STATUS_APPROVED, ROLE_STUDENT
from campus_qa.services.aggregates import (
    answer_vote_scores,
    approved_answer_counts,
    question_vote_scores,
)
from campus_qa.services.errors import (
    ContentValidationError,
    ForbiddenError,
    NotFoundError,
    StateConflictError,
)

PSEUDONYM_PATTERN: Final[re.Pattern[str]] = re.compile(r"^[a-zA-Z0-9_]{3,20}$")
PROFILE_RECENT_LIMIT: Final[int] = 10
USER_SEARCH_LIMIT: Final[int] = 20

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UserProfile:
    id: int
    pseudonym: str | None
    reputation: int
    role: str
    created_at: datetime
    question_count: int
    answer_count: int


@dataclass(frozen=True)
class ProfileQuestion:
    id: int
    title: str
    vote_score: int
    answer_count: int
    views: int
    created_at: datetime


@dataclass(frozen=True)
class ProfileAnswer:
    id: int
    content: str
    vote_score: int
    is_accepted: bool
    created_at: datetime
    question_id: int
    question_title: str


@dataclass(frozen=True)
class UserProfileDetail(UserProfile):
    questions: list[ProfileQuestion] = field(default_factory=list)
    answers: list[ProfileAnswer] = field(default_factory=list)


def get_or_create_profile(db: Session, user_id: str, email: str | None = None) -> Profile:
    """Return the profile for an identity subject, creating it on first sight.

    New profiles start without a pseudonym, with zero reputation and the
    STUDENT role.
    """
    profile = db.query(Profile).filter(Profile.user_id == user_id).first()
    if profile is not None:
        return profile

    profile = Profile(user_id=user_id, email=email, reputation=0, role=ROLE_STUDENT)
    db.add(profile)
    try:
        db.commit()
    except IntegrityError:
        # A concurrent request created the same identity first.
        db.rollback()
        existing = db.query(Profile).filter(Profile.user_id == user_id).first()
        if existing is None:
            raise
        return existing
    db.refresh(profile)
    logger.info("Created profile %s for new identity", profile.id)
    return profile


def require_pseudonym(profile: Profile, action: str) -> None:
    """Raise :class:`ForbiddenError` if the profile has not finished onboarding."""
    if not profile.pseudonym:
        raise ForbiddenError(f"You must set a pseudonym before {action}")


def pseudonym_available(db: Session, pseudonym: str) -> bool:
    """Return True if no profile holds ``pseudonym`` yet."""
    return db.query(Profile.id).filter(Profile.pseudonym == pseudonym).first() is None


def set_pseudonym(db: Session, profile: Profile, pseudonym: str) -> Profile:
    """Assign a globally unique pseudonym to a profile.

    Raises:
        ContentValidationError: If the pseudonym has an invalid format.
        StateConflictError: If it is taken or the profile already has one.
    """
    pseudonym = pseudonym.strip()
    if not PSEUDONYM_PATTERN.match(pseudonym):
        raise ContentValidationError(
            "Pseudonym must be 3-20 characters and contain only letters, numbers, and underscores"
        )
    if profile.pseudonym:
        if profile.pseudonym == pseudonym:
            return profile
        raise StateConflictError("Pseudonym has already been set")
    if not pseudonym_available(db, pseudonym):
        raise StateConflictError("Pseudonym is already taken")

    profile.pseudonym = pseudonym
    try:
        db.commit()
    except IntegrityError as err:
        db.rollback()
        raise StateConflictError("Pseudonym is already taken") from err
    db.refresh(profile)
    return profile


def _post_counts(db: Session, profile_ids: list[int]) -> tuple[dict[int, int], dict[int, int]]:
    if not profile_ids:
        return {}, {}
    question_rows = (
        db.query(Question.author_id, func.count(Question.id))
        .filter(Question.author_id.in_(profile_ids))
        .group_by(Question.author_id)
        .all()
    )
    answer_rows = (
        db.query(Answer.author_id, func.count(Answer.id))
        .filter(Answer.author_id.in_(profile_ids))
        .group_by(Answer.author_id)
        .all()
    )
    return dict(question_rows), dict(answer_rows)


def _to_user_profiles(db: Session, profiles: list[Profile]) -> list[UserProfile]:
    questions, answers = _post_counts(db, [profile.id for profile in profiles])
    return [
        UserProfile(
            id=profile.id,
            pseudonym=profile.pseudonym,
            reputation=profile.reputation,
            role=profile.role,
            created_at=profile.created_at,
            question_count=int(questions.get(profile.id, 0)),
            answer_count=int(answers.get(profile.id, 0)),
        )
        for profile in profiles
    ]


def list_users(db: Session, page: int = 1, page_size: int = 20) -> list[UserProfile]:
    """Return profiles ordered by reputation, highest first."""
    profiles = (
        db.query(Profile)
        .order_by(Profile.reputation.desc(), Profile.id.asc())
        .offset((page - 1) * page_size)
        .limit(page_size)
        .all()
    )
    return _to_user_profiles(db, profiles)


def count_users(db: Session) -> int:
    return db.query(Profile).count()


def search_users(db: Session, query: str) -> list[UserProfile]:
    """Return up to 20 profiles whose pseudonym contains ``query``."""
    term = query.strip()
    if not term:
        return []
    profiles = (
        db.query(Profile)
        .filter(Profile.pseudonym.ilike(f"%{term}%"))
        .order_by(Profile.reputation.desc())
        .limit(USER_SEARCH_LIMIT)
        .all()
    )
    return _to_user_profiles(db, profiles)


def get_user_by_pseudonym(db: Session, pseudonym: str) -> UserProfileDetail:
    """Return a public profile with its ten most recent approved posts."""
    profile = db.query(Profile).filter(Profile.pseudonym == pseudonym).first()
    if profile is None:
        raise NotFoundError("User not found")

    (summary,) = _to_user_profiles(db, [profile])

    questions = (
        db.query(Question)
        .filter(Question.author_id == profile.id, Question.status == POST_STATUS_APPROVED)
        .order_by(Question.created_at.desc())
        .limit(PROFILE_RECENT_LIMIT)
        .all()
    )
    answers = (
        db.query(Answer)
        .filter(Answer.author_id == profile.id, Answer.status == POST_STATUS_APPROVED)
        .order_by(Answer.created_at.desc())
        .limit(PROFILE_RECENT_LIMIT)
        .all()
    )
    question_scores = question_vote_scores(db, [q.id for q in questions])
    answer_counts = approved_answer_counts(db, [q.id for q in questions])
    answer_scores = answer_vote_scores(db, [a.id for a in answers])

    return UserProfileDetail(
        id=summary.id,
        pseudonym=summary.pseudonym,
        reputation=summary.reputation,
        role=summary.role,
        created_at=summary.created_at,
        question_count=summary.question_count,
        answer_count=summary.answer_count,
        questions=[
            ProfileQuestion(
                id=q.id,
                title=q.title,
                vote_score=question_scores[q.id],
                answer_count=answer_counts[q.id],
                views=q.views,
                created_at=q.created_at,
            )
            for q in questions
        ],
        answers=[
            ProfileAnswer(
                id=a.id,
                content=a.content,
                vote_score=answer_scores[a.id],
                is_accepted=a.is_accepted,
                created_at=a.created_at,
                question_id=a.question_id,
                question_title=a.question.title,
            )
            for a in answers
        ],
    )
