"""Community counters shown in the sidebar."""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.orm import Session

from campus_qa.models import Answer, Profile, Question
from campus_qa.models.status import POST_STATUS_APPROVED
from campus_qa.services.tags import TagWithCount, count_tags, popular_tags

FEATURED_TAG_LIMIT = 6


@dataclass(frozen=True)
class CommunityStats:
    question_count: int
    answer_count: int
    user_count: int
    tag_count: int


def community_stats(db: Session) -> CommunityStats:
    """Count APPROVED posts, onboarded profiles and tags."""
    return CommunityStats(
        question_count=db.query(Question).filter(Question.status == POST_STATUS_APPROVED).count(),
        answer_count=db.query(Answer).filter(Answer.status == POST_STATUS_APPROVED).count(),
        user_count=db.query(Profile).filter(Profile.pseudonym.is_not(None)).count(),
        tag_count=count_tags(db),
    )


def featured_tags(db: Session) -> list[TagWithCount]:
    return popular_tags(db, limit=FEATURED_TAG_LIMIT)
