# src/campus_qa/services/reputation.py
"""Reputation accounting for profiles.

Reputation changes:
    * Question upvote: +5
    * Answer upvote: +10
    * Any downvote: -2
    * Answer accepted: +15
"""

from __future__ import annotations

import logging
from typing import Final

from sqlalchemy import update
from sqlalchemy.orm import Session

from campus_qa.models import Profile

QUESTION_UPVOTE: Final[int] = 5
ANSWER_UPVOTE: Final[int] = 10
DOWNVOTE: Final[int] = -2
ANSWER_ACCEPTED: Final[int] = 15

TARGET_QUESTION: Final[str] = "question"
TARGET_ANSWER: Final[str] = "answer"

logger = logging.getLogger(__name__)


def vote_grant(target_type: str, value: int) -> int:
    """Return the reputation granted to an author for a single vote.

    Args:
        target_type: ``"question"`` or ``"answer"``.
        value: Vote value, ``1`` or ``-1``.
    """
    if value == -1:
        return DOWNVOTE
    if value != 1:
        raise ValueError(f"Invalid vote value: {value}")
    if target_type == TARGET_QUESTION:
        return QUESTION_UPVOTE
    if target_type == TARGET_ANSWER:
        return ANSWER_UPVOTE
    raise ValueError(f"Unknown vote target type: {target_type}")


def apply_reputation(db: Session, profile_id: int, delta: int) -> None:
    """Add ``delta`` to a profile's reputation without any floor or ceiling.

    The increment is issued as a single ``UPDATE ... SET reputation =
    reputation + :delta`` so concurrent adjustments never lose writes.
    Committing is left to the caller.
    """
    if delta == 0:
        return
    db.execute(
        update(Profile)
        .where(Profile.id == profile_id)
        .values(reputation=Profile.reputation + delta)
        .execution_options(synchronize_session="evaluate")
    )
    logger.debug("Applied reputation delta %+d to profile %s", delta, profile_id)
