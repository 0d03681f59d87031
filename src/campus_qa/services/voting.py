# src/campus_qa/services/voting.py
"""Vote ledger: one signed vote per (profile, target), toggled by recasting."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from sqlalchemy.orm import Session

from campus_qa.models import Answer, Profile, Question, Vote
from campus_qa.services.aggregates import answer_vote_score, question_vote_score
from campus_qa.services.errors import ForbiddenError, NotFoundError
from campus_qa.services.lifecycle import is_visible
from campus_qa.services.profiles import require_pseudonym
from campus_qa.services.reputation import (
    TARGET_ANSWER,
    TARGET_QUESTION,
    apply_reputation,
    vote_grant,
)

logger = logging.getLogger(__name__)


class VoteAction(str, Enum):
    CREATED = "created"
    REMOVED = "removed"
    CHANGED = "changed"


@dataclass(frozen=True)
class VoteResult:
    action: VoteAction
    reputation_delta: int
    new_score: int


def _load_target(db: Session, target_type: str, target_id: int, voter: Profile) -> Question | Answer:
    if target_type == TARGET_QUESTION:
        target = db.get(Question, target_id)
        missing = "Question not found"
    elif target_type == TARGET_ANSWER:
        target = db.get(Answer, target_id)
        missing = "Answer not found"
    else:
        raise ValueError(f"Unknown vote target type: {target_type}")

    if target is None or not is_visible(target, voter):
        raise NotFoundError(missing)
    if isinstance(target, Answer) and not is_visible(target.question, voter):
        raise NotFoundError(missing)
    return target


def _existing_vote(db: Session, voter_id: int, target_type: str, target_id: int) -> Vote | None:
    query = db.query(Vote).filter(Vote.profile_id == voter_id)
    if target_type == TARGET_QUESTION:
        return query.filter(Vote.question_id == target_id).first()
    return query.filter(Vote.answer_id == target_id).first()


def classify(existing: int | None, value: int) -> VoteAction:
    """Return which of the three ledger transitions a new vote triggers."""
    if existing is None:
        return VoteAction.CREATED
    if existing == value:
        return VoteAction.REMOVED
    return VoteAction.CHANGED


def reputation_delta(action: VoteAction, target_type: str, value: int, existing: int | None) -> int:
    """Return the author's reputation change for a classified vote."""
    if action is VoteAction.CREATED:
        return vote_grant(target_type, value)
    if action is VoteAction.REMOVED:
        return -vote_grant(target_type, existing)
    return vote_grant(target_type, value) - vote_grant(target_type, existing)


def score_of(db: Session, target_type: str, target_id: int) -> int:
    if target_type == TARGET_QUESTION:
        return question_vote_score(db, target_id)
    return answer_vote_score(db, target_id)


def cast_vote(db: Session, voter: Profile, target_type: str, target_id: int, value: int) -> VoteResult:
    """Record, remove or flip a vote and settle the author's reputation.

    Casting the same value twice removes the vote; casting the opposite
    value flips it. The returned score is recomputed from the ledger.

    Raises:
        ForbiddenError: If the voter has no pseudonym or owns the target.
        NotFoundError: If the target does not exist or is not visible.
    """
    if value not in (1, -1):
        raise ValueError(f"Invalid vote value: {value}")
    require_pseudonym(voter, "voting")

    target = _load_target(db, target_type, target_id, voter)
    if target.author_id == voter.id:
        raise ForbiddenError("You cannot vote on your own posts")

    vote = _existing_vote(db, voter.id, target_type, target_id)
    previous = vote.value if vote is not None else None
    action = classify(previous, value)
    delta = reputation_delta(action, target_type, value, previous)

    if action is VoteAction.CREATED:
        vote = Vote(profile_id=voter.id, value=value)
        if target_type == TARGET_QUESTION:
            vote.question_id = target_id
        else:
            vote.answer_id = target_id
        db.add(vote)
    elif action is VoteAction.REMOVED:
        db.delete(vote)
    else:
        vote.value = value

    apply_reputation(db, target.author_id, delta)
    db.commit()

    new_score = score_of(db, target_type, target_id)
    logger.debug(
        "Vote %s on %s %s by profile %s (delta %+d)",
        action.value,
        target_type,
        target_id,
        voter.id,
        delta,
    )
    return VoteResult(action=action, reputation_delta=delta, new_score=new_score)


def get_my_vote(db: Session, voter: Profile, target_type: str, target_id: int) -> int:
    """Return the voter's current value on a target, or 0 without a vote."""
    if target_type not in (TARGET_QUESTION, TARGET_ANSWER):
        raise ValueError(f"Unknown vote target type: {target_type}")
    vote = _existing_vote(db, voter.id, target_type, target_id)
    return vote.value if vote is not None else 0
