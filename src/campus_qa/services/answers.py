"""Answer creation and the acceptance rule."""

from __future__ import annotations

import logging

from sqlalchemy import update
from sqlalchemy.orm import Session

from campus_qa.models import Answer, Profile, Question
from campus_qa.models.question import CONTENT_MAX_LENGTH
from campus_qa.services.content_moderation import validate_answer_content
from campus_qa.services.errors import (
    ContentValidationError,
    ForbiddenError,
    NotFoundError,
    StateConflictError,
)
from campus_qa.services.lifecycle import initial_status
from campus_qa.services.profiles import require_pseudonym
from campus_qa.services.questions import get_visible_question
from campus_qa.services.reputation import ANSWER_ACCEPTED, apply_reputation

logger = logging.getLogger(__name__)


def create_answer(
    db: Session,
    author: Profile,
    question_id: int,
    content: str,
    auto_approve: bool,
) -> Answer:
    """Validate and store an answer to a question the author can see.

    Raises:
        ForbiddenError: If the author has not chosen a pseudonym.
        ContentValidationError: If the content fails any quality check.
        NotFoundError: If the question does not exist for this author.
    """
    require_pseudonym(author, "posting answers")

    if not content or not content.strip():
        raise ContentValidationError("Content is required")
    if len(content) > CONTENT_MAX_LENGTH:
        raise ContentValidationError("Content must be 30,000 characters or less")

    verdict = validate_answer_content(content)
    if not verdict.is_valid:
        raise ContentValidationError(verdict.reason or "Content validation failed", verdict.suggestions)

    question = get_visible_question(db, question_id, author)

    answer = Answer(
        content=content,
        status=initial_status(auto_approve),
        question_id=question.id,
        author_id=author.id,
        is_accepted=False,
    )
    db.add(answer)
    db.commit()
    db.refresh(answer)
    logger.info("Answer %s created on question %s as %s", answer.id, question.id, answer.status)
    return answer


def accept_answer(db: Session, answer_id: int, question_id: int, requester: Profile) -> Answer:
    """Mark an answer as the accepted one for its question.

    Inside one transaction every sibling is un-accepted, the target is
    accepted and its author gains +15 reputation. Accepting the answer that
    is already accepted changes nothing and grants nothing.

    Raises:
        NotFoundError: If the question or answer does not exist.
        ForbiddenError: If ``requester`` did not author the question.
        StateConflictError: If the answer belongs to another question.
    """
    question = db.get(Question, question_id)
    if question is None:
        raise NotFoundError("Question not found")
    if question.author_id != requester.id:
        raise ForbiddenError("Only the question author can accept answers")

    answer = db.get(Answer, answer_id)
    if answer is None:
        raise NotFoundError("Answer not found")
    if answer.question_id != question_id:
        raise StateConflictError("Answer does not belong to this question")

    if answer.is_accepted:
        return answer

    try:
        db.execute(
            update(Answer)
            .where(Answer.question_id == question_id, Answer.is_accepted.is_(True))
            .values(is_accepted=False)
            .execution_options(synchronize_session="evaluate")
        )
        answer.is_accepted = True
        apply_reputation(db, answer.author_id, ANSWER_ACCEPTED)
        db.commit()
    except Exception:
        db.rollback()
        logger.error("Accepting answer %s failed; transaction rolled back", answer_id, exc_info=True)
        raise

    db.refresh(answer)
    logger.info("Answer %s accepted on question %s", answer_id, question_id)
    return answer
