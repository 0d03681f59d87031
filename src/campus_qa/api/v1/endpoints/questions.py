# src/campus_qa/api/v1/endpoints/questions.py
"""Question feeds, detail, creation and answering."""

from dataclasses import asdict
from typing import Literal

from fastapi import APIRouter, Query, status

from campus_qa.api.v1.dependencies import (
    AutoApproveDep,
    CurrentProfileDep,
    OptionalProfileDep,
    SessionDep,
)
from campus_qa.schemas.answer import AcceptResponse, AnswerCreate, AnswerCreated
from campus_qa.schemas.common import CountResponse
from campus_qa.schemas.question import (
    HotQuestionResponse,
    QuestionCreate,
    QuestionCreated,
    QuestionDetailResponse,
    QuestionResponse,
)
from campus_qa.services.answers import accept_answer, create_answer
from campus_qa.services.hot_questions import hot_questions_cache
from campus_qa.services.questions import (
    count_unanswered,
    create_question,
    get_question_detail,
    list_questions,
)
from campus_qa.services.reputation import TARGET_QUESTION
from campus_qa.services.voting import get_my_vote

router = APIRouter(prefix="/questions", tags=["questions"])


@router.get("", response_model=list[QuestionResponse])
def list_questions_endpoint(
    db: SessionDep,
    feed: Literal["all", "unanswered", "hot"] = Query("all"),
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
):
    """Return a page of approved questions for the requested feed."""
    return list_questions(db, feed=feed, page=page, page_size=page_size)


@router.post("", response_model=QuestionCreated, status_code=status.HTTP_201_CREATED)
def create_question_endpoint(
    payload: QuestionCreate,
    current_profile: CurrentProfileDep,
    auto_approve: AutoApproveDep,
    db: SessionDep,
):
    """Post a question; it waits for review unless auto-approve is on."""
    return create_question(
        db,
        current_profile,
        payload.title,
        payload.content,
        payload.tags,
        auto_approve,
    )


@router.get("/hot", response_model=list[HotQuestionResponse])
def hot_questions_endpoint(db: SessionDep, limit: int = Query(5, ge=1, le=50)):
    """Trending questions of the last week, served from a short-lived cache."""
    return hot_questions_cache.get(db, limit)


@router.get("/unanswered/count", response_model=CountResponse)
def unanswered_count_endpoint(db: SessionDep) -> CountResponse:
    return CountResponse(count=count_unanswered(db))


@router.get("/{question_id}", response_model=QuestionDetailResponse)
def read_question(
    question_id: int,
    db: SessionDep,
    viewer: OptionalProfileDep,
) -> QuestionDetailResponse:
    """Return a question with its visible answers and bump its view count."""
    detail = get_question_detail(db, question_id, viewer)
    my_vote = get_my_vote(db, viewer, TARGET_QUESTION, question_id) if viewer else 0
    return QuestionDetailResponse.model_validate({**asdict(detail), "my_vote": my_vote})


@router.post(
    "/{question_id}/answers",
    response_model=AnswerCreated,
    status_code=status.HTTP_201_CREATED,
)
def create_answer_endpoint(
    question_id: int,
    payload: AnswerCreate,
    current_profile: CurrentProfileDep,
    auto_approve: AutoApproveDep,
    db: SessionDep,
):
    return create_answer(db, current_profile, question_id, payload.content, auto_approve)


@router.post("/{question_id}/answers/{answer_id}/accept", response_model=AcceptResponse)
def accept_answer_endpoint(
    question_id: int,
    answer_id: int,
    current_profile: CurrentProfileDep,
    db: SessionDep,
):
    """Accept an answer. Only the question's author may do this."""
    return accept_answer(db, answer_id, question_id, current_profile)
