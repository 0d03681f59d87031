# src/campus_qa/api/v1/endpoints/tags.py
"""Tag listing and tag-filtered feeds."""

from fastapi import APIRouter, Query

from campus_qa.api.v1.dependencies import SessionDep
from campus_qa.schemas.question import QuestionResponse
from campus_qa.schemas.tag import TagResponse
from campus_qa.services.tags import get_tag, list_tags, popular_tags, questions_by_tag

router = APIRouter(prefix="/tags", tags=["tags"])


@router.get("", response_model=list[TagResponse])
def list_tags_endpoint(db: SessionDep):
    return list_tags(db)


@router.get("/popular", response_model=list[TagResponse])
def popular_tags_endpoint(db: SessionDep, limit: int = Query(10, ge=1, le=50)):
    return popular_tags(db, limit=limit)


@router.get("/{name}", response_model=TagResponse)
def read_tag(name: str, db: SessionDep):
    return get_tag(db, name)


@router.get("/{name}/questions", response_model=list[QuestionResponse])
def tag_questions(
    name: str,
    db: SessionDep,
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
):
    """Approved questions carrying the tag, newest first."""
    return questions_by_tag(db, name, page=page, page_size=page_size)
