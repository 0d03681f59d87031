# src/campus_qa/api/v1/endpoints/search.py
"""Question search."""

from fastapi import APIRouter, Query

from campus_qa.api.v1.dependencies import SessionDep
from campus_qa.schemas.question import SearchResultResponse
from campus_qa.services.search import search_questions

router = APIRouter(prefix="/search", tags=["search"])


@router.get("", response_model=list[SearchResultResponse])
def search_endpoint(
    db: SessionDep,
    q: str = Query("", max_length=200),
    limit: int | None = Query(None, ge=1, le=100),
):
    """Search approved questions by title, content and tags."""
    return search_questions(db, q, limit=limit)
