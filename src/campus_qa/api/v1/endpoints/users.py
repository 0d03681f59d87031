# src/campus_qa/api/v1/endpoints/users.py
"""Public user directory."""

from fastapi import APIRouter, Query

from campus_qa.api.v1.dependencies import SessionDep
from campus_qa.schemas.common import CountResponse
from campus_qa.schemas.profile import UserDetailResponse, UserResponse
from campus_qa.services.profiles import count_users, get_user_by_pseudonym, list_users, search_users

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=list[UserResponse])
def list_users_endpoint(
    db: SessionDep,
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
):
    """List profiles by reputation, highest first."""
    return list_users(db, page=page, page_size=page_size)


@router.get("/count", response_model=CountResponse)
def count_users_endpoint(db: SessionDep) -> CountResponse:
    return CountResponse(count=count_users(db))


@router.get("/search", response_model=list[UserResponse])
def search_users_endpoint(db: SessionDep, q: str = Query("", max_length=100)):
    return search_users(db, q)


@router.get("/{pseudonym}", response_model=UserDetailResponse)
def read_user(pseudonym: str, db: SessionDep):
    """Public profile with recent approved questions and answers."""
    return get_user_by_pseudonym(db, pseudonym)
