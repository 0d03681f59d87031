# src/campus_qa/api/v1/endpoints/stats.py
"""Community statistics for the sidebar."""

from fastapi import APIRouter

from campus_qa.api.v1.dependencies import SessionDep
from campus_qa.schemas.stats import CommunityStatsResponse
from campus_qa.schemas.tag import TagResponse
from campus_qa.services.stats import community_stats, featured_tags

router = APIRouter(prefix="/stats", tags=["stats"])


@router.get("", response_model=CommunityStatsResponse)
def read_stats(db: SessionDep):
    return community_stats(db)


@router.get("/featured-tags", response_model=list[TagResponse])
def read_featured_tags(db: SessionDep):
    return featured_tags(db)
