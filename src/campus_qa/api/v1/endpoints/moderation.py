# src/campus_qa/api/v1/endpoints/moderation.py
"""Moderation queue and approve/reject endpoints."""

from typing import Literal

from fastapi import APIRouter

from campus_qa.api.v1.dependencies import CurrentProfileDep, SessionDep
from campus_qa.schemas.common import CountResponse
from campus_qa.schemas.moderation import ModerationResult, PendingPostResponse
from campus_qa.services.lifecycle import approve_post, pending_count, pending_queue, reject_post

router = APIRouter(prefix="/moderation", tags=["moderation"])

PostKind = Literal["question", "answer"]


@router.get("/queue", response_model=list[PendingPostResponse])
def moderation_queue(current_profile: CurrentProfileDep, db: SessionDep):
    """Pending questions and answers, oldest first, with stale flags."""
    return pending_queue(db, current_profile)


@router.get("/pending-count", response_model=CountResponse)
def moderation_pending_count(current_profile: CurrentProfileDep, db: SessionDep) -> CountResponse:
    return CountResponse(count=pending_count(db, current_profile))


@router.post("/{kind}/{post_id}/approve", response_model=ModerationResult)
def approve(kind: PostKind, post_id: int, current_profile: CurrentProfileDep, db: SessionDep):
    post = approve_post(db, kind, post_id, current_profile)
    return ModerationResult(id=post.id, type=kind, status=post.status)


@router.post("/{kind}/{post_id}/reject", response_model=ModerationResult)
def reject(kind: PostKind, post_id: int, current_profile: CurrentProfileDep, db: SessionDep):
    post = reject_post(db, kind, post_id, current_profile)
    return ModerationResult(id=post.id, type=kind, status=post.status)
