# src/campus_qa/api/v1/endpoints/settings.py
"""Runtime forum settings toggled by moderators."""

from fastapi import APIRouter

from campus_qa.api.v1.dependencies import CurrentProfileDep, SessionDep
from campus_qa.schemas.settings import AutoApproveUpdate, GlobalSettingsResponse
from campus_qa.services.lifecycle import get_global_settings, set_auto_approve

router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("", response_model=GlobalSettingsResponse)
def read_settings(db: SessionDep):
    return get_global_settings(db)


@router.put("/auto-approve", response_model=GlobalSettingsResponse)
def update_auto_approve(
    payload: AutoApproveUpdate,
    current_profile: CurrentProfileDep,
    db: SessionDep,
):
    """Enable or disable auto-approval of new posts. Moderators only."""
    return set_auto_approve(db, payload.enabled, current_profile)
