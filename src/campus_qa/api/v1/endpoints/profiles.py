# src/campus_qa/api/v1/endpoints/profiles.py
"""Endpoints for the caller's own profile and pseudonym onboarding."""

from fastapi import APIRouter

from campus_qa.api.v1.dependencies import CurrentProfileDep, SessionDep
from campus_qa.schemas.profile import MeResponse, PseudonymAvailability, PseudonymUpdate
from campus_qa.services.profiles import pseudonym_available, set_pseudonym

router = APIRouter(prefix="/profiles", tags=["profiles"])


@router.get("/me", response_model=MeResponse)
async def read_me(current_profile: CurrentProfileDep) -> MeResponse:
    """Return the caller's profile; first sight of a token creates it."""
    return MeResponse.model_validate(current_profile)


@router.put("/me/pseudonym", response_model=MeResponse)
def update_pseudonym(
    payload: PseudonymUpdate,
    current_profile: CurrentProfileDep,
    db: SessionDep,
) -> MeResponse:
    """Choose the public pseudonym. It can be set only once."""
    profile = set_pseudonym(db, current_profile, payload.pseudonym)
    return MeResponse.model_validate(profile)


@router.get("/pseudonyms/{pseudonym}/available", response_model=PseudonymAvailability)
def check_pseudonym(pseudonym: str, db: SessionDep) -> PseudonymAvailability:
    return PseudonymAvailability(pseudonym=pseudonym, available=pseudonym_available(db, pseudonym))
