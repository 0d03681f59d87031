# src/campus_qa/api/v1/endpoints/faq.py
"""AI FAQ reads and the scheduled generation trigger."""

import logging
import secrets
from typing import Annotated

from fastapi import APIRouter, Depends, Header, HTTPException, Query, status

from campus_qa.api.v1.dependencies import SessionDep
from campus_qa.core.settings import settings
from campus_qa.schemas.common import CountResponse
from campus_qa.schemas.faq import FaqResponse, FaqRunResponse
from campus_qa.services.faq import (
    FaqGenerator,
    faq_count,
    generate_faqs,
    get_faq_client,
    recent_faqs,
)

router = APIRouter(prefix="/faq", tags=["faq"])
logger = logging.getLogger(__name__)


def get_faq_generator() -> FaqGenerator:
    """Return the shared LLM-backed FAQ generator."""
    return get_faq_client()


FaqGeneratorDep = Annotated[FaqGenerator, Depends(get_faq_generator)]


@router.get("", response_model=list[FaqResponse])
def list_faqs(db: SessionDep, limit: int = Query(5, ge=1, le=50)):
    return recent_faqs(db, limit=limit)


@router.get("/count", response_model=CountResponse)
def count_faqs(db: SessionDep) -> CountResponse:
    return CountResponse(count=faq_count(db))


@router.post("/generate", response_model=FaqRunResponse)
def generate(
    db: SessionDep,
    generator: FaqGeneratorDep,
    authorization: Annotated[str | None, Header()] = None,
) -> FaqRunResponse:
    """Run the FAQ job. Callers authenticate with ``Bearer <CRON_SECRET>``."""
    if not settings.cron_secret:
        logger.error("CRON_SECRET not configured")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server configuration error",
        )
    expected = f"Bearer {settings.cron_secret}"
    # Headers arrive latin-1 decoded; compare bytes so non-ASCII input is a mismatch.
    if authorization is None or not secrets.compare_digest(
        authorization.encode("utf-8"), expected.encode("utf-8")
    ):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")

    if not settings.faq_enabled:
        return FaqRunResponse(success=False, generated=0, error="Groq API not configured")

    result = generate_faqs(db, generator)
    return FaqRunResponse(
        generated=result.generated,
        eligible=result.eligible,
        errors=result.errors or None,
    )
