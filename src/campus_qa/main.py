# src/campus_qa/main.py
"""Main entry point for the Campus Q&A application."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from campus_qa.api.v1 import (
    faq_router,
    moderation_router,
    profiles_router,
    questions_router,
    search_router,
    settings_router,
    stats_router,
    tags_router,
    users_router,
    votes_router,
)
from campus_qa.core.settings import settings
from campus_qa.services.errors import ContentValidationError, ForumError, UnauthorizedError
from campus_qa.services.faq import get_faq_client

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="Question and answer forum for a student community",
    version=settings.app_version,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)

# Include API routers
app.include_router(profiles_router, prefix="/api/v1")
app.include_router(users_router, prefix="/api/v1")
app.include_router(questions_router, prefix="/api/v1")
app.include_router(votes_router, prefix="/api/v1")
app.include_router(moderation_router, prefix="/api/v1")
app.include_router(settings_router, prefix="/api/v1")
app.include_router(search_router, prefix="/api/v1")
app.include_router(tags_router, prefix="/api/v1")
app.include_router(stats_router, prefix="/api/v1")
app.include_router(faq_router, prefix="/api/v1")


@app.exception_handler(ForumError)
async def forum_error_handler(request: Request, exc: ForumError) -> JSONResponse:
    """Translate domain errors into JSON responses."""
    body: dict[str, object] = {"detail": exc.detail}
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, UnauthorizedError) else None
    if isinstance(exc, ContentValidationError) and exc.suggestions:
        body["suggestions"] = exc.suggestions
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.detail)
    return JSONResponse(status_code=exc.status_code, content=body, headers=headers)


@app.on_event("shutdown")
async def on_shutdown() -> None:
    get_faq_client().close()


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "description": "Question and answer forum for a student community",
        "docs": "/docs",
        "redoc": "/redoc",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("campus_qa.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
