# src/campus_qa/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import (
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

__all__ = [
    "faq_router",
    "moderation_router",
    "profiles_router",
    "questions_router",
    "search_router",
    "settings_router",
    "stats_router",
    "tags_router",
    "users_router",
    "votes_router",
]
