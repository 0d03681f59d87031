# src/campus_qa/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .faq import router as faq_router
from .moderation import router as moderation_router
from .profiles import router as profiles_router
from .questions import router as questions_router
from .search import router as search_router
from .settings import router as settings_router
from .stats import router as stats_router
from .tags import router as tags_router
from .users import router as users_router
from .votes import router as votes_router

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
