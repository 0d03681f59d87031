# src/campus_qa/services/__init__.py
"""Business logic services for the Campus Q&A forum."""

from .errors import (
    ContentValidationError,
    FaqGenerationError,
    ForbiddenError,
    ForumError,
    NotFoundError,
    StateConflictError,
    UnauthorizedError,
)

__all__ = [
    "ForumError",
    "ContentValidationError",
    "UnauthorizedError",
    "ForbiddenError",
    "NotFoundError",
    "StateConflictError",
    "FaqGenerationError",
]
