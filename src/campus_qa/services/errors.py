"""Domain errors raised by the forum services.

Services never build HTTP responses themselves. Each error carries the
status code the API layer should answer with; a single exception handler
registered in ``campus_qa.main`` does the translation.
"""

from __future__ import annotations

from fastapi import status


class ForumError(RuntimeError):
    """Base exception for rejected forum operations."""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class ContentValidationError(ForumError):
    """Malformed, oversized or spam-like input."""

    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY

    def __init__(self, reason: str, suggestions: list[str] | None = None) -> None:
        super().__init__(reason)
        self.reason = reason
        self.suggestions = list(suggestions or [])


class UnauthorizedError(ForumError):
    """Caller is not authenticated."""

    status_code = status.HTTP_401_UNAUTHORIZED


class ForbiddenError(ForumError):
    """Caller is authenticated but lacks the role or ownership required."""

    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(ForumError):
    """Target row does not exist or is not visible to the caller."""

    status_code = status.HTTP_404_NOT_FOUND


class StateConflictError(ForumError):
    """Target exists but is not in the state the operation requires."""

    status_code = status.HTTP_409_CONFLICT


class FaqGenerationError(ForumError):
    """The LLM collaborator failed or returned an unusable payload."""

    status_code = status.HTTP_502_BAD_GATEWAY
