# src/campus_qa/schemas/__init__.py
"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .answer import AcceptResponse, AnswerCreate, AnswerCreated, AnswerResponse
from .common import AuthorResponse, CountResponse, ErrorResponse, TagRef
from .faq import FaqResponse, FaqRunResponse
from .moderation import ModerationResult, PendingPostResponse
from .profile import (
    MeResponse,
    PseudonymAvailability,
    PseudonymUpdate,
    UserDetailResponse,
    UserResponse,
)
from .question import (
    HotQuestionResponse,
    QuestionCreate,
    QuestionCreated,
    QuestionDetailResponse,
    QuestionResponse,
    SearchResultResponse,
)
from .settings import AutoApproveUpdate, GlobalSettingsResponse
from .stats import CommunityStatsResponse
from .tag import TagResponse
from .vote import MyVoteResponse, VoteCreate, VoteResponse

__all__ = [
    "AcceptResponse", "AnswerCreate", "AnswerCreated", "AnswerResponse",
    "AuthorResponse", "CountResponse", "ErrorResponse", "TagRef",
    "FaqResponse", "FaqRunResponse",
    "ModerationResult", "PendingPostResponse",
    "MeResponse", "PseudonymAvailability", "PseudonymUpdate",
    "UserDetailResponse", "UserResponse",
    "HotQuestionResponse", "QuestionCreate", "QuestionCreated",
    "QuestionDetailResponse", "QuestionResponse", "SearchResultResponse",
    "AutoApproveUpdate", "GlobalSettingsResponse",
    "CommunityStatsResponse",
    "TagResponse",
    "MyVoteResponse", "VoteCreate", "VoteResponse",
]
