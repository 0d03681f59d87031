"""Content quality checks run before any question or answer is stored.

The checks are keyword and pattern based; they reject obvious spam and
garbage and hand back a reason plus suggestions for the author.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Final

SPAM_KEYWORDS: Final[tuple[str, ...]] = (
    "viagra",
    "cialis",
    "casino",
    "lottery",
    "winner",
    "click here",
    "buy now",
    "limited offer",
    "act now",
    "free money",
    "make money fast",
    "work from home",
    "nigerian prince",
    "inheritance",
    "congratulations you won",
)

TRASH_PATTERNS: Final[tuple[re.Pattern[str], ...]] = (
    re.compile(r"^(.)\1{10,}$", re.IGNORECASE),  # "aaaaaaaaaaa"
    re.compile(r"^[^a-zA-Z0-9\s]{20,}$"),
    re.compile(r"https?://\S+\s+https?://\S+\s+https?://\S+"),
)

URL_PATTERN: Final[re.Pattern[str]] = re.compile(r"https?://\S+")

MIN_TITLE_LENGTH: Final[int] = 10
MAX_TITLE_LENGTH: Final[int] = 300
MIN_CONTENT_LENGTH: Final[int] = 20
MAX_CONTENT_LENGTH: Final[int] = 30_000
MIN_WORD_COUNT: Final[int] = 5
MAX_QUESTION_URLS: Final[int] = 3
MAX_ANSWER_URLS: Final[int] = 5
CAPS_WORD_RATIO: Final[float] = 0.5


@dataclass(frozen=True)
class ContentValidationResult:
    """Outcome of a content check."""

    is_valid: bool
    reason: str | None = None
    suggestions: list[str] = field(default_factory=list)


_VALID = ContentValidationResult(is_valid=True)


def _reject(reason: str, *suggestions: str) -> ContentValidationResult:
    return ContentValidationResult(is_valid=False, reason=reason, suggestions=list(suggestions))


def _word_count(text: str) -> int:
    return len(text.split())


def _contains_spam(text: str) -> bool:
    lowered = text.lower()
    return any(keyword in lowered for keyword in SPAM_KEYWORDS)


def _matches_trash(*texts: str) -> bool:
    return any(pattern.search(text) for pattern in TRASH_PATTERNS for text in texts)


def _is_shouting(title: str) -> bool:
    words = title.split()
    caps = [word for word in words if len(word) > 2 and word == word.upper()]
    return len(caps) > len(words) * CAPS_WORD_RATIO


def validate_question_content(title: str, content: str) -> ContentValidationResult:
    """Validate a question title and body for quality and spam."""
    if len(title) < MIN_TITLE_LENGTH:
        return _reject(
            "Title is too short",
            "Please provide a more descriptive title (at least 10 characters)",
        )
    if len(title) > MAX_TITLE_LENGTH:
        return _reject("Title is too long", "Please keep your title under 300 characters")

    if len(content) < MIN_CONTENT_LENGTH:
        return _reject(
            "Content is too short",
            "Please provide more details about your question (at least 20 characters)",
            "Include what you have tried and what specific help you need",
        )
    if len(content) > MAX_CONTENT_LENGTH:
        return _reject("Content is too long", "Please keep your content under 30,000 characters")

    if _word_count(content) < MIN_WORD_COUNT:
        return _reject(
            "Content has too few words",
            "Please write at least 5 words to describe your question",
        )

    if _contains_spam(f"{title} {content}"):
        return _reject(
            "Content contains spam keywords",
            "Please remove promotional or spam content from your question",
        )

    if _matches_trash(title, content):
        return _reject(
            "Content contains invalid patterns",
            "Please avoid repeated characters or excessive special characters",
            "Write meaningful content that helps others understand your question",
        )

    if _is_shouting(title):
        return _reject(
            "Title contains too many uppercase words",
            "Please use normal capitalization in your title",
        )

    if len(URL_PATTERN.findall(content)) > MAX_QUESTION_URLS:
        return _reject(
            "Content contains too many URLs",
            "Please limit URLs to 3 or fewer and focus on your question",
        )

    return _VALID


def validate_answer_content(content: str) -> ContentValidationResult:
    """Validate an answer body for quality and spam."""
    if len(content) < MIN_CONTENT_LENGTH:
        return _reject(
            "Answer is too short",
            "Please provide a more detailed answer (at least 20 characters)",
        )
    if len(content) > MAX_CONTENT_LENGTH:
        return _reject("Answer is too long", "Please keep your answer under 30,000 characters")

    if _word_count(content) < MIN_WORD_COUNT:
        return _reject(
            "Answer has too few words",
            "Please write at least 5 words to provide a helpful answer",
        )

    if _contains_spam(content):
        return _reject(
            "Content contains spam keywords",
            "Please remove promotional or spam content from your answer",
        )

    if _matches_trash(content):
        return _reject(
            "Content contains invalid patterns",
            "Please avoid repeated characters or excessive special characters",
            "Write meaningful content that helps answer the question",
        )

    if len(URL_PATTERN.findall(content)) > MAX_ANSWER_URLS:
        return _reject(
            "Content contains too many URLs",
            "Please limit URLs to 5 or fewer and focus on your answer",
        )

    return _VALID
