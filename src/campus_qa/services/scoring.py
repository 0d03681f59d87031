"""Pure ranking functions for the hot list and search results."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timedelta
from typing import Final

from campus_qa.db.time import as_utc, utcnow

VIEW_WEIGHT: Final[float] = 0.1
VOTE_WEIGHT: Final[float] = 2.0
ANSWER_WEIGHT: Final[float] = 5.0

FRESH_WINDOW: Final[timedelta] = timedelta(hours=24)
RECENT_WINDOW: Final[timedelta] = timedelta(hours=48)
FRESH_BONUS: Final[float] = 10.0
RECENT_BONUS: Final[float] = 5.0

EXACT_TITLE_SCORE: Final[int] = 100
TITLE_CONTAINS_SCORE: Final[int] = 50
TITLE_PREFIX_SCORE: Final[int] = 30
CONTENT_CONTAINS_SCORE: Final[int] = 10
TAG_MATCH_SCORE: Final[int] = 20


def recency_bonus(created_at: datetime, now: datetime | None = None) -> float:
    """Return 10 for content at most 24h old, 5 up to 48h, otherwise 0."""
    age = as_utc(now or utcnow()) - as_utc(created_at)
    if age <= FRESH_WINDOW:
        return FRESH_BONUS
    if age <= RECENT_WINDOW:
        return RECENT_BONUS
    return 0.0


def hot_score(
    views: int,
    vote_score: int,
    answer_count: int,
    created_at: datetime,
    now: datetime | None = None,
) -> float:
    """Combine views, votes, answers and recency into a trending score.

    ``views * 0.1 + vote_score * 2 + answer_count * 5 + recency_bonus``
    """
    return (
        views * VIEW_WEIGHT
        + vote_score * VOTE_WEIGHT
        + answer_count * ANSWER_WEIGHT
        + recency_bonus(created_at, now)
    )


def relevance_score(title: str, content: str, tag_names: Iterable[str], term: str) -> int:
    """Score how strongly a question matches a search term.

    Title matches are mutually exclusive (exact 100, substring 50, prefix
    30); a content match adds 10 and every matching tag adds 20.
    """
    needle = term.lower()
    lowered_title = title.lower()

    score = 0
    if lowered_title == needle:
        score += EXACT_TITLE_SCORE
    elif needle in lowered_title:
        score += TITLE_CONTAINS_SCORE
    elif lowered_title.startswith(needle):
        score += TITLE_PREFIX_SCORE

    if needle in content.lower():
        score += CONTENT_CONTAINS_SCORE

    score += TAG_MATCH_SCORE * sum(1 for name in tag_names if needle in name.lower())
    return score
