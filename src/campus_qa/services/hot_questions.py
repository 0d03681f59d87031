"""Trending questions of the last week, cached in process memory."""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta

from sqlalchemy.orm import Session

from campus_qa.core.settings import settings
from campus_qa.db.time import as_utc, utcnow
from campus_qa.models import Question
from campus_qa.models.status import POST_STATUS_APPROVED
from campus_qa.services.aggregates import QuestionSummary, summarize_questions
from campus_qa.services.scoring import hot_score

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HotQuestion:
    question: QuestionSummary
    hot_score: float


def compute_hot_questions(
    db: Session,
    limit: int,
    now: datetime | None = None,
) -> list[HotQuestion]:
    """Rank recent APPROVED questions by :func:`hot_score` and keep the top ``limit``."""
    current = as_utc(now or utcnow())
    since = current - timedelta(days=settings.hot_window_days)
    recent = (
        db.query(Question)
        .filter(Question.status == POST_STATUS_APPROVED, Question.created_at >= since)
        .order_by(Question.created_at.desc())
        .limit(settings.hot_fetch_limit)
        .all()
    )
    ranked = [
        HotQuestion(
            question=summary,
            hot_score=hot_score(
                summary.views,
                summary.vote_score,
                summary.answer_count,
                summary.created_at,
                current,
            ),
        )
        for summary in summarize_questions(db, recent)
    ]
    ranked.sort(key=lambda item: item.hot_score, reverse=True)
    return ranked[:limit]


class HotQuestionsCache:
    """Snapshot of the hot list with a time-to-live.

    The lock only guards the snapshot swap. Two callers finding the cache
    cold may both recompute; the last one to finish wins.
    """

    def __init__(self, ttl_seconds: float, clock: Callable[[], float] = time.monotonic) -> None:
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._lock = threading.Lock()
        self._snapshot: list[HotQuestion] | None = None
        self._stored_at = 0.0

    def _fresh(self) -> list[HotQuestion] | None:
        with self._lock:
            if self._snapshot is None:
                return None
            if self._clock() - self._stored_at >= self.ttl_seconds:
                return None
            return self._snapshot

    def store(self, snapshot: list[HotQuestion]) -> None:
        with self._lock:
            self._snapshot = snapshot
            self._stored_at = self._clock()

    def invalidate(self) -> None:
        with self._lock:
            self._snapshot = None
            self._stored_at = 0.0

    def get(self, db: Session, limit: int = 5) -> list[HotQuestion]:
        """Return up to ``limit`` hot questions, recomputing when stale."""
        snapshot = self._fresh()
        if snapshot is None:
            logger.debug("Hot questions cache miss; recomputing")
            snapshot = compute_hot_questions(db, settings.hot_fetch_limit)
            self.store(snapshot)
        return snapshot[:limit]


hot_questions_cache = HotQuestionsCache(ttl_seconds=settings.hot_cache_ttl_seconds)
