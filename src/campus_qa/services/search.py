"""Full-text-ish question search ranked by :func:`relevance_score`."""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy import or_
from sqlalchemy.orm import Session

from campus_qa.core.settings import settings
from campus_qa.models import Question, Tag
from campus_qa.models.status import POST_STATUS_APPROVED
from campus_qa.services.aggregates import QuestionSummary, summarize_questions
from campus_qa.services.scoring import relevance_score


@dataclass(frozen=True)
class SearchResult:
    question: QuestionSummary
    relevance_score: int


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def search_questions(db: Session, query: str, limit: int | None = None) -> list[SearchResult]:
    """Return APPROVED questions matching ``query``, most relevant first.

    Matching is a case-insensitive substring test on the title, the content
    and every tag name. Candidates are fetched newest first and capped;
    equal scores keep that order.
    """
    term = query.strip()
    if not term:
        return []

    pattern = f"%{_escape_like(term)}%"
    candidates = (
        db.query(Question)
        .filter(
            Question.status == POST_STATUS_APPROVED,
            or_(
                Question.title.ilike(pattern, escape="\\"),
                Question.content.ilike(pattern, escape="\\"),
                Question.tags.any(Tag.name.ilike(pattern, escape="\\")),
            ),
        )
        .order_by(Question.created_at.desc(), Question.id.desc())
        .limit(settings.search_fetch_limit)
        .all()
    )

    results = [
        SearchResult(
            question=summary,
            relevance_score=relevance_score(
                summary.title,
                summary.content,
                [tag.name for tag in summary.tags],
                term,
            ),
        )
        for summary in summarize_questions(db, candidates)
    ]
    # sorted() is stable, so ties keep fetch order.
    results = sorted(results, key=lambda result: result.relevance_score, reverse=True)
    if limit is not None:
        results = results[:limit]
    return results
