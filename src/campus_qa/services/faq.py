"""AI FAQ generation from well-voted question/answer pairs.

This module provides:

- FaqClient, a thin wrapper over the Groq OpenAI-compatible chat
  completions endpoint that turns one Q&A pair into a generic FAQ entry
- generate_faqs, the scheduled job selecting eligible questions and
  persisting one AiFaq row per source question
- read helpers for the FAQ widget
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, Protocol

import httpx
from sqlalchemy import select
from sqlalchemy.orm import Session

from campus_qa.core.settings import settings
from campus_qa.db.time import as_utc, utcnow
from campus_qa.models import AiFaq, Answer, Question, Vote
from campus_qa.models.status import POST_STATUS_APPROVED
from campus_qa.services.aggregates import answer_vote_scores
from campus_qa.services.errors import FaqGenerationError

logger = logging.getLogger(__name__)

RECENT_FAQ_LIMIT = 5
COMPLETION_TEMPERATURE = 0.3
COMPLETION_MAX_TOKENS = 1024

SYSTEM_PROMPT = """You are a technical documentation expert. Your task is to summarize question-answer pairs into clean, generic FAQ entries.

Rules:
1. Rephrase the question to be more generic and broadly applicable
2. Summarize the answer concisely while preserving key technical details
3. Extract 2-4 relevant tags (lowercase, single words or hyphenated phrases)
4. Return ONLY valid JSON in this exact format: {"question": "...", "answer": "...", "tags": ["tag1", "tag2"]}
5. Keep the FAQ professional and technical"""


@dataclass(frozen=True)
class FaqInput:
    question_title: str
    question_content: str
    answer_content: str
    question_id: int


@dataclass(frozen=True)
class FaqOutput:
    question: str
    answer: str
    tags: list[str]


@dataclass(frozen=True)
class FaqConfig:
    """Immutable configuration for the LLM collaborator."""

    api_key: str | None
    base_url: str
    model: str
    timeout_seconds: float


@dataclass
class FaqRunResult:
    generated: int = 0
    eligible: int = 0
    errors: list[str] = field(default_factory=list)


class FaqGenerator(Protocol):
    def generate(self, faq_input: FaqInput) -> FaqOutput: ...


def load_faq_config() -> FaqConfig:
    """Build configuration object from global settings."""
    return FaqConfig(
        api_key=settings.groq_api_key,
        base_url=settings.groq_base_url,
        model=settings.groq_model,
        timeout_seconds=float(settings.groq_timeout_seconds),
    )


def build_user_prompt(faq_input: FaqInput) -> str:
    return (
        f"Question: {faq_input.question_title}\n\n"
        f"{faq_input.question_content}\n\n"
        f"Answer: {faq_input.answer_content}\n\n"
        "Generate a generic FAQ entry from this Q&A pair."
    )


def parse_completion(payload: Any) -> FaqOutput:
    """Extract and validate the FAQ JSON from a chat completion body."""
    try:
        content = payload["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError) as exc:
        raise FaqGenerationError("No content in LLM response") from exc
    if not content:
        raise FaqGenerationError("No content in LLM response")

    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        raise FaqGenerationError("LLM response is not valid JSON") from exc

    if not isinstance(data, dict):
        raise FaqGenerationError("Invalid FAQ output structure")
    question = data.get("question")
    answer = data.get("answer")
    tags = data.get("tags")
    if not question or not answer or not isinstance(tags, list):
        raise FaqGenerationError("Invalid FAQ output structure")

    return FaqOutput(
        question=str(question),
        answer=str(answer),
        tags=[str(tag) for tag in tags],
    )


class FaqClient:
    """HTTP client for the Groq chat completions API."""

    def __init__(
        self,
        config: FaqConfig | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.config = config or load_faq_config()
        self._transport = transport
        self._client: httpx.Client | None = None

    @property
    def enabled(self) -> bool:
        return bool(self.config.api_key)

    def _ensure_client(self) -> httpx.Client:
        if not self.enabled:
            raise FaqGenerationError("GROQ_API_KEY is not configured")
        if self._client is None:
            self._client = httpx.Client(
                base_url=self.config.base_url,
                timeout=httpx.Timeout(self.config.timeout_seconds),
                headers={"Authorization": f"Bearer {self.config.api_key}"},
                transport=self._transport,
            )
        return self._client

    def generate(self, faq_input: FaqInput) -> FaqOutput:
        """Ask the model for a generic FAQ entry built from one Q&A pair.

        Raises:
            FaqGenerationError: On transport failures, non-2xx responses or a
                payload missing ``question``, ``answer`` or ``tags``.
        """
        client = self._ensure_client()
        body = {
            "model": self.config.model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": build_user_prompt(faq_input)},
            ],
            "temperature": COMPLETION_TEMPERATURE,
            "max_tokens": COMPLETION_MAX_TOKENS,
            "response_format": {"type": "json_object"},
        }
        try:
            response = client.post("/chat/completions", json=body)
        except httpx.HTTPError as exc:
            raise FaqGenerationError(f"LLM request failed: {exc}") from exc

        if response.status_code == httpx.codes.TOO_MANY_REQUESTS:
            logger.error("Groq API rate limit exceeded")
        if response.is_error:
            raise FaqGenerationError(f"LLM responded with {response.status_code}")

        try:
            payload = response.json()
        except ValueError as exc:
            raise FaqGenerationError("LLM response is not valid JSON") from exc
        return parse_completion(payload)

    def close(self) -> None:
        """Clean up underlying HTTP client resources."""
        if self._client is not None:
            self._client.close()
            self._client = None


def eligible_questions(db: Session, now: datetime | None = None) -> list[Question]:
    """Return recent APPROVED questions with a positively voted APPROVED answer."""
    current = as_utc(now or utcnow())
    since = current - timedelta(hours=settings.faq_lookback_hours)
    upvoted = select(Vote.answer_id).where(Vote.answer_id.is_not(None), Vote.value > 0)
    positive = Question.answers.any(
        (Answer.status == POST_STATUS_APPROVED) & Answer.id.in_(upvoted)
    )
    return (
        db.query(Question)
        .filter(
            Question.status == POST_STATUS_APPROVED,
            Question.created_at >= since,
            positive,
        )
        .order_by(Question.created_at.asc(), Question.id.asc())
        .limit(settings.faq_batch_size)
        .all()
    )


def best_answer(db: Session, question: Question) -> tuple[Answer, int] | None:
    """Return the highest-scored APPROVED answer, newest first on ties."""
    answers = (
        db.query(Answer)
        .filter(Answer.question_id == question.id, Answer.status == POST_STATUS_APPROVED)
        .order_by(Answer.created_at.desc(), Answer.id.desc())
        .all()
    )
    if not answers:
        return None
    scores = answer_vote_scores(db, [answer.id for answer in answers])
    best = max(answers, key=lambda answer: scores[answer.id])
    return best, scores[best.id]


def generate_faqs(db: Session, generator: FaqGenerator, now: datetime | None = None) -> FaqRunResult:
    """Summarise eligible Q&A pairs into FAQ entries.

    A question already used as a source is skipped. Failures on one
    question are recorded and the run moves on to the next.
    """
    questions = eligible_questions(db, now)
    result = FaqRunResult(eligible=len(questions))

    for question in questions:
        try:
            picked = best_answer(db, question)
            if picked is None or picked[1] <= 0:
                continue
            answer, _ = picked

            exists = db.query(AiFaq.id).filter(AiFaq.source_question_id == question.id).first()
            if exists is not None:
                continue

            output = generator.generate(
                FaqInput(
                    question_title=question.title,
                    question_content=question.content,
                    answer_content=answer.content,
                    question_id=question.id,
                )
            )
            db.add(
                AiFaq(
                    topic=", ".join(output.tags),
                    question=output.question,
                    answer=output.answer,
                    source_question_id=question.id,
                )
            )
            db.commit()
            result.generated += 1
        except FaqGenerationError as exc:
            logger.warning("FAQ generation failed for question %s: %s", question.id, exc.detail)
            result.errors.append(f"Failed to generate FAQ for question {question.id}")
        except Exception:
            db.rollback()
            logger.error("Error processing question %s", question.id, exc_info=True)
            result.errors.append(f"Error processing question {question.id}")

    logger.info("FAQ run generated %s of %s eligible", result.generated, result.eligible)
    return result


def recent_faqs(db: Session, limit: int = RECENT_FAQ_LIMIT) -> list[AiFaq]:
    return db.query(AiFaq).order_by(AiFaq.generated_at.desc(), AiFaq.id.desc()).limit(limit).all()


def faq_count(db: Session) -> int:
    return db.query(AiFaq).count()


_faq_client: FaqClient | None = None


def get_faq_client() -> FaqClient:
    """Return a process-wide FAQ client built from settings."""
    global _faq_client
    if _faq_client is None:
        _faq_client = FaqClient()
    return _faq_client
