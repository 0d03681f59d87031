# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator
from itertools import count
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from jose import jwt
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("PYTEST_RUNNING", "true")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("AUTH_JWT_SECRET", "test-identity-secret")

from campus_qa.core.settings import settings
from campus_qa.db.session import Base
from campus_qa.db.session import get_db as app_get_session
from campus_qa.main import app as fastapi_app
from campus_qa.models import Answer, Profile, Question, Vote
from campus_qa.models.status import POST_STATUS_APPROVED, ROLE_MODERATOR, ROLE_STUDENT
from campus_qa.services.hot_questions import hot_questions_cache

TEST_DB_URL = "sqlite://"

_SUBJECT_COUNTER = count(1)

QUESTION_TITLE = "How do I reverse a linked list in Python?"
QUESTION_CONTENT = (
    "I tried iterating over the nodes but I keep losing the reference "
    "to the next node halfway through the loop."
)
ANSWER_CONTENT = (
    "Keep three pointers called previous, current and following, and move "
    "them forward together on every step of the loop."
)


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()

        # Ensure each test sees a clean database even though services commit.
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture(autouse=True)
def reset_hot_cache() -> Iterator[None]:
    hot_questions_cache.invalidate()
    yield
    hot_questions_cache.invalidate()


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


def make_token(subject: str, email: str | None = None, **claims: Any) -> str:
    """Mint a token the way the identity provider does."""
    payload: dict[str, Any] = {"sub": subject, **claims}
    if email is not None:
        payload["email"] = email
    return jwt.encode(payload, settings.auth_jwt_secret, algorithm=settings.auth_jwt_algorithm)


def auth_headers(profile: Profile) -> dict[str, str]:
    return {"Authorization": f"Bearer {make_token(profile.user_id, profile.email)}"}


@pytest.fixture()
def make_profile(db_session: Session) -> Callable[..., Profile]:
    """Return a factory persisting profiles with sensible defaults."""

    def _make(
        pseudonym: str | None = None,
        role: str = ROLE_STUDENT,
        reputation: int = 0,
    ) -> Profile:
        n = next(_SUBJECT_COUNTER)
        profile = Profile(
            user_id=f"user-{n}",
            email=f"user{n}@campus.example",
            pseudonym=pseudonym,
            role=role,
            reputation=reputation,
        )
        db_session.add(profile)
        db_session.commit()
        db_session.refresh(profile)
        return profile

    return _make


@pytest.fixture()
def author(make_profile: Callable[..., Profile]) -> Profile:
    return make_profile("ada_author")


@pytest.fixture()
def reader(make_profile: Callable[..., Profile]) -> Profile:
    return make_profile("bo_reader")


@pytest.fixture()
def moderator(make_profile: Callable[..., Profile]) -> Profile:
    return make_profile("mod_mia", role=ROLE_MODERATOR)


@pytest.fixture()
def make_question(db_session: Session) -> Callable[..., Question]:
    """Return a factory inserting questions directly, bypassing validation."""

    def _make(
        owner: Profile,
        title: str = QUESTION_TITLE,
        content: str = QUESTION_CONTENT,
        status: str = POST_STATUS_APPROVED,
        **fields: Any,
    ) -> Question:
        question = Question(title=title, content=content, status=status, author_id=owner.id, **fields)
        db_session.add(question)
        db_session.commit()
        db_session.refresh(question)
        return question

    return _make


@pytest.fixture()
def make_answer(db_session: Session) -> Callable[..., Answer]:
    def _make(
        question: Question,
        owner: Profile,
        content: str = ANSWER_CONTENT,
        status: str = POST_STATUS_APPROVED,
        **fields: Any,
    ) -> Answer:
        answer = Answer(
            question_id=question.id,
            author_id=owner.id,
            content=content,
            status=status,
            **fields,
        )
        db_session.add(answer)
        db_session.commit()
        db_session.refresh(answer)
        return answer

    return _make


@pytest.fixture()
def add_vote(db_session: Session) -> Callable[..., Vote]:
    """Insert a raw ledger row without touching reputation."""

    def _add(voter: Profile, value: int = 1, question: Question | None = None, answer: Answer | None = None) -> Vote:
        vote = Vote(
            profile_id=voter.id,
            value=value,
            question_id=question.id if question else None,
            answer_id=answer.id if answer else None,
        )
        db_session.add(vote)
        db_session.commit()
        return vote

    return _add


@pytest.fixture()
def question(make_question: Callable[..., Question], author: Profile) -> Question:
    return make_question(author)


@pytest.fixture()
def headers_for() -> Callable[[Profile], dict[str, str]]:
    """Return a helper building bearer headers for a profile."""
    return auth_headers


@pytest.fixture()
def mint_token() -> Callable[..., str]:
    """Return the identity provider token minter."""
    return make_token
