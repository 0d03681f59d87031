# tests/v1/test_search.py
"""Tests for question search ranking."""

from datetime import timedelta

from fastapi import status

from campus_qa.db.time import utcnow
from campus_qa.models import Tag
from campus_qa.models.status import POST_STATUS_PENDING, POST_STATUS_REJECTED
from campus_qa.services.search import search_questions

FILLER = "Some context about the course and what I have already tried so far."


def test_blank_query_returns_nothing(db_session, question) -> None:
    assert search_questions(db_session, "") == []
    assert search_questions(db_session, "   ") == []


def test_exact_title_outranks_substring(db_session, author, make_question) -> None:
    partial = make_question(author, title="Recursion basics for beginners", content=FILLER)
    exact = make_question(author, title="Recursion", content=FILLER)

    results = search_questions(db_session, "recursion")

    assert [r.question.id for r in results] == [exact.id, partial.id]
    assert [r.relevance_score for r in results] == [100, 50]


def test_content_and_tag_matches_add_up(db_session, author, make_question) -> None:
    graphs = Tag(name="graphs")
    tagged = make_question(
        author,
        title="Shortest path question",
        content="Dijkstra on graphs keeps giving me the wrong distance.",
        tags=[graphs],
    )

    (result,) = search_questions(db_session, "GRAPHS")

    assert result.question.id == tagged.id
    assert result.relevance_score == 10 + 20


def test_only_approved_questions_match(db_session, author, make_question) -> None:
    make_question(author, title="Pending pointers question", status=POST_STATUS_PENDING)
    make_question(author, title="Rejected pointers question", status=POST_STATUS_REJECTED)
    visible = make_question(author, title="Approved pointers question")

    assert [r.question.id for r in search_questions(db_session, "pointers")] == [visible.id]


def test_equal_scores_keep_newest_first(db_session, author, make_question) -> None:
    now = utcnow()
    older = make_question(author, title="Heap sort question", content=FILLER, created_at=now - timedelta(days=2))
    newer = make_question(author, title="Heap sort doubt", content=FILLER, created_at=now - timedelta(hours=1))

    results = search_questions(db_session, "heap sort")

    assert [r.question.id for r in results] == [newer.id, older.id]


def test_wildcards_are_literal(db_session, author, make_question) -> None:
    make_question(author, title="Percent signs in format strings", content=FILLER)
    assert search_questions(db_session, "%") == []


def test_search_endpoint_limit(client, author, make_question) -> None:
    for n in range(3):
        make_question(author, title=f"Binary trees part {n}", content=FILLER)

    response = client.get("/api/v1/search", params={"q": "binary trees", "limit": 2})

    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert len(body) == 2
    assert all(item["relevance_score"] == 50 for item in body)
    assert "email" not in body[0]["question"]["author"]


def test_search_endpoint_empty_query(client, question) -> None:
    response = client.get("/api/v1/search", params={"q": ""})
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == []
