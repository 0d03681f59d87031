# tests/v1/test_tags.py
"""Tests for tag listing and tag feeds."""

import pytest
from fastapi import status

from campus_qa.models import Tag
from campus_qa.models.status import POST_STATUS_PENDING
from campus_qa.services.errors import ContentValidationError
from campus_qa.services.tags import normalize_tag_names, upsert_tags


def test_normalize_trims_lowercases_and_dedupes() -> None:
    assert normalize_tag_names([" Python ", "python", "", "SQL", "  "]) == ["python", "sql"]


def test_oversized_tag_rejected() -> None:
    with pytest.raises(ContentValidationError, match="64 characters"):
        normalize_tag_names(["a" * 64 + "x", "a" * 64 + "y"])


def test_oversized_tag_rejected_over_http(client, author, headers_for) -> None:
    response = client.post(
        "/api/v1/questions",
        json={
            "title": "How do I name very specific topics?",
            "content": "I want to tag my question with a long and precise topic name here.",
            "tags": ["t" * 65],
        },
        headers=headers_for(author),
    )
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    assert response.json()["detail"] == "Tags must be 64 characters or less"


def test_upsert_reuses_existing_rows(db_session) -> None:
    existing = Tag(name="python")
    db_session.add(existing)
    db_session.commit()

    tags = upsert_tags(db_session, ["PYTHON", "sql"])
    db_session.commit()

    assert tags[0].id == existing.id
    assert [tag.name for tag in tags] == ["python", "sql"]
    assert db_session.query(Tag).count() == 2


def test_list_tags_counts_approved_questions(client, author, make_question) -> None:
    python = Tag(name="python")
    algorithms = Tag(name="algorithms")
    make_question(author, tags=[python, algorithms])
    make_question(author, title="Another Python question here", tags=[python])
    make_question(author, title="Pending Python question", status=POST_STATUS_PENDING, tags=[python])

    response = client.get("/api/v1/tags")

    assert response.status_code == status.HTTP_200_OK
    counts = {tag["name"]: tag["question_count"] for tag in response.json()}
    assert counts == {"algorithms": 1, "python": 2}
    assert [tag["name"] for tag in response.json()] == ["algorithms", "python"]


def test_popular_tags_skip_unused(client, author, make_question, db_session) -> None:
    db_session.add(Tag(name="unused"))
    db_session.commit()
    make_question(author, tags=[Tag(name="python")])

    response = client.get("/api/v1/tags/popular")

    assert [tag["name"] for tag in response.json()] == ["python"]


def test_read_tag_case_insensitive(client, author, make_question) -> None:
    make_question(author, tags=[Tag(name="python")])

    response = client.get("/api/v1/tags/Python")

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["question_count"] == 1


def test_unknown_tag_is_404(client) -> None:
    response = client.get("/api/v1/tags/nonexistent")
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["detail"] == "Tag not found"


def test_questions_by_tag(client, author, make_question) -> None:
    python = Tag(name="python")
    tagged = make_question(author, tags=[python])
    make_question(author, title="Untagged question about Java")
    make_question(author, title="Pending tagged question", status=POST_STATUS_PENDING, tags=[python])

    response = client.get("/api/v1/tags/python/questions")

    assert response.status_code == status.HTTP_200_OK
    assert [q["id"] for q in response.json()] == [tagged.id]
    assert response.json()[0]["tags"][0]["name"] == "python"
