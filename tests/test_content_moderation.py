# tests/test_content_moderation.py
"""Tests for the content quality checks."""

import pytest

from campus_qa.services.content_moderation import (
    validate_answer_content,
    validate_question_content,
)

GOOD_TITLE = "How do I read a CSV file with pandas?"
GOOD_CONTENT = "I have a file with a header row and want each column as a list."


def test_valid_question_passes() -> None:
    result = validate_question_content(GOOD_TITLE, GOOD_CONTENT)
    assert result.is_valid
    assert result.reason is None
    assert result.suggestions == []


@pytest.mark.parametrize(
    ("title", "content", "reason"),
    [
        ("Too short", GOOD_CONTENT, "Title is too short"),
        ("x" * 301, GOOD_CONTENT, "Title is too long"),
        (GOOD_TITLE, "Short body", "Content is too short"),
        (GOOD_TITLE, "supercalifragilistic expialidocious", "Content has too few words"),
        (GOOD_TITLE, "Click here to claim free money from the casino today", "Content contains spam keywords"),
        (GOOD_TITLE, "aaaaaaaaaaaaaaaaaaaaaaaaaaaaa", "Content has too few words"),
        ("HOW DO I FIX THIS BUG", GOOD_CONTENT, "Title contains too many uppercase words"),
    ],
)
def test_question_rejections(title: str, content: str, reason: str) -> None:
    result = validate_question_content(title, content)
    assert not result.is_valid
    assert result.reason == reason
    assert result.suggestions


def test_repeated_characters_are_garbage() -> None:
    result = validate_question_content("aaaaaaaaaaaaaaaa", GOOD_CONTENT)
    assert result.reason == "Content contains invalid patterns"


def test_three_urls_in_a_row_are_garbage() -> None:
    content = "see these links please https://a.example https://b.example https://c.example"
    result = validate_question_content(GOOD_TITLE, content)
    assert result.reason == "Content contains invalid patterns"


def test_too_many_urls_in_question() -> None:
    content = (
        "first https://a.example then https://b.example and https://c.example "
        "also https://d.example"
    )
    result = validate_question_content(GOOD_TITLE, content)
    assert result.reason == "Content contains too many URLs"


def test_answer_allows_more_urls_than_question() -> None:
    content = (
        "first https://a.example then https://b.example and https://c.example "
        "also https://d.example"
    )
    assert validate_answer_content(content).is_valid


def test_short_answer_rejected() -> None:
    result = validate_answer_content("Use a loop.")
    assert not result.is_valid
    assert result.reason == "Answer is too short"


def test_spam_answer_rejected() -> None:
    result = validate_answer_content("You are the lucky winner of a brand new laptop today")
    assert result.reason == "Content contains spam keywords"
