# tests/v1/test_votes.py
"""Tests for the vote ledger and its reputation bookkeeping."""

import pytest
from fastapi import status

from campus_qa.models import Vote
from campus_qa.models.status import POST_STATUS_PENDING
from campus_qa.services.aggregates import question_vote_score
from campus_qa.services.errors import ForbiddenError, NotFoundError
from campus_qa.services.voting import VoteAction, cast_vote, classify, get_my_vote, reputation_delta


def _vote(client, headers, target_type, target_id, value):
    return client.post(
        "/api/v1/votes",
        json={"target_type": target_type, "target_id": target_id, "value": value},
        headers=headers,
    )


class TestClassifier:
    def test_no_existing_vote(self) -> None:
        assert classify(None, 1) is VoteAction.CREATED

    def test_same_value_removes(self) -> None:
        assert classify(-1, -1) is VoteAction.REMOVED

    def test_opposite_value_changes(self) -> None:
        assert classify(1, -1) is VoteAction.CHANGED

    @pytest.mark.parametrize(
        ("action", "target", "value", "existing", "expected"),
        [
            (VoteAction.CREATED, "question", 1, None, 5),
            (VoteAction.CREATED, "answer", 1, None, 10),
            (VoteAction.CREATED, "answer", -1, None, -2),
            (VoteAction.REMOVED, "question", 1, 1, -5),
            (VoteAction.REMOVED, "answer", -1, -1, 2),
            (VoteAction.CHANGED, "question", -1, 1, -7),
            (VoteAction.CHANGED, "answer", 1, -1, 12),
        ],
    )
    def test_reputation_deltas(self, action, target, value, existing, expected) -> None:
        assert reputation_delta(action, target, value, existing) == expected


def test_upvote_then_downvote_scenario(client, db_session, author, reader, question, headers_for) -> None:
    """B upvotes A's question, then switches to a downvote."""
    headers = headers_for(reader)

    first = _vote(client, headers, "question", question.id, 1)
    assert first.status_code == status.HTTP_200_OK
    assert first.json() == {"action": "created", "reputation_delta": 5, "new_score": 1}
    db_session.refresh(author)
    assert author.reputation == 5

    second = _vote(client, headers, "question", question.id, -1)
    assert second.json() == {"action": "changed", "reputation_delta": -7, "new_score": -1}
    db_session.refresh(author)
    assert author.reputation == -2


def test_repeat_vote_toggles_off(client, db_session, author, reader, question, headers_for) -> None:
    headers = headers_for(reader)

    first = _vote(client, headers, "question", question.id, 1).json()
    second = _vote(client, headers, "question", question.id, 1).json()

    assert second["action"] == "removed"
    assert second["reputation_delta"] == -first["reputation_delta"]
    assert second["new_score"] == 0
    db_session.refresh(author)
    assert author.reputation == 0
    assert db_session.query(Vote).count() == 0


def test_answer_vote_flip_from_down_to_up(client, db_session, author, reader, question, make_answer, headers_for) -> None:
    answer = make_answer(question, author)
    headers = headers_for(reader)

    _vote(client, headers, "answer", answer.id, -1)
    response = _vote(client, headers, "answer", answer.id, 1)

    assert response.json() == {"action": "changed", "reputation_delta": 12, "new_score": 1}
    db_session.refresh(author)
    assert author.reputation == 10


def test_score_matches_ledger_after_many_votes(db_session, author, make_profile, question) -> None:
    voters = [make_profile(f"voter_{n}") for n in range(4)]
    sequence = [(0, 1), (1, 1), (2, -1), (0, 1), (3, -1), (1, -1), (2, -1)]

    for index, value in sequence:
        result = cast_vote(db_session, voters[index], "question", question.id, value)
        stored = sum(vote.value for vote in db_session.query(Vote).filter(Vote.question_id == question.id))
        assert result.new_score == stored == question_vote_score(db_session, question.id)


def test_self_vote_is_forbidden(client, author, question, headers_for) -> None:
    response = _vote(client, headers_for(author), "question", question.id, 1)
    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert response.json()["detail"] == "You cannot vote on your own posts"


def test_vote_requires_pseudonym(db_session, make_profile, question) -> None:
    newcomer = make_profile()
    with pytest.raises(ForbiddenError):
        cast_vote(db_session, newcomer, "question", question.id, 1)


def test_vote_on_missing_target(client, reader, headers_for) -> None:
    response = _vote(client, headers_for(reader), "answer", 9999, 1)
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["detail"] == "Answer not found"


def test_vote_on_pending_question_is_not_found(db_session, author, reader, make_question) -> None:
    pending = make_question(author, status=POST_STATUS_PENDING)
    with pytest.raises(NotFoundError):
        cast_vote(db_session, reader, "question", pending.id, 1)


def test_vote_on_answer_under_pending_question(db_session, author, reader, make_question, make_answer) -> None:
    pending = make_question(author, status=POST_STATUS_PENDING)
    answer = make_answer(pending, author)

    with pytest.raises(NotFoundError, match="Answer not found"):
        cast_vote(db_session, reader, "answer", answer.id, 1)


def test_question_author_votes_under_own_pending_question(
    db_session, author, reader, make_question, make_answer
) -> None:
    pending = make_question(author, status=POST_STATUS_PENDING)
    answer = make_answer(pending, reader)

    result = cast_vote(db_session, author, "answer", answer.id, 1)

    assert result.action is VoteAction.CREATED
    assert result.new_score == 1


def test_vote_requires_authentication(client, question) -> None:
    response = client.post(
        "/api/v1/votes",
        json={"target_type": "question", "target_id": question.id, "value": 1},
    )
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_invalid_vote_value_is_rejected(client, reader, question, headers_for) -> None:
    response = _vote(client, headers_for(reader), "question", question.id, 2)
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_my_vote(client, db_session, reader, question, headers_for) -> None:
    headers = headers_for(reader)
    params = {"target_type": "question", "target_id": question.id}

    assert client.get("/api/v1/votes/mine", params=params, headers=headers).json() == {"value": 0}
    _vote(client, headers, "question", question.id, -1)
    assert client.get("/api/v1/votes/mine", params=params, headers=headers).json() == {"value": -1}
    assert get_my_vote(db_session, reader, "question", question.id) == -1
