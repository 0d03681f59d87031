# tests/v1/test_settings.py
"""Tests for the runtime auto-approve toggle."""

from fastapi import status

from campus_qa.models.status import POST_STATUS_APPROVED
from campus_qa.services.lifecycle import get_auto_approve


def test_auto_approve_defaults_off(client, db_session) -> None:
    response = client.get("/api/v1/settings")

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["auto_approve_enabled"] is False
    assert get_auto_approve(db_session) is False


def test_students_cannot_toggle(client, reader, headers_for) -> None:
    response = client.put(
        "/api/v1/settings/auto-approve",
        json={"enabled": True},
        headers=headers_for(reader),
    )
    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert response.json()["detail"] == "Only moderators can change settings"


def test_toggle_requires_authentication(client) -> None:
    response = client.put("/api/v1/settings/auto-approve", json={"enabled": True})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_moderator_enables_auto_approve(client, moderator, author, headers_for) -> None:
    response = client.put(
        "/api/v1/settings/auto-approve",
        json={"enabled": True},
        headers=headers_for(moderator),
    )
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["auto_approve_enabled"] is True

    created = client.post(
        "/api/v1/questions",
        json={
            "title": "How does binary search handle duplicates?",
            "content": "When the array has repeated values I am not sure which index comes back.",
            "tags": ["algorithms"],
        },
        headers=headers_for(author),
    )
    assert created.status_code == status.HTTP_201_CREATED
    assert created.json()["status"] == POST_STATUS_APPROVED


def test_toggle_back_off(client, db_session, moderator, headers_for) -> None:
    for enabled in (True, False):
        client.put(
            "/api/v1/settings/auto-approve",
            json={"enabled": enabled},
            headers=headers_for(moderator),
        )
    assert get_auto_approve(db_session) is False
