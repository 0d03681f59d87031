# tests/v1/test_auth.py
"""Tests for bearer token handling and profile bootstrap."""

from fastapi import status

from campus_qa.core.settings import settings
from campus_qa.models import Profile


def test_first_request_creates_profile(client, db_session, mint_token) -> None:
    token = mint_token("idp|new-student", "new@campus.example")
    response = client.get("/api/v1/profiles/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert body["pseudonym"] is None
    assert body["reputation"] == 0
    assert body["role"] == "STUDENT"
    assert "email" not in body
    assert db_session.query(Profile).filter(Profile.user_id == "idp|new-student").count() == 1


def test_second_request_reuses_profile(client, db_session, mint_token) -> None:
    headers = {"Authorization": f"Bearer {mint_token('idp|repeat')}"}
    first = client.get("/api/v1/profiles/me", headers=headers).json()
    second = client.get("/api/v1/profiles/me", headers=headers).json()

    assert first["id"] == second["id"]
    assert db_session.query(Profile).count() == 1


def test_missing_token_is_unauthorized(client) -> None:
    response = client.get("/api/v1/profiles/me")
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json() == {"detail": "Not authenticated"}
    assert response.headers["www-authenticate"] == "Bearer"


def test_bad_signature_is_unauthorized(client) -> None:
    from jose import jwt

    token = jwt.encode({"sub": "idp|forged"}, "some-other-secret", algorithm="HS256")
    response = client.get("/api/v1/profiles/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["detail"] == "Could not validate credentials"
    assert response.headers["www-authenticate"] == "Bearer"


def test_token_without_subject_is_unauthorized(client) -> None:
    from jose import jwt

    token = jwt.encode({"email": "x@campus.example"}, settings.auth_jwt_secret, algorithm="HS256")
    response = client.get("/api/v1/profiles/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_email_domain_restriction(client, monkeypatch, mint_token) -> None:
    monkeypatch.setattr(settings, "allowed_email_domain", "campus.example")

    outsider = mint_token("idp|outsider", "someone@elsewhere.example")
    response = client.get("/api/v1/profiles/me", headers={"Authorization": f"Bearer {outsider}"})
    assert response.status_code == status.HTTP_403_FORBIDDEN

    insider = mint_token("idp|insider", "someone@campus.example")
    response = client.get("/api/v1/profiles/me", headers={"Authorization": f"Bearer {insider}"})
    assert response.status_code == status.HTTP_200_OK


def test_anonymous_reads_are_allowed(client) -> None:
    response = client.get("/api/v1/questions")
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == []
