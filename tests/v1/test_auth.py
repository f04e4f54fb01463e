# tests/v1/test_auth.py
"""Tests for authentication endpoints."""

from __future__ import annotations

from fastapi import status

from fan_archive.core.security import decode_access_token
from fan_archive.models import UserRole

REGISTER_URL = "/api/auth/register"
LOGIN_URL = "/api/auth/login"


def _register_payload(**overrides) -> dict:
    payload = {
        "email": "Writer@FanMail.com",
        "username": "writer",
        "password": "secret1",
        "firstName": "Wren",
    }
    payload.update(overrides)
    return payload


def test_register_user_success(client) -> None:
    """A fresh payload creates an account and returns a working token."""
    response = client.post(REGISTER_URL, json=_register_payload())
    assert response.status_code == status.HTTP_200_OK
    data = response.json()

    assert data["user"]["email"] == "writer@fanmail.com"
    assert data["user"]["username"] == "writer"
    assert data["user"]["role"] == "user"
    claims = decode_access_token(data["token"])
    assert claims["sub"] == data["user"]["id"]
    assert claims["role"] == "user"

    me = client.get("/api/auth/user", headers={"Authorization": f"Bearer {data['token']}"})
    assert me.status_code == status.HTTP_200_OK
    assert me.json()["firstName"] == "Wren"


def test_register_duplicate_email(client) -> None:
    assert client.post(REGISTER_URL, json=_register_payload()).status_code == 200

    response = client.post(REGISTER_URL, json=_register_payload(username="another"))
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json() == {"message": "Email already registered"}


def test_register_duplicate_username(client) -> None:
    assert client.post(REGISTER_URL, json=_register_payload()).status_code == 200

    response = client.post(REGISTER_URL, json=_register_payload(email="second@fanmail.com"))
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json() == {"message": "Username already taken"}


def test_register_validation_errors_list_fields(client) -> None:
    response = client.post(
        REGISTER_URL,
        json={"email": "not-an-email", "username": "ab", "password": "123"},
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    data = response.json()
    assert data["message"] == "Validation error"
    fields = {error["field"] for error in data["errors"]}
    assert {"email", "username", "password"} <= fields


def test_login_success(client, test_user) -> None:
    response = client.post(
        LOGIN_URL, json={"email": test_user.email, "password": "secret123"}
    )
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["user"]["id"] == test_user.id
    assert data["token"]


def test_login_email_is_case_insensitive(client, test_user) -> None:
    response = client.post(
        LOGIN_URL, json={"email": test_user.email.upper(), "password": "secret123"}
    )
    assert response.status_code == status.HTTP_200_OK


def test_login_wrong_password(client, test_user) -> None:
    response = client.post(LOGIN_URL, json={"email": test_user.email, "password": "wrong"})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json() == {"message": "Invalid credentials"}


def test_login_unknown_email(client) -> None:
    response = client.post(
        LOGIN_URL, json={"email": "nobody@fanmail.com", "password": "secret123"}
    )
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json() == {"message": "Invalid credentials"}


def test_login_banned_user(client, make_user) -> None:
    banned = make_user(banned=True)
    response = client.post(LOGIN_URL, json={"email": banned.email, "password": "secret123"})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json() == {"message": "Invalid credentials"}


def test_get_profile(client, test_user, auth_token) -> None:
    response = client.get("/api/auth/user", headers=auth_token)
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["id"] == test_user.id
    assert data["email"] == test_user.email
    assert data["ageVerified"] is False
    assert "passwordHash" not in data
    assert "createdAt" in data


def test_get_profile_requires_token(client) -> None:
    response = client.get("/api/auth/user")
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json() == {"message": "Authentication required"}
    assert response.headers["www-authenticate"] == "Bearer"


def test_get_profile_rejects_garbage_token(client) -> None:
    response = client.get("/api/auth/user", headers={"Authorization": "Bearer not.a.jwt"})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_banned_user_token_is_rejected(client, make_user, auth_headers) -> None:
    banned = make_user(banned=True)
    response = client.get("/api/auth/user", headers=auth_headers(banned))
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_verify_age(client, auth_token) -> None:
    response = client.post("/api/auth/verify-age", json={"confirmed": True}, headers=auth_token)
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["ageVerified"] is True


def test_verify_age_requires_confirmation(client, auth_token) -> None:
    response = client.post("/api/auth/verify-age", json={"confirmed": False}, headers=auth_token)
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json() == {"message": "Age verification confirmation required"}


def test_role_is_read_from_database(client, db_session, test_user, auth_token) -> None:
    """A role granted after login applies to the already-issued token."""
    assert client.get("/api/admin/reports", headers=auth_token).status_code == 403

    test_user.role = UserRole.MODERATOR.value
    db_session.commit()

    assert client.get("/api/admin/reports", headers=auth_token).status_code == 200
