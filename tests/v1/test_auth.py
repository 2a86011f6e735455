# tests/v1/test_auth.py
"""Tests for registration, login and token handling."""

from fastapi import status

from tests.conftest import TEST_PASSWORD


def test_register_returns_token(client) -> None:
    response = client.post("/api/v1/auth/register", json={"username": "dana", "password": "pw"})
    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["token_type"] == "bearer"
    assert data["user"]["username"] == "dana"

    me = client.get("/api/v1/users/me", headers={"Authorization": f"Bearer {data['access_token']}"})
    assert me.status_code == status.HTTP_200_OK
    assert me.json()["id"] == data["user"]["id"]


def test_duplicate_username_conflicts(client, alice) -> None:
    response = client.post("/api/v1/auth/register", json={"username": "alice", "password": "pw"})
    assert response.status_code == status.HTTP_409_CONFLICT


def test_blank_username_is_rejected(client) -> None:
    response = client.post("/api/v1/auth/register", json={"username": "   ", "password": "pw"})
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_login(client, alice) -> None:
    response = client.post("/api/v1/auth/login", json={"username": "alice", "password": TEST_PASSWORD})
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["user"]["id"] == alice.id

    response = client.post("/api/v1/auth/login", json={"username": "alice", "password": "nope"})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED

    response = client.post("/api/v1/auth/login", json={"username": "nobody", "password": "nope"})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_invalid_token_is_unauthorized(client) -> None:
    response = client.get("/api/v1/messages/drafts", headers={"Authorization": "Bearer not-a-token"})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_user_lookup(client, bob) -> None:
    response = client.get("/api/v1/users/bob")
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"id": bob.id, "username": "bob"}

    response = client.get("/api/v1/users/nobody")
    assert response.status_code == status.HTTP_404_NOT_FOUND
