# mypy: ignore-errors
# tests/v1/test_users.py
"""Tests for the mention autocomplete endpoint."""

from fastapi import status

from beam_stage.models import User


def test_mentions_match_names(client, auth_token, db_session, other_user) -> None:
    db_session.add_all([
        User(id="user-bobby", name="Bobby"),
        User(id="user-carol", name="Carol"),
    ])
    db_session.commit()

    response = client.get("/api/v1/users/mentions?query=bob", headers=auth_token)
    assert response.status_code == status.HTTP_200_OK
    assert [user["name"] for user in response.json()] == ["Bob", "Bobby"]


def test_mentions_empty_query_lists_users(client, auth_token, other_user) -> None:
    names = [user["name"] for user in client.get("/api/v1/users/mentions", headers=auth_token).json()]
    assert names == ["Alice", "Bob"]


def test_mentions_require_authentication(client) -> None:
    response = client.get("/api/v1/users/mentions?query=a")
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
