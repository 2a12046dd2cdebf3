"""Integration tests for sign-up and sign-in."""

import pytest

from milk_collection.domain.entities import Role


def _signup_payload(username: str, **extra) -> dict:
    return {
        "username": username,
        "email": f"{username}@example.com",
        "password": "secret1",
        **extra,
    }


@pytest.mark.asyncio
async def test_sign_up_then_sign_in(client):
    response = await client.post("/api/v1/auth/signup", json=_signup_payload("alice"))

    assert response.status_code == 201
    body = response.json()
    assert body["username"] == "alice"
    assert body["roles"] == ["USER"]
    assert "password" not in body
    assert "password_hash" not in body

    response = await client.post(
        "/api/v1/auth/signin", json={"username": "alice", "password": "secret1"}
    )
    assert response.status_code == 200
    token = response.json()
    assert token["type"] == "Bearer"
    assert token["username"] == "alice"
    assert token["token"]

    me = await client.get(
        "/api/v1/users/me", headers={"Authorization": f"Bearer {token['token']}"}
    )
    assert me.status_code == 200
    assert me.json()["id"] == token["id"]


@pytest.mark.asyncio
async def test_sign_in_with_bad_credentials(client):
    await client.post("/api/v1/auth/signup", json=_signup_payload("alice"))

    wrong = await client.post(
        "/api/v1/auth/signin", json={"username": "alice", "password": "nope-nope"}
    )
    unknown = await client.post(
        "/api/v1/auth/signin", json={"username": "ghost", "password": "secret1"}
    )

    assert wrong.status_code == 401
    assert unknown.status_code == 401
    assert wrong.json() == unknown.json()


@pytest.mark.asyncio
async def test_sign_up_duplicate_username(client):
    await client.post("/api/v1/auth/signup", json=_signup_payload("alice"))

    response = await client.post(
        "/api/v1/auth/signup",
        json=_signup_payload("alice", email="other@example.com"),
    )

    assert response.status_code == 409


@pytest.mark.asyncio
async def test_sign_up_validation(client):
    response = await client.post(
        "/api/v1/auth/signup",
        json={"username": "al", "email": "not-an-email", "password": "123"},
    )

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_self_registered_admin_is_refused_once_accounts_exist(client, create_user):
    await create_user("root", Role.ADMIN, Role.USER)

    response = await client.post(
        "/api/v1/auth/signup", json=_signup_payload("mallory", roles=["ADMIN"])
    )

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_missing_or_invalid_token_is_401(client):
    assert (await client.get("/api/v1/milk/my-milk")).status_code == 401

    response = await client.get(
        "/api/v1/milk/my-milk", headers={"Authorization": "Bearer not-a-token"}
    )
    assert response.status_code == 401
