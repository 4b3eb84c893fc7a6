"""
Registration, login and bearer token handling.
"""

from datetime import timedelta

from audio_vault.config.settings import settings
from audio_vault.shared.repositories.user_repository import UserRepository
from audio_vault.shared.utils.security import SecurityUtils

from tests.helpers import auth_headers, register


async def test_register_returns_token_and_user(client):
    response = await client.post(
        "/api/auth/register",
        json={"email": "A@X.com", "password": "secret123", "username": "vinyl_fan"},
    )

    assert response.status_code == 201
    data = response.json()
    assert data["token"]
    assert data["tokenType"] == "bearer"
    assert data["expiresIn"] == settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60
    assert data["user"]["email"] == "a@x.com"
    assert data["user"]["username"] == "vinyl_fan"
    assert data["user"]["isCollectionPublic"] is True
    assert "passwordHash" not in data["user"]


async def test_register_derives_username_from_email(client):
    response = await client.post("/api/auth/register", json={"email": "tape.head@x.com", "password": "secret123"})

    assert response.status_code == 201
    username = response.json()["user"]["username"]
    assert 3 <= len(username) <= 20
    assert username.replace("_", "").isalnum()


async def test_duplicate_email_is_conflict(client):
    await register(client, "a@x.com")

    response = await client.post("/api/auth/register", json={"email": "a@x.com", "password": "secret123"})

    assert response.status_code == 409
    assert response.json()["error"]["code"] == "CONFLICT"
    assert response.json()["error"]["message"] == "A user with this email already exists."


async def test_duplicate_username_is_conflict(client):
    await register(client, "a@x.com", username="reel2reel")

    response = await client.post(
        "/api/auth/register",
        json={"email": "b@x.com", "password": "secret123", "username": "reel2reel"},
    )

    assert response.status_code == 409
    assert response.json()["error"]["message"] == "This username is already taken."


async def test_registration_racing_past_checks_is_conflict(client, monkeypatch):
    await register(client, "a@x.com", username="reel2reel")

    async def not_taken(self, value):
        return False

    # Both checks pass, as they would for two concurrent registrations
    monkeypatch.setattr(UserRepository, "email_exists", not_taken)
    monkeypatch.setattr(UserRepository, "username_exists", not_taken)

    response = await client.post(
        "/api/auth/register",
        json={"email": "a@x.com", "password": "secret123", "username": "reel2reel"},
    )

    assert response.status_code == 409
    assert response.json()["error"]["code"] == "CONFLICT"
    assert response.json()["error"]["message"] == "A user with this email or username already exists."


async def test_register_validation_errors_are_400(client):
    short_password = await client.post("/api/auth/register", json={"email": "a@x.com", "password": "short"})
    bad_email = await client.post("/api/auth/register", json={"email": "not-an-email", "password": "secret123"})

    assert short_password.status_code == 400
    assert short_password.json()["error"]["code"] == "VALIDATION_ERROR"
    assert bad_email.status_code == 400


async def test_login(client):
    await register(client, "a@x.com")

    response = await client.post("/api/auth/login", json={"email": "a@x.com", "password": "secret123"})

    assert response.status_code == 200
    assert response.json()["user"]["email"] == "a@x.com"

    me = await client.get("/api/users/me", headers=auth_headers(response.json()["token"]))
    assert me.status_code == 200


async def test_login_with_wrong_password_or_unknown_email_is_401(client):
    await register(client, "a@x.com")

    wrong_password = await client.post("/api/auth/login", json={"email": "a@x.com", "password": "nope-nope"})
    unknown = await client.post("/api/auth/login", json={"email": "z@x.com", "password": "secret123"})

    for response in (wrong_password, unknown):
        assert response.status_code == 401
        assert response.json()["error"]["message"] == "Incorrect email or password."


async def test_protected_route_requires_token(client):
    response = await client.get("/api/users/me")

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "AUTHENTICATION_ERROR"


async def test_invalid_and_expired_tokens_are_401(client):
    user = await register(client, "a@x.com")
    expired = SecurityUtils.create_access_token(
        {"user_id": user["id"]},
        settings.SECRET_KEY,
        expires_delta=timedelta(seconds=-1),
    )

    garbage = await client.get("/api/users/me", headers=auth_headers("not.a.jwt"))
    too_old = await client.get("/api/users/me", headers=auth_headers(expired))

    assert garbage.status_code == 401
    assert too_old.status_code == 401
    assert too_old.json()["error"]["message"] == "Token has expired"


async def test_token_of_unknown_user_is_401(client):
    token = SecurityUtils.create_access_token(
        {"user_id": "00000000-0000-0000-0000-000000000000"},
        settings.SECRET_KEY,
    )

    response = await client.get("/api/users/me", headers=auth_headers(token))

    assert response.status_code == 401
