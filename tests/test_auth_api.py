import uuid
from datetime import timedelta

import pytest

from app.core.config import Settings
from app.core.security import check_password, hash_password, issue_access_token
from tests.conftest import PASSWORD, register_and_login


async def test_register_and_me(client):
    headers = await register_and_login(client, "carol")

    response = await client.get("/api/auth/me", headers=headers)

    assert response.status_code == 200
    body = response.json()
    assert body["email"] == "carol@cellar.io"
    assert body["username"] == "carol"
    assert "password_hash" not in body


async def test_register_duplicate_email(client, alice):
    response = await client.post(
        "/api/auth/register",
        json={"email": "alice@cellar.io", "username": "alice2", "password": PASSWORD},
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "Email already registered"


async def test_register_weak_password(client):
    response = await client.post(
        "/api/auth/register",
        json={"email": "dave@cellar.io", "username": "dave", "password": "password"},
    )

    assert response.status_code == 400
    assert response.json()["errors"][0]["param"] == "password"


async def test_login_wrong_password(client, alice):
    response = await client.post(
        "/api/auth/login", json={"email": "alice@cellar.io", "password": "Wrong1234"}
    )

    assert response.status_code == 401


async def test_expired_token_is_rejected(client, alice):
    me = (await client.get("/api/auth/me", headers=alice)).json()
    token = issue_access_token(uuid.UUID(me["uuid"]), expires_delta=timedelta(minutes=-1))

    response = await client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401
    assert response.headers["www-authenticate"] == "Bearer"


async def test_token_for_unknown_user_is_rejected(client):
    token = issue_access_token(uuid.UUID(int=0))

    response = await client.get("/api/bottles", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401


async def test_health(client):
    response = await client.get("/health")

    assert response.json() == {"status": "ok"}


def test_multibyte_password_is_truncated_by_bytes():
    # 40 кириллических символов - это 80 байт UTF-8
    password = "Я" * 40
    password_hash = hash_password(password)

    assert check_password(password, password_hash)
    # Совпадают первые 72 байта, остальное bcrypt не видит
    assert check_password("Я" * 36 + "tail", password_hash)
    assert not check_password("Я" * 35, password_hash)


@pytest.mark.parametrize("raw, expected", [("info", "INFO"), (" Debug ", "DEBUG"), ("WARNING", "WARNING")])
def test_log_level_is_case_insensitive(raw, expected):
    assert Settings(jwt_secret="x", log_level=raw).log_level == expected


def test_unknown_log_level_is_rejected():
    with pytest.raises(ValueError):
        Settings(jwt_secret="x", log_level="loud")
