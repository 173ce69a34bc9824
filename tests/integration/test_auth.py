"""Tests for admin login and the token gate."""

from datetime import UTC, datetime, timedelta

import pytest
from httpx import AsyncClient
from jose import jwt

from src.portfolio_api.core.config import get_settings
from src.portfolio_api.core.security import create_access_token, decode_token

pytestmark = [pytest.mark.integration, pytest.mark.asyncio]

PROTECTED_ROUTES = [
    ("GET", "/api/messages"),
    ("GET", "/api/messages/stats/summary"),
    ("GET", "/api/messages/count/unread"),
    ("GET", "/api/dashboard/stats"),
    ("POST", "/api/upload"),
    ("DELETE", "/api/projects/1"),
]


class TestLogin:
    async def test_login_success(self, client: AsyncClient, test_admin: dict) -> None:
        response = await client.post(
            "/api/admin/login",
            json={"username": test_admin["username"], "password": test_admin["password"]},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["user"] == {
            "id": test_admin["id"],
            "username": test_admin["username"],
            "name": test_admin["name"],
        }
        claims = decode_token(body["token"])
        assert claims is not None
        assert claims["id"] == test_admin["id"]
        assert claims["username"] == test_admin["username"]
        assert claims["role"] == "admin"

    async def test_token_expires_in_a_day(self, client: AsyncClient, test_admin: dict) -> None:
        response = await client.post(
            "/api/admin/login",
            json={"username": test_admin["username"], "password": test_admin["password"]},
        )

        claims = jwt.get_unverified_claims(response.json()["token"])
        remaining = claims["exp"] - datetime.now(UTC).timestamp()
        assert 86400 - 60 < remaining <= 86400

    async def test_wrong_password_and_unknown_user_look_identical(
        self, client: AsyncClient, test_admin: dict
    ) -> None:
        wrong_password = await client.post(
            "/api/admin/login",
            json={"username": test_admin["username"], "password": "not-the-password"},
        )
        unknown_user = await client.post(
            "/api/admin/login",
            json={"username": "nobody-here", "password": "not-the-password"},
        )

        assert wrong_password.status_code == unknown_user.status_code == 401
        assert wrong_password.json() == unknown_user.json() == {"error": "Invalid credentials"}

    async def test_username_is_case_sensitive(
        self, client: AsyncClient, test_admin: dict
    ) -> None:
        response = await client.post(
            "/api/admin/login",
            json={"username": test_admin["username"].upper(), "password": test_admin["password"]},
        )

        assert response.status_code == 401

    @pytest.mark.parametrize(
        "payload",
        [{}, {"username": "admin"}, {"password": "secret"}, {"username": "", "password": "x"}],
    )
    async def test_missing_credentials(self, client: AsyncClient, payload: dict) -> None:
        response = await client.post("/api/admin/login", json=payload)

        assert response.status_code == 400
        assert response.json() == {"error": "Username and password required"}


class TestTokenGate:
    @pytest.mark.parametrize(("method", "path"), PROTECTED_ROUTES)
    async def test_missing_header_is_unauthorized(
        self, client: AsyncClient, method: str, path: str
    ) -> None:
        response = await client.request(method, path)

        assert response.status_code == 401
        assert response.json() == {"error": "Access token required"}

    @pytest.mark.parametrize("header", ["Bearer", "Bearer ", "Token abc", "abc", "Basic dXNlcg=="])
    async def test_malformed_header_is_unauthorized(
        self, client: AsyncClient, header: str
    ) -> None:
        response = await client.get("/api/messages", headers={"Authorization": header})

        assert response.status_code == 401
        assert response.json() == {"error": "Access token required"}

    async def test_expired_token_is_forbidden(self, client: AsyncClient) -> None:
        token = create_access_token(1, "admin", expires_delta=timedelta(seconds=-1))

        response = await client.get(
            "/api/messages", headers={"Authorization": f"Bearer {token}"}
        )

        assert response.status_code == 403
        assert response.json() == {"error": "Invalid or expired token"}

    async def test_foreign_signature_is_forbidden(self, client: AsyncClient) -> None:
        token = jwt.encode(
            {"id": 1, "username": "admin", "role": "admin"},
            "another-secret-key-that-is-also-32-characters",
            algorithm="HS256",
        )

        response = await client.get(
            "/api/messages", headers={"Authorization": f"Bearer {token}"}
        )

        assert response.status_code == 403

    async def test_token_without_identity_claims_is_forbidden(self, client: AsyncClient) -> None:
        settings = get_settings()
        token = jwt.encode(
            {"sub": "1", "role": "admin"}, settings.jwt_secret_key, algorithm=settings.jwt_algorithm
        )

        response = await client.get(
            "/api/messages", headers={"Authorization": f"Bearer {token}"}
        )

        assert response.status_code == 403

    @pytest.mark.parametrize(("method", "path"), PROTECTED_ROUTES[:4])
    async def test_any_valid_token_opens_any_route(
        self, client: AsyncClient, auth_headers: dict, method: str, path: str
    ) -> None:
        response = await client.request(method, path, headers=auth_headers)

        assert response.status_code == 200

    async def test_login_token_is_accepted(self, client: AsyncClient, test_admin: dict) -> None:
        login = await client.post(
            "/api/admin/login",
            json={"username": test_admin["username"], "password": test_admin["password"]},
        )
        token = login.json()["token"]

        response = await client.get(
            "/api/messages/count/unread", headers={"Authorization": f"Bearer {token}"}
        )

        assert response.status_code == 200
