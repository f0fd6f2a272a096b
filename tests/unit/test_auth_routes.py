"""Route tests for /api/auth (rate limit, session cookie, admin-only register)."""

import logging
from collections.abc import Callable
from unittest.mock import AsyncMock, MagicMock

from httpx import AsyncClient

from config.settings import settings
from src.cm_common.enums import Role
from src.cm_gateway.auth.password import hash_password
from src.cm_gateway.user.db_models import UserModel

_PASSWORD = "Str0ng!pass"


def _user(role: str = "leader") -> UserModel:
    user = UserModel()
    user.id = "u-ana"
    user.email = "ana@church.org"
    user.name = "Ana"
    user.role = role
    user.password_hash = hash_password(_PASSWORD)
    return user


class TestLogin:
    async def test_success_sets_session_cookie(
        self, client: AsyncClient, db: AsyncMock, result: Callable[..., MagicMock]
    ) -> None:
        db.execute.return_value = result(scalar=_user())
        resp = await client.post(
            "/api/auth/login", json={"email": "ana@church.org", "password": _PASSWORD}
        )

        assert resp.status_code == 200
        assert resp.json() == {
            "user": {"id": "u-ana", "email": "ana@church.org", "name": "Ana", "role": "leader"}
        }
        cookie = resp.headers["set-cookie"]
        assert cookie.startswith(f"{settings.SESSION_COOKIE_NAME}=")
        assert "HttpOnly" in cookie
        assert resp.headers["X-RateLimit-Limit"] == "5"
        assert resp.headers["X-RateLimit-Remaining"] == "4"

    async def test_wrong_password(
        self, client: AsyncClient, db: AsyncMock, result: Callable[..., MagicMock]
    ) -> None:
        db.execute.return_value = result(scalar=_user())
        resp = await client.post(
            "/api/auth/login", json={"email": "ana@church.org", "password": "Wr0ng!pass"}
        )
        assert resp.status_code == 401
        assert resp.json() == {"error": "Invalid credentials"}
        assert "set-cookie" not in resp.headers

    async def test_invalid_input_never_reaches_db(self, client: AsyncClient, db: AsyncMock) -> None:
        resp = await client.post("/api/auth/login", json={"email": "nope", "password": ""})
        assert resp.status_code == 400
        body = resp.json()
        assert body["error"] == "Invalid input"
        assert {d["field"] for d in body["details"]} == {"email", "password"}
        db.execute.assert_not_awaited()

    async def test_malformed_json(self, client: AsyncClient, db: AsyncMock) -> None:
        resp = await client.post(
            "/api/auth/login",
            content=b"{email: ",
            headers={"Content-Type": "application/json"},
        )
        assert resp.status_code == 400
        assert resp.json() == {"error": "Invalid request body"}
        db.execute.assert_not_awaited()

    async def test_sixth_attempt_in_a_minute_is_rejected(self, client: AsyncClient) -> None:
        for _ in range(5):
            resp = await client.post("/api/auth/login", json={})
            assert resp.status_code == 400

        resp = await client.post("/api/auth/login", json={})
        assert resp.status_code == 429
        assert resp.json() == {"error": "Too many requests", "retryAfter": 60}
        assert resp.headers["Retry-After"] == "60"
        assert resp.headers["X-RateLimit-Remaining"] == "0"
        assert resp.headers["X-RateLimit-Limit"] == "5"

    async def test_window_reopens(self, client: AsyncClient, clock) -> None:
        for _ in range(6):
            await client.post("/api/auth/login", json={})
        clock.advance(60_000)
        resp = await client.post("/api/auth/login", json={})
        assert resp.status_code == 400

    async def test_clients_limited_separately(self, client: AsyncClient) -> None:
        for _ in range(6):
            await client.post("/api/auth/login", json={}, headers={"X-Forwarded-For": "10.1.1.1"})
        resp = await client.post(
            "/api/auth/login", json={}, headers={"X-Forwarded-For": "10.2.2.2"}
        )
        assert resp.status_code == 400


class TestSession:
    async def test_logout_clears_cookie(self, client: AsyncClient) -> None:
        resp = await client.post("/api/auth/logout")
        assert resp.status_code == 200
        assert resp.json() == {"success": True}
        assert "Max-Age=0" in resp.headers["set-cookie"]

    async def test_me_anonymous(self, client: AsyncClient, db: AsyncMock) -> None:
        resp = await client.get("/api/auth/me")
        assert resp.status_code == 200
        assert resp.json() == {"user": None}
        db.execute.assert_not_awaited()

    async def test_me_with_tampered_token(self, client: AsyncClient) -> None:
        resp = await client.get("/api/auth/me", headers={"Authorization": "Bearer abc.def.ghi"})
        assert resp.json() == {"user": None}

    async def test_me_signed_in(
        self,
        client: AsyncClient,
        db: AsyncMock,
        result: Callable[..., MagicMock],
        auth_headers: Callable[..., dict[str, str]],
    ) -> None:
        db.execute.return_value = result(scalar=_user())
        resp = await client.get("/api/auth/me", headers=auth_headers(Role.LEADER, "u-ana"))
        assert resp.json()["user"]["email"] == "ana@church.org"

    async def test_login_cookie_authenticates_next_request(
        self, client: AsyncClient, db: AsyncMock, result: Callable[..., MagicMock]
    ) -> None:
        db.execute.return_value = result(scalar=_user())
        await client.post("/api/auth/login", json={"email": "ana@church.org", "password": _PASSWORD})

        resp = await client.get("/api/auth/me")
        assert resp.json()["user"]["id"] == "u-ana"


class TestRegister:
    _BODY = {"email": "new@church.org", "password": _PASSWORD, "name": "Luis", "role": "member"}

    async def test_requires_session(self, client: AsyncClient, db: AsyncMock) -> None:
        resp = await client.post("/api/auth/register", json=self._BODY)
        assert resp.status_code == 401
        assert resp.json() == {"error": "Unauthorized"}
        db.execute.assert_not_awaited()

    async def test_leader_cannot_register(
        self, client: AsyncClient, db: AsyncMock, auth_headers: Callable[..., dict[str, str]]
    ) -> None:
        resp = await client.post(
            "/api/auth/register", json=self._BODY, headers=auth_headers(Role.LEADER)
        )
        assert resp.status_code == 401
        db.execute.assert_not_awaited()

    async def test_admin_registers_user(
        self, client: AsyncClient, db: AsyncMock, auth_headers: Callable[..., dict[str, str]]
    ) -> None:
        def _assign_id(user: UserModel) -> None:
            user.id = "u-new"

        db.add.side_effect = _assign_id
        resp = await client.post(
            "/api/auth/register", json=self._BODY, headers=auth_headers(Role.ADMIN)
        )
        assert resp.status_code == 201
        assert resp.json() == {
            "id": "u-new", "email": "new@church.org", "name": "Luis", "role": "member"
        }

    async def test_duplicate_email_is_generic(
        self,
        client: AsyncClient,
        db: AsyncMock,
        result: Callable[..., MagicMock],
        auth_headers: Callable[..., dict[str, str]],
    ) -> None:
        db.execute.return_value = result(scalar=_user())
        resp = await client.post(
            "/api/auth/register",
            json={**self._BODY, "email": "ana@church.org"},
            headers=auth_headers(Role.ADMIN),
        )
        assert resp.status_code == 400
        assert resp.json() == {"error": "Registration failed. Please try again."}

    async def test_weak_password_details(
        self, client: AsyncClient, auth_headers: Callable[..., dict[str, str]]
    ) -> None:
        resp = await client.post(
            "/api/auth/register",
            json={**self._BODY, "password": "weakpass"},
            headers=auth_headers(Role.ADMIN),
        )
        assert resp.status_code == 400
        assert resp.json()["details"] == [
            {"field": "password", "message": "Password must contain at least one uppercase letter"}
        ]


class TestRequestCorrelation:
    async def test_rate_limit_warning_carries_request_id(
        self, client: AsyncClient, caplog
    ) -> None:
        for _ in range(5):
            await client.post("/api/auth/login", json={})

        caplog.set_level(logging.INFO, logger="cm")
        caplog.clear()
        resp = await client.post("/api/auth/login", json={})
        request_id = resp.headers["X-Request-ID"]

        security = [r for r in caplog.records if r.name == "cm.security"]
        assert len(security) == 1
        assert security[0].levelno == logging.WARNING
        assert request_id in security[0].getMessage()

        access = [r for r in caplog.records if r.name == "cm.request"]
        assert len(access) == 1
        assert access[0].levelno == logging.WARNING
        assert "→ 429" in access[0].getMessage()
        assert request_id in access[0].getMessage()

    async def test_role_denial_logged_with_request_id(
        self, client: AsyncClient, auth_headers: Callable[..., dict[str, str]], caplog
    ) -> None:
        caplog.set_level(logging.INFO, logger="cm")
        resp = await client.post(
            "/api/auth/register",
            json={"email": "new@church.org", "password": _PASSWORD, "name": "New"},
            headers=auth_headers(Role.LEADER),
        )

        assert resp.status_code == 401
        denial = next(r for r in caplog.records if r.name == "cm.security")
        assert "role leader denied on POST /api/auth/register" in denial.getMessage()
        assert resp.headers["X-Request-ID"] in denial.getMessage()

    async def test_successful_request_logged_at_info(self, client: AsyncClient, caplog) -> None:
        caplog.set_level(logging.INFO, logger="cm")
        resp = await client.get("/api/events")

        access = [r for r in caplog.records if r.name == "cm.request"]
        assert [r.levelno for r in access] == [logging.INFO]
        assert "[GET] /api/events → 200" in access[0].getMessage()
        assert resp.headers["X-Request-ID"] in access[0].getMessage()
