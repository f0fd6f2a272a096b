"""Unit tests for session token creation, verification and transport."""

from datetime import timedelta
from unittest.mock import patch

from jose import jwt
from starlette.requests import Request
from starlette.responses import Response

from config.settings import settings
from src.cm_common.enums import Role
from src.cm_gateway.auth.jwt_handler import create_session_token, verify_session_token
from src.cm_gateway.auth.principal import SessionPrincipal
from src.cm_gateway.auth.session import (
    create_session,
    destroy_session,
    extract_session_token,
    get_session,
)

ALICE = SessionPrincipal(user_id="u-alice", email="alice@church.test", role=Role.LEADER, name="Alice")


def _request(headers: dict[str, str] | None = None) -> Request:
    raw = [(k.lower().encode(), v.encode()) for k, v in (headers or {}).items()]
    return Request({"type": "http", "method": "GET", "path": "/", "headers": raw})


class TestToken:
    def test_claims(self) -> None:
        payload = jwt.get_unverified_claims(create_session_token(ALICE))
        assert payload["sub"] == "u-alice"
        assert payload["email"] == "alice@church.test"
        assert payload["role"] == "leader"
        assert payload["name"] == "Alice"
        assert payload["exp"] - payload["iat"] == 7 * 24 * 3600

    def test_round_trip(self) -> None:
        assert verify_session_token(create_session_token(ALICE)) == ALICE

    def test_missing_token(self) -> None:
        assert verify_session_token(None) is None
        assert verify_session_token("") is None

    def test_garbage_token(self) -> None:
        assert verify_session_token("not-a-jwt") is None

    def test_wrong_secret(self) -> None:
        token = jwt.encode({"sub": "u1", "email": "x@y.z", "role": "admin"}, "other-secret")
        assert verify_session_token(token) is None

    def test_expired_token(self) -> None:
        with patch("src.cm_gateway.auth.jwt_handler._SESSION_EXPIRE", timedelta(seconds=-10)):
            token = create_session_token(ALICE)
        assert verify_session_token(token) is None

    def test_unknown_role(self) -> None:
        token = jwt.encode(
            {"sub": "u1", "email": "x@y.z", "role": "superuser"},
            settings.JWT_SECRET,
            algorithm="HS256",
        )
        assert verify_session_token(token) is None

    def test_missing_identity_claims(self) -> None:
        token = jwt.encode({"role": "admin"}, settings.JWT_SECRET, algorithm="HS256")
        assert verify_session_token(token) is None

    def test_other_algorithm_rejected(self) -> None:
        token = jwt.encode(
            {"sub": "u1", "email": "x@y.z", "role": "admin"},
            settings.JWT_SECRET,
            algorithm="HS512",
        )
        assert verify_session_token(token) is None


class TestTransport:
    def test_cookie_token(self) -> None:
        token = create_session_token(ALICE)
        request = _request({"cookie": f"{settings.SESSION_COOKIE_NAME}={token}"})
        assert extract_session_token(request) == token
        assert get_session(request) == ALICE

    def test_bearer_token(self) -> None:
        token = create_session_token(ALICE)
        assert extract_session_token(_request({"authorization": f"Bearer {token}"})) == token

    def test_cookie_preferred_over_header(self) -> None:
        request = _request({
            "cookie": f"{settings.SESSION_COOKIE_NAME}=from-cookie",
            "authorization": "Bearer from-header",
        })
        assert extract_session_token(request) == "from-cookie"

    def test_other_schemes_ignored(self) -> None:
        assert extract_session_token(_request({"authorization": "Basic abc"})) is None
        assert extract_session_token(_request()) is None
        assert get_session(_request()) is None

    def test_create_session_sets_http_only_cookie(self) -> None:
        response = Response()
        token = create_session(response, ALICE)
        cookie = response.headers["set-cookie"]
        assert cookie.startswith(f"{settings.SESSION_COOKIE_NAME}={token}")
        assert "HttpOnly" in cookie
        assert "Max-Age=604800" in cookie
        assert "Path=/" in cookie
        assert "samesite=lax" in cookie.lower()

    def test_destroy_session_expires_cookie(self) -> None:
        response = Response()
        destroy_session(response)
        cookie = response.headers["set-cookie"]
        assert cookie.startswith(f'{settings.SESSION_COOKIE_NAME}=""')
        assert "Max-Age=0" in cookie
