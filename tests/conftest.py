"""Shared test fixtures.

Route tests run against the real app with two seams replaced:
  - app.state.rate_limiter: a fresh in-memory limiter per test, driven by
    a fake clock (``clock.now_ms``)
  - get_db_session: overridden with an AsyncMock session, so no test
    needs PostgreSQL
"""

import os

os.environ.setdefault("JWT_SECRET", "unit-test-secret-not-for-production")
os.environ.setdefault("RATE_LIMIT_BACKEND", "memory")

from collections.abc import AsyncGenerator, Callable  # noqa: E402
from unittest.mock import AsyncMock, MagicMock  # noqa: E402

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from src.cm_common.database import get_db_session  # noqa: E402
from src.cm_common.enums import Role  # noqa: E402
from src.cm_gateway.auth.jwt_handler import create_session_token  # noqa: E402
from src.cm_gateway.auth.principal import SessionPrincipal  # noqa: E402
from src.cm_gateway.security.rate_limiter import MemoryRateLimitStore, RateLimiter  # noqa: E402
from src.main import app  # noqa: E402


class FakeClock:
    def __init__(self, now_ms: int = 1_700_000_000_000) -> None:
        self.now_ms = now_ms

    def __call__(self) -> int:
        return self.now_ms

    def advance(self, ms: int) -> None:
        self.now_ms += ms


def make_result(rows: list[dict] | None = None, rowcount: int = 1, scalar: object = None) -> MagicMock:
    """A stand-in for a SQLAlchemy Result covering the calls repositories make."""
    rows = rows or []
    result = MagicMock()
    result.mappings.return_value.all.return_value = rows
    result.mappings.return_value.first.return_value = rows[0] if rows else None
    result.rowcount = rowcount
    result.scalar_one.return_value = scalar
    result.scalar_one_or_none.return_value = scalar
    return result


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def rate_limiter(clock: FakeClock) -> RateLimiter:
    limiter = RateLimiter(store=MemoryRateLimitStore(sweep_probability=0.0), clock=clock)
    previous = app.state.rate_limiter
    app.state.rate_limiter = limiter
    yield limiter
    app.state.rate_limiter = previous


@pytest.fixture
def db() -> AsyncMock:
    session = AsyncMock()
    session.execute = AsyncMock(return_value=make_result())
    session.add = MagicMock()

    async def _override() -> AsyncGenerator[AsyncMock, None]:
        yield session

    app.dependency_overrides[get_db_session] = _override
    yield session
    app.dependency_overrides.pop(get_db_session, None)


@pytest.fixture
async def client(rate_limiter: RateLimiter, db: AsyncMock) -> AsyncClient:
    """Async HTTP client for testing FastAPI endpoints."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def auth_headers() -> Callable[..., dict[str, str]]:
    """Build a Bearer header for a signed-in user with the given role."""

    def _headers(role: Role = Role.ADMIN, user_id: str = "user-1") -> dict[str, str]:
        principal = SessionPrincipal(
            user_id=user_id, email=f"{role.value}@church.test", role=role, name="Test User"
        )
        return {"Authorization": f"Bearer {create_session_token(principal)}"}

    return _headers


@pytest.fixture
def result() -> Callable[..., MagicMock]:
    """Factory fixture for fake SQLAlchemy results (see make_result)."""
    return make_result
