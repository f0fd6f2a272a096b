"""Unit tests for the fixed-window rate limiter and its stores."""

from unittest.mock import AsyncMock

import pytest

from src.cm_gateway.security.rate_limiter import (
    AUTH_STRICT_CONFIG,
    DEFAULT_CONFIG,
    PRESETS,
    STRICT_CONFIG,
    MemoryRateLimitStore,
    RateLimitConfig,
    RateLimiter,
    RateLimitEntry,
    RateLimitResult,
    RedisRateLimitStore,
)

NOW = 1_700_000_000_000
SMALL = RateLimitConfig(window_ms=1000, max_requests=3, name="small")


class Clock:
    def __init__(self, now_ms: int = NOW) -> None:
        self.now_ms = now_ms

    def __call__(self) -> int:
        return self.now_ms


@pytest.fixture
def clock() -> Clock:
    return Clock()


@pytest.fixture
def store() -> MemoryRateLimitStore:
    return MemoryRateLimitStore(sweep_probability=0.0)


@pytest.fixture
def limiter(store: MemoryRateLimitStore, clock: Clock) -> RateLimiter:
    return RateLimiter(store=store, clock=clock)


class TestPresets:
    def test_default_values(self) -> None:
        assert (DEFAULT_CONFIG.window_ms, DEFAULT_CONFIG.max_requests) == (900_000, 100)
        assert (STRICT_CONFIG.window_ms, STRICT_CONFIG.max_requests) == (60_000, 10)
        assert (AUTH_STRICT_CONFIG.window_ms, AUTH_STRICT_CONFIG.max_requests) == (60_000, 5)

    def test_presets_indexed_by_name(self) -> None:
        assert set(PRESETS) == {"default", "strict", "auth_strict"}
        assert PRESETS["auth_strict"] is AUTH_STRICT_CONFIG


class TestEntryAndResult:
    def test_entry_expires_at_reset_time(self) -> None:
        entry = RateLimitEntry(count=1, reset_time=NOW)
        assert not entry.expired(NOW - 1)
        assert entry.expired(NOW)

    def test_retry_after_rounds_up(self) -> None:
        result = RateLimitResult(allowed=False, limit=5, remaining=0, reset_at=NOW + 1001)
        assert result.retry_after_seconds(NOW) == 2
        assert result.retry_after_seconds(NOW + 1000) == 1


class TestMemoryWindow:
    async def test_first_request_opens_window(self, limiter: RateLimiter) -> None:
        result = await limiter.check("1.2.3.4", SMALL)
        assert result.allowed
        assert result.limit == 3
        assert result.remaining == 2
        assert result.reset_at == NOW + 1000

    async def test_remaining_counts_down_then_denies(self, limiter: RateLimiter) -> None:
        remaining = [(await limiter.check("ip", SMALL)).remaining for _ in range(3)]
        assert remaining == [2, 1, 0]

        denied = await limiter.check("ip", SMALL)
        assert not denied.allowed
        assert denied.remaining == 0
        assert denied.reset_at == NOW + 1000

    async def test_denial_does_not_extend_window(
        self, limiter: RateLimiter, store: MemoryRateLimitStore, clock: Clock
    ) -> None:
        for _ in range(3):
            await limiter.check("ip", SMALL)
        clock.now_ms += 500
        await limiter.check("ip", SMALL)
        await limiter.check("ip", SMALL)

        entry = store.get("small:ip")
        assert entry is not None
        assert entry.count == 3
        assert entry.reset_time == NOW + 1000

    async def test_window_resets_after_expiry(self, limiter: RateLimiter, clock: Clock) -> None:
        for _ in range(4):
            await limiter.check("ip", SMALL)

        clock.now_ms = NOW + 1000
        result = await limiter.check("ip", SMALL)
        assert result.allowed
        assert result.remaining == 2
        assert result.reset_at == NOW + 2000

    async def test_allowed_requests_never_exceed_max(
        self, limiter: RateLimiter, clock: Clock
    ) -> None:
        allowed = 0
        for _ in range(20):
            if (await limiter.check("ip", SMALL)).allowed:
                allowed += 1
            clock.now_ms += 10
        assert allowed == SMALL.max_requests

    async def test_identifiers_are_independent(self, limiter: RateLimiter) -> None:
        for _ in range(3):
            await limiter.check("a", SMALL)
        assert not (await limiter.check("a", SMALL)).allowed
        assert (await limiter.check("b", SMALL)).allowed

    async def test_presets_count_separately(self, limiter: RateLimiter) -> None:
        for _ in range(AUTH_STRICT_CONFIG.max_requests):
            await limiter.check("ip", AUTH_STRICT_CONFIG)
        assert not (await limiter.check("ip", AUTH_STRICT_CONFIG)).allowed
        assert (await limiter.check("ip", STRICT_CONFIG)).allowed

    async def test_config_defaults_to_default_preset(self, limiter: RateLimiter) -> None:
        result = await limiter.check("ip")
        assert result.limit == DEFAULT_CONFIG.max_requests
        assert result.reset_at == NOW + DEFAULT_CONFIG.window_ms


class TestSweep:
    async def test_sweep_evicts_only_expired(
        self, limiter: RateLimiter, store: MemoryRateLimitStore, clock: Clock
    ) -> None:
        await limiter.check("old", SMALL)
        clock.now_ms += 600
        await limiter.check("new", SMALL)

        assert store.sweep(NOW + 1000) == 1
        assert len(store) == 1
        assert store.get("small:old") is None
        assert store.get("small:new") is not None

    async def test_hit_sweeps_when_rng_fires(self) -> None:
        store = MemoryRateLimitStore(sweep_probability=0.5, rng=lambda: 0.1)
        await store.hit("stale", SMALL, NOW)
        await store.hit("fresh", SMALL, NOW + 5000)
        assert store.get("stale") is None
        assert store.get("fresh") is not None

    async def test_hit_skips_sweep_when_rng_misses(self) -> None:
        store = MemoryRateLimitStore(sweep_probability=0.01, rng=lambda: 0.99)
        await store.hit("stale", SMALL, NOW)
        await store.hit("fresh", SMALL, NOW + 5000)
        assert len(store) == 2


class TestStoreFailure:
    async def test_fail_open_allows(self, clock: Clock) -> None:
        broken = AsyncMock()
        broken.hit.side_effect = ConnectionError("redis down")
        limiter = RateLimiter(store=broken, clock=clock, fail_open=True)

        result = await limiter.check("ip", SMALL)
        assert result.allowed
        assert result.remaining == SMALL.max_requests

    async def test_fail_closed_denies(self, clock: Clock) -> None:
        broken = AsyncMock()
        broken.hit.side_effect = ConnectionError("redis down")
        limiter = RateLimiter(store=broken, clock=clock, fail_open=False)

        result = await limiter.check("ip", SMALL)
        assert not result.allowed
        assert result.retry_after_seconds(NOW) == 1


class TestRedisStore:
    def _store(self, redis: AsyncMock) -> RedisRateLimitStore:
        async def factory() -> AsyncMock:
            return redis

        return RedisRateLimitStore(factory)

    async def test_first_hit_sets_expiry(self) -> None:
        redis = AsyncMock()
        redis.incr.return_value = 1
        result = await self._store(redis).hit("small:ip", SMALL, NOW)

        redis.incr.assert_awaited_once_with("ratelimit:small:ip")
        redis.pexpire.assert_awaited_once_with("ratelimit:small:ip", 1000)
        assert result.allowed
        assert result.remaining == 2
        assert result.reset_at == NOW + 1000

    async def test_over_limit_denied_with_ttl(self) -> None:
        redis = AsyncMock()
        redis.incr.return_value = 4
        redis.pttl.return_value = 250
        result = await self._store(redis).hit("small:ip", SMALL, NOW)

        assert not result.allowed
        assert result.remaining == 0
        assert result.reset_at == NOW + 250
        redis.pexpire.assert_not_awaited()

    async def test_missing_ttl_restarts_window(self) -> None:
        redis = AsyncMock()
        redis.incr.return_value = 2
        redis.pttl.return_value = -1
        result = await self._store(redis).hit("small:ip", SMALL, NOW)

        redis.pexpire.assert_awaited_once_with("ratelimit:small:ip", 1000)
        assert result.allowed
        assert result.reset_at == NOW + 1000
