"""Fixed-window rate limiter with pluggable stores.

Window semantics (per key):
  - first request, or first request after reset_time has passed:
        new entry {count: 1, reset_time: now + window_ms} → allowed
  - count >= max_requests: denied, remaining=0, reset_time unchanged
  - otherwise: count += 1 → allowed, remaining = max_requests - count

Keys are "<preset name>:<client identifier>", so login attempts and
panel traffic from the same client are counted in separate windows.

MemoryRateLimitStore keeps counters in process memory. Counters are not
shared between workers or instances and are lost on restart; run a
single worker or switch RATE_LIMIT_BACKEND to "redis" when scaling out.
"""

import logging
import math
import random
import threading
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Protocol

import redis.asyncio as aioredis

from config.settings import settings
from src.cm_common.datetime_utils import epoch_ms
from src.cm_common.redis_client import get_redis

logger = logging.getLogger("cm.security")

# Probability that a single check sweeps expired entries out of the store
_SWEEP_PROBABILITY = 0.01


@dataclass(frozen=True)
class RateLimitConfig:
    window_ms: int
    max_requests: int
    name: str = "default"


@dataclass
class RateLimitEntry:
    count: int
    reset_time: int  # epoch ms

    def expired(self, now_ms: int) -> bool:
        return now_ms >= self.reset_time


@dataclass(frozen=True)
class RateLimitResult:
    allowed: bool
    limit: int
    remaining: int
    reset_at: int  # epoch ms

    def retry_after_seconds(self, now_ms: int) -> int:
        return math.ceil((self.reset_at - now_ms) / 1000)


DEFAULT_CONFIG = RateLimitConfig(
    window_ms=settings.RATE_LIMIT_DEFAULT_WINDOW_MS,
    max_requests=settings.RATE_LIMIT_DEFAULT_MAX,
    name="default",
)
STRICT_CONFIG = RateLimitConfig(
    window_ms=settings.RATE_LIMIT_STRICT_WINDOW_MS,
    max_requests=settings.RATE_LIMIT_STRICT_MAX,
    name="strict",
)
AUTH_STRICT_CONFIG = RateLimitConfig(
    window_ms=settings.RATE_LIMIT_AUTH_WINDOW_MS,
    max_requests=settings.RATE_LIMIT_AUTH_MAX,
    name="auth_strict",
)

PRESETS: dict[str, RateLimitConfig] = {
    c.name: c for c in (DEFAULT_CONFIG, STRICT_CONFIG, AUTH_STRICT_CONFIG)
}


class RateLimitStore(Protocol):
    async def hit(self, key: str, config: RateLimitConfig, now_ms: int) -> RateLimitResult: ...


class MemoryRateLimitStore:
    """Process-local store. One instance per application (or per test)."""

    def __init__(
        self,
        sweep_probability: float = _SWEEP_PROBABILITY,
        rng: Callable[[], float] = random.random,
    ) -> None:
        self._entries: dict[str, RateLimitEntry] = {}
        self._lock = threading.Lock()
        self._sweep_probability = sweep_probability
        self._rng = rng

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, key: str) -> RateLimitEntry | None:
        return self._entries.get(key)

    def sweep(self, now_ms: int) -> int:
        """Evict expired entries. Returns how many were removed."""
        with self._lock:
            expired = [k for k, e in self._entries.items() if e.expired(now_ms)]
            for key in expired:
                del self._entries[key]
        return len(expired)

    async def hit(self, key: str, config: RateLimitConfig, now_ms: int) -> RateLimitResult:
        if self._rng() < self._sweep_probability:
            self.sweep(now_ms)

        with self._lock:
            entry = self._entries.get(key)

            if entry is None or entry.expired(now_ms):
                reset_time = now_ms + config.window_ms
                self._entries[key] = RateLimitEntry(count=1, reset_time=reset_time)
                return RateLimitResult(
                    allowed=True,
                    limit=config.max_requests,
                    remaining=config.max_requests - 1,
                    reset_at=reset_time,
                )

            if entry.count >= config.max_requests:
                return RateLimitResult(
                    allowed=False,
                    limit=config.max_requests,
                    remaining=0,
                    reset_at=entry.reset_time,
                )

            entry.count += 1
            return RateLimitResult(
                allowed=True,
                limit=config.max_requests,
                remaining=config.max_requests - entry.count,
                reset_at=entry.reset_time,
            )


class RedisRateLimitStore:
    """Shared fixed-window store: INCR + PEXPIRE on "ratelimit:<key>".

    Denied requests still increment the counter; the decision only looks
    at whether the count went past max_requests, so the outcome matches
    the memory store.
    """

    def __init__(self, redis_factory: Callable[[], Awaitable[aioredis.Redis]]) -> None:
        # redis_factory is awaited lazily so the pool is only opened on first use
        self._redis_factory = redis_factory

    async def hit(self, key: str, config: RateLimitConfig, now_ms: int) -> RateLimitResult:
        redis = await self._redis_factory()
        redis_key = f"ratelimit:{key}"

        count = int(await redis.incr(redis_key))
        if count == 1:
            await redis.pexpire(redis_key, config.window_ms)
            ttl_ms = config.window_ms
        else:
            ttl_ms = int(await redis.pttl(redis_key))
            if ttl_ms < 0:
                # Key lost its TTL (crash between INCR and PEXPIRE): restart the window
                await redis.pexpire(redis_key, config.window_ms)
                ttl_ms = config.window_ms

        reset_at = now_ms + ttl_ms
        if count > config.max_requests:
            return RateLimitResult(
                allowed=False, limit=config.max_requests, remaining=0, reset_at=reset_at
            )
        return RateLimitResult(
            allowed=True,
            limit=config.max_requests,
            remaining=config.max_requests - count,
            reset_at=reset_at,
        )


class RateLimiter:
    """Checks identifiers against a preset. Never raises.

    When the store itself fails (e.g. Redis unreachable) the request is
    allowed if fail_open is set, otherwise denied until one window passes.
    """

    def __init__(
        self,
        store: RateLimitStore | None = None,
        clock: Callable[[], int] = epoch_ms,
        fail_open: bool = True,
    ) -> None:
        self.store: RateLimitStore = store or MemoryRateLimitStore()
        self._clock = clock
        self._fail_open = fail_open

    def now(self) -> int:
        return self._clock()

    async def check(
        self, identifier: str, config: RateLimitConfig | None = None
    ) -> RateLimitResult:
        config = config or DEFAULT_CONFIG
        now_ms = self._clock()
        try:
            return await self.store.hit(f"{config.name}:{identifier}", config, now_ms)
        except Exception:
            logger.warning(
                "rate-limit store failure (preset=%s, fail_open=%s)",
                config.name,
                self._fail_open,
                exc_info=True,
            )
            return RateLimitResult(
                allowed=self._fail_open,
                limit=config.max_requests,
                remaining=config.max_requests if self._fail_open else 0,
                reset_at=now_ms + config.window_ms,
            )


def build_rate_limiter() -> RateLimiter:
    """Construct the application's limiter from settings."""
    if settings.RATE_LIMIT_BACKEND == "redis":
        store: RateLimitStore = RedisRateLimitStore(get_redis)
    else:
        store = MemoryRateLimitStore()
    return RateLimiter(store=store, fail_open=settings.RATE_LIMIT_FAIL_OPEN)
