"""Shared Redis pool backing the rate limiter when RATE_LIMIT_BACKEND="redis".

RedisRateLimitStore keeps one counter per window under
``ratelimit:<preset>:<client>`` with a PEXPIRE equal to the window, so
every worker process sees the same counts. With the default "memory"
backend nothing here is called and no connection is opened.

The lifespan calls check_redis() at startup. An unreachable server is
only a warning while RATE_LIMIT_FAIL_OPEN is set, matching how the
limiter itself treats store errors; otherwise startup fails.
"""

import logging

import redis.asyncio as aioredis
from redis.exceptions import RedisError

from config.settings import settings

logger = logging.getLogger("cm.security")

_redis_pool: aioredis.Redis | None = None


async def get_redis() -> aioredis.Redis:
    """Return the limiter's pool, creating it on first use."""
    global _redis_pool  # noqa: PLW0603
    if _redis_pool is None:
        _redis_pool = aioredis.from_url(settings.REDIS_URL, decode_responses=True)
    return _redis_pool


async def check_redis() -> bool:
    redis = await get_redis()
    try:
        await redis.ping()
    except (RedisError, OSError):
        if not settings.RATE_LIMIT_FAIL_OPEN:
            raise
        logger.warning(
            "rate-limit store %s unreachable at startup; limiter will fail open",
            settings.REDIS_URL,
            exc_info=True,
        )
        return False
    return True


async def close_redis() -> None:
    global _redis_pool  # noqa: PLW0603
    if _redis_pool is not None:
        await _redis_pool.aclose()
        _redis_pool = None
