"""Per-endpoint rate limiting, run first by every route guard.

Presets (see security/rate_limiter.py):
  - default      15 min / 100 req  public reads (events, streams)
  - strict        1 min /  10 req  authenticated panel API
  - auth_strict   1 min /   5 req  login / register (anti brute-force)

A rejected request raises RateLimitError, rendered as 429 with
X-RateLimit-Limit / -Remaining / -Reset and Retry-After headers.
Allowed requests get the three X-RateLimit-* headers as well.

The limiter lives on app.state so each app (and each test) owns its store.
"""

import logging
import math

from fastapi import Request, Response

from src.cm_common.errors import RateLimitError
from src.cm_gateway.middleware.request_log import request_id_of
from src.cm_gateway.security.identity import get_client_identifier
from src.cm_gateway.security.rate_limiter import (
    DEFAULT_CONFIG,
    RateLimitConfig,
    RateLimiter,
    RateLimitResult,
)

logger = logging.getLogger("cm.security")


def get_rate_limiter(request: Request) -> RateLimiter:
    return request.app.state.rate_limiter


async def enforce_rate_limit(
    request: Request,
    response: Response,
    config: RateLimitConfig = DEFAULT_CONFIG,
) -> RateLimitResult:
    limiter = get_rate_limiter(request)
    identifier = get_client_identifier(request.headers)
    result = await limiter.check(identifier, config)

    if not result.allowed:
        retry_after = result.retry_after_seconds(limiter.now())
        logger.warning(
            "rate limit exceeded: preset=%s client=%s path=%s retry_after=%ds %s",
            config.name,
            identifier,
            request.url.path,
            retry_after,
            request_id_of(request),
        )
        raise RateLimitError(result.limit, result.reset_at, retry_after)

    response.headers["X-RateLimit-Limit"] = str(result.limit)
    response.headers["X-RateLimit-Remaining"] = str(result.remaining)
    response.headers["X-RateLimit-Reset"] = str(math.ceil(result.reset_at / 1000))
    return result
