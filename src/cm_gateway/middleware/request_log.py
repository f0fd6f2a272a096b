"""Access log for the church-admin API.

One "cm.request" line per request: method, path, status, latency and a
request ID. The ID is set on request.state before any route guard runs,
so the "cm.security" lines for rate-limit and role denials carry the
same req_ value. It is echoed back in the X-Request-ID header.

Guard rejections (401, 429) log at WARNING, everything else at INFO:

    INFO    [GET] /api/members → 200 (12ms) req_a1b2c3d4e5f6
    WARNING [POST] /api/auth/login → 429 (1ms) req_0f9e8d7c6b5a
"""

import logging
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("cm.request")

GUARD_REJECTIONS = frozenset({401, 429})


def request_id_of(request: Request) -> str:
    """The current request's ID, or "-" outside the middleware (bare unit tests)."""
    return getattr(request.state, "request_id", "-")


class RequestLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = f"req_{uuid.uuid4().hex[:12]}"
        request.state.request_id = request_id

        start = time.perf_counter()
        response: Response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000

        response.headers["X-Request-ID"] = request_id
        level = logging.WARNING if response.status_code in GUARD_REJECTIONS else logging.INFO
        logger.log(
            level,
            "[%s] %s → %d (%.0fms) %s",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
            request_id,
        )
        return response
