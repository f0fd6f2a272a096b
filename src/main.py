"""FastAPI application entry point.

Run with: uvicorn src.main:app --reload --port 8000
"""

# ruff: noqa: E402  -- uvloop.install() must run before other imports

import uvloop

uvloop.install()

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from config.settings import settings
from src.cm_common.database import engine
from src.cm_common.errors import AppError, InternalError, InvalidInputError
from src.cm_common.redis_client import check_redis, close_redis
from src.cm_common.response import error_from_exception
from src.cm_dashboard.api.router import router as dashboard_router
from src.cm_donations.api.router import router as donations_router
from src.cm_events.api.router import router as events_router
from src.cm_gateway.api.router import router as auth_router
from src.cm_gateway.middleware.request_log import RequestLogMiddleware
from src.cm_gateway.security.rate_limiter import build_rate_limiter
from src.cm_members.api.router import router as members_router
from src.cm_ministries.api.router import router as ministries_router
from src.cm_pastoral.api.router import router as pastoral_router
from src.cm_streams.api.router import router as streams_router
from src.cm_visitors.api.router import router as visitors_router

logger = logging.getLogger("cm.error")
logging.getLogger("cm").setLevel(settings.LOG_LEVEL)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup: verify DB (and Redis when it backs the limiter). Shutdown: dispose."""
    # Startup
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))
    if settings.RATE_LIMIT_BACKEND == "redis":
        await check_redis()
    yield
    # Shutdown
    await engine.dispose()
    await close_redis()


app = FastAPI(
    title=settings.APP_NAME,
    version="0.1.0",
    lifespan=lifespan,
)
app.state.rate_limiter = build_rate_limiter()


app.add_middleware(RequestLogMiddleware)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.http_status,
        content=error_from_exception(exc).to_body(),
        headers=exc.headers,
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    # Path/query parameters validated by FastAPI itself
    details = [
        {
            "field": ".".join(str(part) for part in err["loc"]),
            "message": str(err["msg"]),
        }
        for err in exc.errors()
    ]
    return await app_error_handler(request, InvalidInputError(details))


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error("database error on %s %s", request.method, request.url.path, exc_info=exc)
    return await app_error_handler(request, InternalError())


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return await app_error_handler(request, InternalError())


app.include_router(auth_router, prefix="/api")
app.include_router(events_router, prefix="/api")
app.include_router(streams_router, prefix="/api")
app.include_router(members_router, prefix="/api")
app.include_router(visitors_router, prefix="/api")
app.include_router(ministries_router, prefix="/api")
app.include_router(donations_router, prefix="/api")
app.include_router(pastoral_router, prefix="/api")
app.include_router(dashboard_router, prefix="/api")


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok", "version": "0.1.0"}
