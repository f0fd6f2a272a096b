"""Unified error codes and custom exceptions.

Every AppError is rendered by the handler in src/main.py into the JSON
envelope the panel client expects: {"error": "<message>", ...extra}.

Error code ranges:
  1xxx: Auth/Session
  2xxx: Request payload
  3xxx: Records
  9xxx: System
"""

from typing import Any


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        code: int,
        message: str,
        http_status: int = 500,
        headers: dict[str, str] | None = None,
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        self.headers = headers
        super().__init__(message)

    def extra(self) -> dict[str, Any]:
        """Fields merged into the error envelope next to "error"."""
        return {}


# --- 1xxx: Auth/Session ---

class UnauthenticatedError(AppError):
    def __init__(self) -> None:
        super().__init__(1001, "Unauthorized", 401)


class ForbiddenRoleError(AppError):
    """Caller is signed in but its role is outside the endpoint's role set.

    Reported with the same 401 envelope as UnauthenticatedError.
    """

    def __init__(self, role: str) -> None:
        self.role = role
        super().__init__(1002, "Unauthorized", 401)


class InvalidCredentialsError(AppError):
    def __init__(self) -> None:
        super().__init__(1003, "Invalid credentials", 401)


class RegistrationFailedError(AppError):
    """Generic on purpose: never reveals whether the email already exists."""

    def __init__(self, http_status: int = 400) -> None:
        super().__init__(1004, "Registration failed. Please try again.", http_status)


# --- 2xxx: Request payload ---

class MalformedBodyError(AppError):
    def __init__(self) -> None:
        super().__init__(2001, "Invalid request body", 400)


class InvalidInputError(AppError):
    def __init__(self, details: list[dict[str, str]]) -> None:
        self.details = details
        super().__init__(2002, "Invalid input", 400)

    def extra(self) -> dict[str, Any]:
        return {"details": self.details}


class EmptyUpdateError(AppError):
    def __init__(self) -> None:
        super().__init__(2003, "No fields to update", 400)


# --- 3xxx: Records ---

class RecordNotFoundError(AppError):
    def __init__(self, entity: str, record_id: str) -> None:
        self.entity = entity
        self.record_id = record_id
        super().__init__(3001, "Not found", 404)


# --- 9xxx: System ---

class RateLimitError(AppError):
    def __init__(self, limit: int, reset_at_ms: int, retry_after: int) -> None:
        self.limit = limit
        self.reset_at_ms = reset_at_ms
        self.retry_after = retry_after
        super().__init__(
            9001,
            "Too many requests",
            429,
            headers={
                "X-RateLimit-Limit": str(limit),
                "X-RateLimit-Remaining": "0",
                "X-RateLimit-Reset": str(-(-reset_at_ms // 1000)),
                "Retry-After": str(retry_after),
            },
        )

    def extra(self) -> dict[str, Any]:
        return {"retryAfter": self.retry_after}


class InternalError(AppError):
    def __init__(self, detail: str = "Internal server error") -> None:
        super().__init__(9002, detail, 500)
