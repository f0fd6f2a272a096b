"""Unified API error envelope.

Error responses share one shape:
{
    "error": "Invalid input",          // always present
    "details": [{"field", "message"}], // validation failures only
    "retryAfter": 42                   // rate-limit rejections only
}

Success responses are the bare payload (row, list of rows, {"id": ...}
or {"success": true}); the panel client reads them directly.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from src.cm_common.errors import AppError


class FieldErrorOut(BaseModel):
    field: str
    message: str


class ErrorResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    error: str
    details: list[FieldErrorOut] | None = None
    retry_after: int | None = Field(default=None, alias="retryAfter")

    def to_body(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


def error_response(message: str, **extra: Any) -> ErrorResponse:
    return ErrorResponse(error=message, **extra)


def error_from_exception(exc: AppError) -> ErrorResponse:
    return error_response(exc.message, **exc.extra())


def success_flag() -> dict[str, bool]:
    return {"success": True}
