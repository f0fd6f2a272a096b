"""Request-body reading: parse JSON → sanitize → validate.

Handlers call read_payload() after their guard has passed, so a rejected
request never has its body parsed and a malformed body never reaches
the database.
"""

from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar, cast

from fastapi import Request
from pydantic import BaseModel, ValidationError

from src.cm_common.errors import InvalidInputError, MalformedBodyError
from src.cm_gateway.security.sanitize import sanitize

ModelT = TypeVar("ModelT", bound=BaseModel)


@dataclass(frozen=True)
class PayloadResult(Generic[ModelT]):
    """Either a validated model or the list of field errors."""

    data: ModelT | None = None
    errors: list[dict[str, str]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.data is not None and not self.errors


def _field_errors(exc: ValidationError) -> list[dict[str, str]]:
    details = []
    for err in exc.errors():
        message = str(err["msg"])
        # Custom validators surface as "Value error, <our message>"
        message = message.removeprefix("Value error, ")
        details.append({
            "field": ".".join(str(part) for part in err["loc"]),
            "message": message,
        })
    return details


def validate_and_sanitize(model: type[ModelT], data: Any) -> PayloadResult[ModelT]:
    cleaned = sanitize(data)
    try:
        return PayloadResult(data=model.model_validate(cleaned))
    except ValidationError as exc:
        return PayloadResult(errors=_field_errors(exc))


async def read_json(request: Request) -> Any:
    try:
        return await request.json()
    except ValueError:
        # json.JSONDecodeError and UnicodeDecodeError are both ValueErrors
        raise MalformedBodyError() from None


async def read_payload(request: Request, model: type[ModelT]) -> ModelT:
    result = validate_and_sanitize(model, await read_json(request))
    if not result.ok:
        raise InvalidInputError(result.errors)
    return cast(ModelT, result.data)
