"""Reusable pydantic field types for panel payloads."""

from typing import Annotated, ClassVar

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    HttpUrl,
    TypeAdapter,
    ValidationError,
    model_validator,
)

_HTTP_URL = TypeAdapter(HttpUrl)


def _check_http_url(value: str) -> str:
    # Validate as a URL but keep the caller's string: the DB column is TEXT
    try:
        _HTTP_URL.validate_python(value)
    except ValidationError:
        raise ValueError("Invalid URL") from None
    return value


UrlStr = Annotated[str, AfterValidator(_check_http_url)]


class PartialUpdateModel(BaseModel):
    """Base for PATCH payloads: every field optional, some never null.

    Omitted fields are left alone (model_dump(exclude_unset=True)); an
    explicit null clears a nullable column but is rejected for columns
    listed in ``non_nullable``.
    """

    model_config = ConfigDict(use_enum_values=True)

    non_nullable: ClassVar[tuple[str, ...]] = ()

    @model_validator(mode="after")
    def _reject_null_required(self) -> "PartialUpdateModel":
        for name in self.non_nullable:
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self
