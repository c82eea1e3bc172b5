"""Shared schema base classes and response envelopes."""

from typing import Annotated, Generic, Literal, TypeVar

from email_validator import validate_email
from pydantic import AfterValidator, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# Account types and role names share one vocabulary.
UserType = Literal["admin", "user", "owner"]

T = TypeVar("T")


def check_email(value: str) -> str:
    """Reject malformed addresses; return the input unchanged (emails are matched exactly)."""
    validate_email(value, check_deliverability=False)
    return value


Email = Annotated[str, AfterValidator(check_email)]


class CamelModel(BaseModel):
    """Base for API payloads: snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class MessageResponse(CamelModel):
    """Envelope for successful writes."""

    status: Literal["success"] = "success"
    message: str = Field(..., description="Human-readable outcome")


class DataResponse(CamelModel, Generic[T]):
    """Envelope for successful reads."""

    status: Literal["success"] = "success"
    data: T


class ErrorResponse(CamelModel):
    """Body of every error response."""

    status: Literal["error"] = "error"
    message: str
