"""Common Pydantic schemas shared across the API."""

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Error response for lookups and auth failures."""

    msg: str


class FieldError(BaseModel):
    """A single failed field check."""

    msg: str
    param: str
    location: str = "body"


class ValidationErrorResponse(BaseModel):
    """Error response listing every failed field."""

    errors: list[FieldError]


class MsgResponse(BaseModel):
    """Simple confirmation message."""

    msg: str