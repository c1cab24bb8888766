"""Request-body presence checks run as route dependencies.

Each route lists its guards in ``dependencies=[...]``; FastAPI resolves them
in order, so authentication runs first and the field checks only run for
authenticated callers. Every failing field is reported, not just the first.
"""

import json
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

from fastapi import Request

from core.exceptions import FieldValidationError


@dataclass(frozen=True, slots=True)
class FieldCheck:
    """A single "field must be present and non-empty" rule."""

    param: str
    message: str

    def passes(self, body: dict[str, Any]) -> bool:
        value = body.get(self.param)
        if value is None:
            return False
        if isinstance(value, (str, list, dict)) and not value:
            return False
        return True

    def error(self) -> dict[str, str]:
        return {"msg": self.message, "param": self.param, "location": "body"}


def check(param: str, message: str) -> FieldCheck:
    """Shorthand for building a FieldCheck."""
    return FieldCheck(param=param, message=message)


async def _read_body(request: Request) -> dict[str, Any]:
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return {}
    return body if isinstance(body, dict) else {}


def require_fields(*checks: FieldCheck) -> Callable[[Request], Awaitable[None]]:
    """Build a dependency that rejects the request if any check fails."""

    async def guard(request: Request) -> None:
        body = await _read_body(request)
        errors = [c.error() for c in checks if not c.passes(body)]
        if errors:
            raise FieldValidationError(errors)

    return guard


profile_fields = require_fields(
    check("status", "Status is required"),
    check("skills", "Skills are required"),
)

experience_fields = require_fields(
    check("title", "Title is required"),
    check("company", "Company is required"),
    check("from", "From Date is required"),
)

education_fields = require_fields(
    check("school", "School is required"),
    check("degree", "Degree is required"),
    check("fieldOfStudy", "Field of Study is required"),
    check("from", "From Date is required"),
)
