"""Custom exceptions and error codes."""

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Standardized error codes for the API."""

    # Authentication errors (401)
    UNAUTHORIZED = "UNAUTHORIZED"
    INVALID_TOKEN = "INVALID_TOKEN"

    # Lookup errors (surfaced as 400)
    PROFILE_NOT_FOUND = "PROFILE_NOT_FOUND"
    GITHUB_PROFILE_NOT_FOUND = "GITHUB_PROFILE_NOT_FOUND"

    # Validation errors (400)
    VALIDATION_ERROR = "VALIDATION_ERROR"


class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Any | None = None,
    ) -> None:
        self.error_code = error_code
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class AuthenticationError(AppException):
    """Authentication failed."""

    def __init__(
        self,
        message: str = "No token, authorization denied",
        error_code: ErrorCode = ErrorCode.UNAUTHORIZED,
    ) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=401,
        )


class ProfileNotFoundError(AppException):
    """Profile not found.

    Reported as 400 rather than 404, matching the rest of the profile API.
    """

    def __init__(self, message: str = "Profile not found") -> None:
        super().__init__(
            error_code=ErrorCode.PROFILE_NOT_FOUND,
            message=message,
            status_code=400,
        )


class FieldValidationError(AppException):
    """One or more request fields failed validation.

    ``errors`` is a list of ``{"msg", "param", "location"}`` dicts.
    """

    def __init__(self, errors: list[dict[str, Any]]) -> None:
        super().__init__(
            error_code=ErrorCode.VALIDATION_ERROR,
            message="Request validation failed",
            status_code=400,
            details=errors,
        )


class GithubProfileNotFoundError(AppException):
    """GitHub answered the repository listing with a non-200 status."""

    def __init__(self, username: str) -> None:
        super().__init__(
            error_code=ErrorCode.GITHUB_PROFILE_NOT_FOUND,
            message="No Github profile found",
            status_code=400,
            details={"username": username},
        )
