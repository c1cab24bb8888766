"""Bearer-token authentication for caller-scoped routes."""

from typing import Annotated

import structlog
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from core.exceptions import AuthenticationError, ErrorCode
from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.auth.provider import TokenUser

logger = structlog.get_logger()

# auto_error=False so a missing header reaches our own 401 message
security = HTTPBearer(auto_error=False)

_auth_provider: JWTAuthProvider | None = None


def get_auth_provider() -> JWTAuthProvider:
    """Return the process-wide token verifier."""
    global _auth_provider
    if _auth_provider is None:
        _auth_provider = JWTAuthProvider()
    return _auth_provider


async def get_current_user(
    credentials: Annotated[
        HTTPAuthorizationCredentials | None,
        Depends(security),
    ],
    auth_provider: JWTAuthProvider = Depends(get_auth_provider),
) -> TokenUser:
    """
    Resolve the caller from the ``Authorization: Bearer`` header.

    Raises:
        AuthenticationError: "No token, authorization denied" when the header
            is absent, "Token is not valid" when verification fails.
    """
    if not credentials:
        raise AuthenticationError(
            message="No token, authorization denied",
            error_code=ErrorCode.UNAUTHORIZED,
        )

    user = await auth_provider.validate_token(credentials.credentials)
    if not user:
        logger.info("token_rejected")
        raise AuthenticationError(
            message="Token is not valid",
            error_code=ErrorCode.INVALID_TOKEN,
        )

    structlog.contextvars.bind_contextvars(user_id=str(user.id))
    return user


CurrentUser = Annotated[TokenUser, Depends(get_current_user)]
