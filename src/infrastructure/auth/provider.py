"""Caller identity as carried by a bearer token."""

from dataclasses import dataclass
from typing import Optional, Protocol
from uuid import UUID


@dataclass
class TokenUser:
    """The account a request acts for. ``id`` keys the user's profile."""

    id: UUID
    email: Optional[str] = None
    name: Optional[str] = None


class IAuthProvider(Protocol):
    """Verifies and issues bearer tokens."""

    async def validate_token(self, token: str) -> Optional[TokenUser]:
        """Return the token's user, or None if it must be rejected."""
        ...

    def create_token(self, user: TokenUser) -> str:
        """Sign a token for ``user``."""
        ...
