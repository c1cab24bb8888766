"""User repository protocol."""

from typing import Protocol
from uuid import UUID


class IUserRepository(Protocol):
    """Repository interface for account records."""

    async def delete(self, id: UUID) -> bool:
        """Delete a user and return whether a record was removed."""
        ...
