"""Post repository protocol."""

from typing import Protocol
from uuid import UUID


class IPostRepository(Protocol):
    """Repository interface for a user's posts."""

    async def delete_all_for_user(self, user_id: UUID) -> int:
        """Delete every post written by a user and return the count removed."""
        ...
