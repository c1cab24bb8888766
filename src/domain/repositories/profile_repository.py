"""Profile repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.profile import Profile


class IProfileRepository(Protocol):
    """Repository interface for Profile entities.

    Returned profiles carry the linked user's summary in ``Profile.user``.
    """

    async def get_by_user(self, user_id: UUID) -> Profile | None:
        """Get the profile owned by a user."""
        ...

    async def get_all(self) -> list[Profile]:
        """Get every profile."""
        ...

    async def create(self, profile: Profile) -> Profile:
        """Create a new profile."""
        ...

    async def update(self, profile: Profile) -> Profile:
        """Persist all fields of an existing profile and return the new state."""
        ...

    async def delete_for_user(self, user_id: UUID) -> bool:
        """Delete the profile owned by a user and return whether one existed."""
        ...
