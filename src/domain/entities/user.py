"""User value objects."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True, slots=True)
class UserSummary:
    """Read-only value object: the user fields attached to a profile."""

    id: UUID
    name: str | None = None
    avatar: str | None = None
