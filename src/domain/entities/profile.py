"""Profile domain entity and its embedded entries."""

from dataclasses import dataclass, field
from datetime import date, datetime
from uuid import UUID, uuid4

from domain.entities.user import UserSummary

SOCIAL_NETWORKS = ("youtube", "facebook", "twitter", "instagram", "linkedin")


@dataclass
class Experience:
    """A work-experience entry embedded in a profile."""

    title: str
    company: str
    from_date: date
    id: UUID = field(default_factory=uuid4)
    location: str | None = None
    to_date: date | None = None
    current: bool = False
    description: str | None = None


@dataclass
class Education:
    """An education entry embedded in a profile."""

    school: str
    degree: str
    field_of_study: str
    from_date: date
    id: UUID = field(default_factory=uuid4)
    to_date: date | None = None
    current: bool = False
    description: str | None = None


@dataclass
class SocialLinks:
    """Fixed set of social network URLs. Unset networks stay ``None``."""

    youtube: str | None = None
    facebook: str | None = None
    twitter: str | None = None
    instagram: str | None = None
    linkedin: str | None = None


@dataclass
class Profile:
    """Domain entity for a developer profile (one per user)."""

    user_id: UUID
    status: str
    skills: list[str]
    id: UUID = field(default_factory=uuid4)
    website: str = ""
    company: str | None = None
    location: str | None = None
    bio: str | None = None
    githubusername: str | None = None
    social: SocialLinks = field(default_factory=SocialLinks)
    experience: list[Experience] = field(default_factory=list)
    education: list[Education] = field(default_factory=list)
    user: UserSummary | None = None
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    def add_experience(self, entry: Experience) -> None:
        """Insert an experience entry at the front (most recent first)."""
        self.experience.insert(0, entry)
        self.updated_at = datetime.utcnow()

    def add_education(self, entry: Education) -> None:
        """Insert an education entry at the front (most recent first)."""
        self.education.insert(0, entry)
        self.updated_at = datetime.utcnow()

    def remove_experience(self, entry_id: str) -> bool:
        """Remove the experience entry with ``entry_id``.

        Returns False and leaves the list untouched when no entry matches.
        """
        index = _index_of(self.experience, entry_id)
        if index is None:
            return False
        del self.experience[index]
        self.updated_at = datetime.utcnow()
        return True

    def remove_education(self, entry_id: str) -> bool:
        """Remove the education entry with ``entry_id``.

        Returns False and leaves the list untouched when no entry matches.
        """
        index = _index_of(self.education, entry_id)
        if index is None:
            return False
        del self.education[index]
        self.updated_at = datetime.utcnow()
        return True

    def __post_init__(self) -> None:
        """Ensure updated_at is always at least as recent as created_at."""
        if self.updated_at < self.created_at:
            self.updated_at = self.created_at


def _index_of(entries: list[Experience] | list[Education], entry_id: str) -> int | None:
    # Any spelling of the UUID matches; malformed ids match nothing
    try:
        wanted = UUID(entry_id)
    except ValueError:
        return None
    for index, entry in enumerate(entries):
        if entry.id == wanted:
            return index
    return None
