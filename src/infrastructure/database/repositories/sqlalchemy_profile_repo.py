"""SQLAlchemy implementation of Profile repository."""

from datetime import date
from typing import Any
from uuid import UUID

from sqlalchemy import Select, delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.profile import Education, Experience, Profile, SocialLinks
from domain.entities.user import UserSummary
from infrastructure.database.models import ProfileModel, UserModel


class SQLAlchemyProfileRepository:
    """SQLAlchemy implementation of IProfileRepository.

    Experience and education entries live in JSON columns on the profile
    row; dates are stored as ISO strings and IDs as strings.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_user(self, user_id: UUID) -> Profile | None:
        """Get the profile owned by a user, with the user's summary attached."""
        stmt = self._select_with_user().where(ProfileModel.user_id == user_id)
        result = await self._session.execute(stmt)
        row = result.one_or_none()
        if row is None:
            return None
        profile_model, user_model = row
        return self._to_entity(profile_model, user_model)

    async def get_all(self) -> list[Profile]:
        """Get every profile, oldest first."""
        stmt = self._select_with_user().order_by(ProfileModel.created_at)
        result = await self._session.execute(stmt)
        return [
            self._to_entity(profile_model, user_model)
            for profile_model, user_model in result
        ]

    async def create(self, profile: Profile) -> Profile:
        """Create a new profile."""
        model = self._to_model(profile)
        self._session.add(model)
        await self._session.flush()
        return await self._reload(profile.user_id)

    async def update(self, profile: Profile) -> Profile:
        """Update an existing profile."""
        stmt = select(ProfileModel).where(ProfileModel.id == profile.id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            raise ValueError(f"Profile {profile.id} not found")

        model.status = profile.status
        model.skills = list(profile.skills)
        model.website = profile.website
        model.company = profile.company
        model.location = profile.location
        model.bio = profile.bio
        model.githubusername = profile.githubusername
        model.social = self._social_to_dict(profile.social)
        model.experience = [self._experience_to_dict(e) for e in profile.experience]
        model.education = [self._education_to_dict(e) for e in profile.education]
        model.updated_at = profile.updated_at

        await self._session.flush()
        return await self._reload(profile.user_id)

    async def delete_for_user(self, user_id: UUID) -> bool:
        """Delete the profile owned by a user."""
        stmt = delete(ProfileModel).where(ProfileModel.user_id == user_id)
        result = await self._session.execute(stmt)
        await self._session.flush()
        return bool(result.rowcount)

    async def _reload(self, user_id: UUID) -> Profile:
        profile = await self.get_by_user(user_id)
        if profile is None:
            raise ValueError(f"Profile for user {user_id} not found")
        return profile

    def _select_with_user(self) -> Select[tuple[ProfileModel, UserModel]]:
        return select(ProfileModel, UserModel).outerjoin(
            UserModel, UserModel.id == ProfileModel.user_id
        )

    def _to_entity(self, model: ProfileModel, user: UserModel | None) -> Profile:
        """Convert ORM model (and its owner row, if any) to domain entity."""
        return Profile(
            id=model.id,
            user_id=model.user_id,
            status=model.status,
            skills=list(model.skills or []),
            website=model.website or "",
            company=model.company,
            location=model.location,
            bio=model.bio,
            githubusername=model.githubusername,
            social=SocialLinks(**(model.social or {})),
            experience=[self._experience_from_dict(e) for e in model.experience or []],
            education=[self._education_from_dict(e) for e in model.education or []],
            user=(
                UserSummary(id=user.id, name=user.name, avatar=user.avatar)
                if user
                else UserSummary(id=model.user_id)
            ),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, entity: Profile) -> ProfileModel:
        """Convert domain entity to ORM model."""
        return ProfileModel(
            id=entity.id,
            user_id=entity.user_id,
            status=entity.status,
            skills=list(entity.skills),
            website=entity.website,
            company=entity.company,
            location=entity.location,
            bio=entity.bio,
            githubusername=entity.githubusername,
            social=self._social_to_dict(entity.social),
            experience=[self._experience_to_dict(e) for e in entity.experience],
            education=[self._education_to_dict(e) for e in entity.education],
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )

    @staticmethod
    def _social_to_dict(social: SocialLinks) -> dict[str, Any]:
        return {
            "youtube": social.youtube,
            "facebook": social.facebook,
            "twitter": social.twitter,
            "instagram": social.instagram,
            "linkedin": social.linkedin,
        }

    @staticmethod
    def _experience_to_dict(entry: Experience) -> dict[str, Any]:
        return {
            "id": str(entry.id),
            "title": entry.title,
            "company": entry.company,
            "location": entry.location,
            "from": entry.from_date.isoformat(),
            "to": entry.to_date.isoformat() if entry.to_date else None,
            "current": entry.current,
            "description": entry.description,
        }

    @staticmethod
    def _experience_from_dict(data: dict[str, Any]) -> Experience:
        return Experience(
            id=UUID(data["id"]),
            title=data["title"],
            company=data["company"],
            location=data.get("location"),
            from_date=date.fromisoformat(data["from"]),
            to_date=date.fromisoformat(data["to"]) if data.get("to") else None,
            current=bool(data.get("current", False)),
            description=data.get("description"),
        )

    @staticmethod
    def _education_to_dict(entry: Education) -> dict[str, Any]:
        return {
            "id": str(entry.id),
            "school": entry.school,
            "degree": entry.degree,
            "fieldOfStudy": entry.field_of_study,
            "from": entry.from_date.isoformat(),
            "to": entry.to_date.isoformat() if entry.to_date else None,
            "current": entry.current,
            "description": entry.description,
        }

    @staticmethod
    def _education_from_dict(data: dict[str, Any]) -> Education:
        return Education(
            id=UUID(data["id"]),
            school=data["school"],
            degree=data["degree"],
            field_of_study=data["fieldOfStudy"],
            from_date=date.fromisoformat(data["from"]),
            to_date=date.fromisoformat(data["to"]) if data.get("to") else None,
            current=bool(data.get("current", False)),
            description=data.get("description"),
        )
