"""Profile service layer with business logic."""

from datetime import date, datetime
from typing import Any, Callable, List, Mapping, Optional, Protocol
from uuid import UUID

import structlog

from core.exceptions import (
    FieldValidationError,
    GithubProfileNotFoundError,
    ProfileNotFoundError,
)
from domain.entities.profile import (
    SOCIAL_NETWORKS,
    Education,
    Experience,
    Profile,
    SocialLinks,
)
from domain.normalization import normalize_url, split_skills
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()

# Free-form attributes a caller may set on a profile besides the validated ones
OPTIONAL_PROFILE_FIELDS = ("company", "location", "bio", "githubusername")

NO_PROFILE_FOR_USER = "There is no profile for this user"


class IGitHubClient(Protocol):
    """Outbound repository listing client."""

    async def list_repos(self, username: str) -> Any | None:
        """Return the decoded listing, or None when GitHub has no such user."""
        ...


class ProfileService:
    """Service layer for Profile business logic."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        github_client: IGitHubClient,
    ) -> None:
        self._uow_factory = uow_factory
        self._github = github_client

    async def get_own(self, user_id: UUID) -> Profile:
        """Get the caller's profile."""
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get_by_user(user_id)
            if not profile:
                raise ProfileNotFoundError(NO_PROFILE_FOR_USER)
            return profile

    async def get_all(self) -> List[Profile]:
        """Get every profile."""
        async with self._uow_factory() as uow:
            return await uow.profiles.get_all()  # type: ignore[no-any-return]

    async def get_by_user_id(self, user_id: str) -> Profile:
        """Get a profile by its owner's ID.

        Malformed IDs are reported exactly like unknown ones.
        """
        try:
            owner_id = UUID(user_id)
        except ValueError:
            raise ProfileNotFoundError() from None

        async with self._uow_factory() as uow:
            profile = await uow.profiles.get_by_user(owner_id)
            if not profile:
                raise ProfileNotFoundError()
            return profile

    async def upsert(
        self,
        user_id: UUID,
        status: str,
        skills: str | list[str],
        website: Optional[str] = None,
        social: Optional[Mapping[str, Optional[str]]] = None,
        optional_fields: Optional[Mapping[str, Optional[str]]] = None,
    ) -> Profile:
        """
        Create the caller's profile, or replace the submitted fields of it.

        ``website``, ``skills``, ``status`` and ``social`` are always replaced.
        Keys of ``optional_fields`` outside the allow-list are ignored.
        """
        skill_list = split_skills(skills) if skills else []
        errors: list[dict[str, str]] = []
        if not status:
            errors.append(_field_error("status", "Status is required"))
        if not skill_list:
            errors.append(_field_error("skills", "Skills are required"))
        normalized_website = _url_field("website", website, errors) if website else ""
        social_links = SocialLinks(
            **{
                network: _url_field(network, value, errors) if value else value
                for network, value in (social or {}).items()
                if network in SOCIAL_NETWORKS
            }
        )
        if errors:
            raise FieldValidationError(errors)

        extras = {
            key: value
            for key, value in (optional_fields or {}).items()
            if key in OPTIONAL_PROFILE_FIELDS
        }

        async with self._uow_factory() as uow:
            profile = await uow.profiles.get_by_user(user_id)

            if profile:
                profile.status = status
                profile.skills = skill_list
                profile.website = normalized_website
                profile.social = social_links
                for key, value in extras.items():
                    setattr(profile, key, value)
                profile.updated_at = datetime.utcnow()

                updated = await uow.profiles.update(profile)
                await uow.commit()
                return updated

            profile = Profile(
                user_id=user_id,
                status=status,
                skills=skill_list,
                website=normalized_website,
                social=social_links,
                **extras,
            )
            created = await uow.profiles.create(profile)
            await uow.commit()
            logger.info("profile_created", user_id=str(user_id))
            return created

    async def delete_account(self, user_id: UUID) -> None:
        """
        Delete the caller's posts, then profile, then user record.

        Each step is committed before the next one runs; absent records
        are treated as already removed.
        """
        async with self._uow_factory() as uow:
            posts_deleted = await uow.posts.delete_all_for_user(user_id)
            await uow.commit()

            await uow.profiles.delete_for_user(user_id)
            await uow.commit()

            await uow.users.delete(user_id)
            await uow.commit()

        logger.info(
            "account_deleted",
            user_id=str(user_id),
            posts_deleted=posts_deleted,
        )

    async def add_experience(
        self,
        user_id: UUID,
        title: str,
        company: str,
        from_date: Optional[date],
        location: Optional[str] = None,
        to_date: Optional[date] = None,
        current: bool = False,
        description: Optional[str] = None,
    ) -> Profile:
        """Prepend a work-experience entry to the caller's profile."""
        missing = []
        if not title:
            missing.append(_field_error("title", "Title is required"))
        if not company:
            missing.append(_field_error("company", "Company is required"))
        if not from_date:
            missing.append(_field_error("from", "From Date is required"))
        if missing:
            raise FieldValidationError(missing)

        async with self._uow_factory() as uow:
            profile = await self._require_profile(uow, user_id)
            profile.add_experience(
                Experience(
                    title=title,
                    company=company,
                    from_date=from_date,  # type: ignore[arg-type]
                    location=location,
                    to_date=to_date,
                    current=current,
                    description=description,
                )
            )
            updated = await uow.profiles.update(profile)
            await uow.commit()
            return updated

    async def remove_experience(self, user_id: UUID, experience_id: str) -> Profile:
        """Remove an experience entry. Unknown IDs leave the profile unchanged."""
        async with self._uow_factory() as uow:
            profile = await self._require_profile(uow, user_id)
            if not profile.remove_experience(experience_id):
                logger.info(
                    "experience_not_found",
                    user_id=str(user_id),
                    experience_id=experience_id,
                )
            updated = await uow.profiles.update(profile)
            await uow.commit()
            return updated

    async def add_education(
        self,
        user_id: UUID,
        school: str,
        degree: str,
        field_of_study: str,
        from_date: Optional[date],
        to_date: Optional[date] = None,
        current: bool = False,
        description: Optional[str] = None,
    ) -> Profile:
        """Prepend an education entry to the caller's profile."""
        missing = []
        if not school:
            missing.append(_field_error("school", "School is required"))
        if not degree:
            missing.append(_field_error("degree", "Degree is required"))
        if not field_of_study:
            missing.append(_field_error("fieldOfStudy", "Field of Study is required"))
        if not from_date:
            missing.append(_field_error("from", "From Date is required"))
        if missing:
            raise FieldValidationError(missing)

        async with self._uow_factory() as uow:
            profile = await self._require_profile(uow, user_id)
            profile.add_education(
                Education(
                    school=school,
                    degree=degree,
                    field_of_study=field_of_study,
                    from_date=from_date,  # type: ignore[arg-type]
                    to_date=to_date,
                    current=current,
                    description=description,
                )
            )
            updated = await uow.profiles.update(profile)
            await uow.commit()
            return updated

    async def remove_education(self, user_id: UUID, education_id: str) -> Profile:
        """Remove an education entry. Unknown IDs leave the profile unchanged."""
        async with self._uow_factory() as uow:
            profile = await self._require_profile(uow, user_id)
            if not profile.remove_education(education_id):
                logger.info(
                    "education_not_found",
                    user_id=str(user_id),
                    education_id=education_id,
                )
            updated = await uow.profiles.update(profile)
            await uow.commit()
            return updated

    async def get_github_repos(self, username: str) -> Any:
        """Relay the GitHub repository listing for ``username``."""
        repos = await self._github.list_repos(username)
        if repos is None:
            raise GithubProfileNotFoundError(username)
        return repos

    async def _require_profile(self, uow: IUnitOfWork, user_id: UUID) -> Profile:
        """Load the caller's profile or fail with NotFound."""
        profile = await uow.profiles.get_by_user(user_id)
        if not profile:
            raise ProfileNotFoundError(NO_PROFILE_FOR_USER)
        return profile


def _field_error(param: str, message: str) -> dict[str, str]:
    return {"msg": message, "param": param, "location": "body"}


def _url_field(param: str, value: str, errors: list[dict[str, str]]) -> str:
    """Normalize a submitted URL, recording a field error if it cannot be parsed."""
    try:
        return normalize_url(value)
    except ValueError:
        errors.append(_field_error(param, "Please include a valid URL"))
        return value
