"""Profile API routes."""

from typing import Any

from fastapi import APIRouter, Depends, Request

from api.dependencies.auth import CurrentUser, get_current_user
from api.v1.dependencies import get_profile_service
from api.v1.schemas.common import ErrorResponse, MsgResponse, ValidationErrorResponse
from api.v1.schemas.profile import (
    EducationCreate,
    ExperienceCreate,
    ProfileResponse,
    ProfileUpsert,
)
from api.v1.validators import education_fields, experience_fields, profile_fields
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.entities.profile import Profile
from domain.services.profile_service import OPTIONAL_PROFILE_FIELDS, ProfileService

router = APIRouter(prefix="/profile", tags=["profile"])

_NOT_FOUND = {400: {"model": ErrorResponse, "description": "Profile not found"}}
_INVALID = {400: {"model": ValidationErrorResponse, "description": "Missing fields"}}


def _to_response(profile: Profile) -> ProfileResponse:
    return ProfileResponse.model_validate(profile)


@router.get(
    "/me",
    response_model=ProfileResponse,
    summary="Get the caller's profile",
    responses=_NOT_FOUND,
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_my_profile(
    request: Request,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """Get the authenticated user's profile with their name and avatar."""
    profile = await service.get_own(user.id)
    return _to_response(profile)


@router.post(
    "",
    response_model=ProfileResponse,
    summary="Create or update the caller's profile",
    dependencies=[Depends(get_current_user), Depends(profile_fields)],
    responses=_INVALID,
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def upsert_profile(
    request: Request,
    body: ProfileUpsert,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """
    Create the profile on first call, replace the submitted fields afterwards.

    `skills` may be a list or a comma-separated string. `website` and social
    links are normalized to absolute https URLs.
    """
    profile = await service.upsert(
        user_id=user.id,
        status=body.status,
        skills=body.skills,
        website=body.website,
        social={
            "youtube": body.youtube,
            "facebook": body.facebook,
            "twitter": body.twitter,
            "instagram": body.instagram,
            "linkedin": body.linkedin,
        },
        optional_fields={
            key: getattr(body, key)
            for key in OPTIONAL_PROFILE_FIELDS
            if key in body.model_fields_set
        },
    )
    return _to_response(profile)


@router.get(
    "",
    response_model=list[ProfileResponse],
    summary="List all profiles",
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_profiles(
    request: Request,
    service: ProfileService = Depends(get_profile_service),
) -> list[ProfileResponse]:
    """Public listing of every profile."""
    profiles = await service.get_all()
    return [_to_response(profile) for profile in profiles]


@router.get(
    "/user/{user_id}",
    response_model=ProfileResponse,
    summary="Get a profile by user ID",
    responses=_NOT_FOUND,
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_profile_by_user(
    request: Request,
    user_id: str,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """Public lookup. Malformed and unknown IDs both answer "Profile not found"."""
    profile = await service.get_by_user_id(user_id)
    return _to_response(profile)


@router.delete(
    "",
    response_model=MsgResponse,
    summary="Delete the caller's account",
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def delete_account(
    request: Request,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> MsgResponse:
    """Delete the caller's posts, profile and user record, in that order."""
    await service.delete_account(user.id)
    return MsgResponse(msg="User deleted")


@router.put(
    "/experience",
    response_model=ProfileResponse,
    summary="Add an experience entry",
    dependencies=[Depends(get_current_user), Depends(experience_fields)],
    responses=_INVALID,
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def add_experience(
    request: Request,
    body: ExperienceCreate,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """Prepend an experience entry to the caller's profile."""
    profile = await service.add_experience(
        user_id=user.id,
        title=body.title,
        company=body.company,
        from_date=body.from_date,
        location=body.location,
        to_date=body.to_date,
        current=body.current,
        description=body.description,
    )
    return _to_response(profile)


@router.delete(
    "/experience/{exp_id}",
    response_model=ProfileResponse,
    summary="Remove an experience entry",
    responses=_NOT_FOUND,
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def remove_experience(
    request: Request,
    exp_id: str,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """Remove an experience entry. Unknown IDs return the profile unchanged."""
    profile = await service.remove_experience(user.id, exp_id)
    return _to_response(profile)


@router.put(
    "/education",
    response_model=ProfileResponse,
    summary="Add an education entry",
    dependencies=[Depends(get_current_user), Depends(education_fields)],
    responses=_INVALID,
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def add_education(
    request: Request,
    body: EducationCreate,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """Prepend an education entry to the caller's profile."""
    profile = await service.add_education(
        user_id=user.id,
        school=body.school,
        degree=body.degree,
        field_of_study=body.field_of_study,
        from_date=body.from_date,
        to_date=body.to_date,
        current=body.current,
        description=body.description,
    )
    return _to_response(profile)


@router.delete(
    "/education/{edu_id}",
    response_model=ProfileResponse,
    summary="Remove an education entry",
    responses=_NOT_FOUND,
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def remove_education(
    request: Request,
    edu_id: str,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """Remove an education entry. Unknown IDs return the profile unchanged."""
    profile = await service.remove_education(user.id, edu_id)
    return _to_response(profile)


@router.get(
    "/github/{username}",
    response_model=None,
    summary="List a user's GitHub repositories",
    responses={400: {"model": ErrorResponse, "description": "No Github profile found"}},
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_github_repos(
    request: Request,
    username: str,
    service: ProfileService = Depends(get_profile_service),
) -> Any:
    """Relay GitHub's five oldest repositories for `username` unchanged."""
    return await service.get_github_repos(username)
