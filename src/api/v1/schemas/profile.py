"""Pydantic schemas for Profile API."""

from datetime import date, datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ProfileUpsert(BaseModel):
    """Schema for creating or updating the caller's profile.

    ``status`` and ``skills`` presence is enforced by the route's field
    guards, so both default to empty here. Social links are sent flat.
    """

    model_config = ConfigDict(
        extra="ignore",
        json_schema_extra={
            "example": {
                "status": "Developer",
                "skills": "python, fastapi, postgres",
                "website": "example.com",
                "company": "Acme",
                "location": "Berlin",
                "githubusername": "octocat",
                "twitter": "twitter.com/octocat",
            }
        },
    )

    status: str = ""
    skills: str | list[str] = ""
    website: str | None = None
    company: str | None = None
    location: str | None = None
    bio: str | None = None
    githubusername: str | None = None
    youtube: str | None = None
    facebook: str | None = None
    twitter: str | None = None
    instagram: str | None = None
    linkedin: str | None = None


class _EntryCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    from_date: date = Field(..., alias="from")
    to_date: date | None = Field(None, alias="to")
    current: bool = False
    description: str | None = None

    @field_validator("to_date", mode="before")
    @classmethod
    def blank_to_none(cls, v: Any) -> Any:
        # Forms send "" for the end date of a current position
        return None if v == "" else v


class ExperienceCreate(_EntryCreate):
    """Schema for adding an experience entry."""

    title: str
    company: str
    location: str | None = None


class EducationCreate(_EntryCreate):
    """Schema for adding an education entry."""

    school: str
    degree: str
    field_of_study: str = Field(..., alias="fieldOfStudy")


class ProfileUserResponse(BaseModel):
    """User fields attached to a profile."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str | None = None
    avatar: str | None = None


class SocialLinksResponse(BaseModel):
    """Schema for social links."""

    model_config = ConfigDict(from_attributes=True)

    youtube: str | None = None
    facebook: str | None = None
    twitter: str | None = None
    instagram: str | None = None
    linkedin: str | None = None


class ExperienceResponse(BaseModel):
    """Schema for an experience entry."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: UUID
    title: str
    company: str
    location: str | None = None
    from_date: date = Field(alias="from")
    to_date: date | None = Field(None, alias="to")
    current: bool = False
    description: str | None = None


class EducationResponse(BaseModel):
    """Schema for an education entry."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: UUID
    school: str
    degree: str
    field_of_study: str = Field(alias="fieldOfStudy")
    from_date: date = Field(alias="from")
    to_date: date | None = Field(None, alias="to")
    current: bool = False
    description: str | None = None


class ProfileResponse(BaseModel):
    """Schema for Profile response."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: UUID
    user: ProfileUserResponse
    status: str
    skills: list[str]
    website: str = ""
    company: str | None = None
    location: str | None = None
    bio: str | None = None
    githubusername: str | None = None
    social: SocialLinksResponse
    experience: list[ExperienceResponse] = Field(default_factory=list)
    education: list[EducationResponse] = Field(default_factory=list)
    created_at: datetime = Field(alias="date")
    updated_at: datetime
