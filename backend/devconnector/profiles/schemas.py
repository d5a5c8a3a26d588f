"""Profile request schemas and response shaping."""

from datetime import date
from typing import Any

from pydantic import Field

from ..validation import Flag, RequestModel, optional, required
from .models import Profile


class ProfileRequest(RequestModel):
    company: str | None = None
    website: str | None = None
    location: str | None = None
    bio: str | None = None
    status: required("Status is required") = None
    githubusername: str | None = None
    # Comma-separated, e.g. "python, go , rust"
    skills: required("Skills is required") = None

    youtube: str | None = None
    twitter: str | None = None
    facebook: str | None = None
    linkedin: str | None = None
    instagram: str | None = None


class ExperienceRequest(RequestModel):
    title: required("Title is required") = None
    company: required("company is required") = None
    location: optional() = None
    from_: required("From date is required", date) = Field(None, alias="from")
    # Sent as "" while the job is current
    to: optional(date) = None
    current: Flag = False
    description: optional() = None


class EducationRequest(RequestModel):
    school: required("School is required") = None
    degree: required("Degree is required") = None
    fieldofstudy: required("Field of study is required") = None
    from_: required("From date is required", date) = Field(None, alias="from")
    to: optional(date) = None
    current: Flag = False
    description: optional() = None


_SCALAR_FIELDS = ("company", "website", "location", "bio", "status", "githubusername")


def serialize_profile(profile: Profile, populate: bool = False) -> dict[str, Any]:
    """Shape a profile for JSON output, omitting fields that were never set.

    With ``populate`` the ``user`` reference is expanded to id, name and avatar.
    """
    if populate and profile.user is not None:
        user: Any = {
            "id": str(profile.user.id),
            "name": profile.user.name,
            "avatar": profile.user.avatar,
        }
    else:
        user = str(profile.user_id)

    data: dict[str, Any] = {"id": str(profile.id), "user": user}
    for name in _SCALAR_FIELDS:
        value = getattr(profile, name)
        if value is not None:
            data[name] = value
    data["skills"] = list(profile.skills or [])
    data["social"] = dict(profile.social or {})
    data["experience"] = list(profile.experience or [])
    data["education"] = list(profile.education or [])
    data["date"] = profile.date.isoformat() if profile.date else None
    return data
