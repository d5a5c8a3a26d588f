"""Profile service: upsert, lookup, cascading delete and embedded entries."""

import uuid
from typing import Any
from uuid import UUID

from sqlalchemy.orm import Session, joinedload

from ..auth.models import User
from .models import Profile
from .schemas import EducationRequest, ExperienceRequest, ProfileRequest

SOCIAL_NETWORKS = ("youtube", "twitter", "facebook", "linkedin", "instagram")

ENTRY_KINDS = ("experience", "education")


def _to_uuid(value: str | UUID | None) -> UUID | None:
    """Convert string to UUID, returning None on failure."""
    if isinstance(value, UUID):
        return value
    if not value:
        return None
    try:
        return UUID(value)
    except (ValueError, AttributeError, TypeError):
        return None


def parse_skills(raw: str) -> list[str]:
    """Split a comma-separated skills string into trimmed, non-empty names."""
    return [skill.strip() for skill in raw.split(",") if skill.strip()]


def build_profile_fields(body: ProfileRequest) -> dict[str, Any]:
    """Collect only the fields the caller actually supplied.

    ``social`` is always present and rebuilt from scratch on every write.
    """
    fields: dict[str, Any] = {}
    for name in ("company", "website", "location", "bio", "status", "githubusername"):
        value = getattr(body, name)
        if value:
            fields[name] = value
    if body.skills:
        fields["skills"] = parse_skills(body.skills)

    social = {}
    for network in SOCIAL_NETWORKS:
        value = getattr(body, network)
        if value:
            social[network] = value
    fields["social"] = social
    return fields


def get_profile_by_user(db: Session, user_id: str | UUID) -> Profile | None:
    uid = _to_uuid(user_id)
    if uid is None:
        return None
    return (
        db.query(Profile)
        .options(joinedload(Profile.user))
        .filter(Profile.user_id == uid)
        .first()
    )


def list_profiles(db: Session) -> list[Profile]:
    return db.query(Profile).options(joinedload(Profile.user)).order_by(Profile.date.asc()).all()


def save_profile(db: Session, user_id: str | UUID, fields: dict[str, Any]) -> Profile:
    """Update the user's profile if one exists, otherwise create it.

    Two separate statements; ``profiles.user_id`` is unique, so a concurrent
    first insert for the same user fails instead of duplicating.
    """
    uid = _to_uuid(user_id)
    existing = db.query(Profile).filter(Profile.user_id == uid).first()
    if existing:
        for name, value in fields.items():
            setattr(existing, name, value)
    else:
        existing = Profile(user_id=uid, experience=[], education=[], **fields)
        db.add(existing)
    db.flush()
    return existing


def delete_profile_and_user(db: Session, user_id: str | UUID) -> bool:
    """Delete the user's profile, then the user. True if anything was removed."""
    uid = _to_uuid(user_id)
    if uid is None:
        return False
    # TODO: delete the user's posts here once posts exist
    deleted_profiles = db.query(Profile).filter(Profile.user_id == uid).delete(synchronize_session=False)
    deleted_users = db.query(User).filter(User.id == uid).delete(synchronize_session=False)
    db.flush()
    return bool(deleted_profiles or deleted_users)


def add_entry(db: Session, profile: Profile, kind: str, body: ExperienceRequest | EducationRequest) -> dict[str, Any]:
    """Prepend a new experience or education entry and return it."""
    if kind not in ENTRY_KINDS:
        raise ValueError(f"Unknown entry kind: {kind}")
    entry = {"id": uuid.uuid4().hex, **body.model_dump(mode="json", by_alias=True, exclude_none=True)}
    # Reassign rather than mutate so the JSON column is flagged dirty
    setattr(profile, kind, [entry, *(getattr(profile, kind) or [])])
    db.flush()
    return entry


def remove_entry(db: Session, profile: Profile, kind: str, entry_id: str) -> bool:
    """Remove the entry with ``entry_id``. False if no entry matched."""
    if kind not in ENTRY_KINDS:
        raise ValueError(f"Unknown entry kind: {kind}")
    entries = list(getattr(profile, kind) or [])
    remaining = [e for e in entries if e.get("id") != entry_id]
    if len(remaining) == len(entries):
        return False
    setattr(profile, kind, remaining)
    db.flush()
    return True
