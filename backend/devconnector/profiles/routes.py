"""Profile routes: own profile, public listing, and experience/education entries."""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from ..database.base import get_db
from ..dependencies import Identity, get_current_identity
from .schemas import EducationRequest, ExperienceRequest, ProfileRequest, serialize_profile
from .service import (
    add_entry,
    build_profile_fields,
    delete_profile_and_user,
    get_profile_by_user,
    list_profiles,
    remove_entry,
    save_profile,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/profile", tags=["profile"])


def _no_profile() -> JSONResponse:
    return JSONResponse({"msg": "There is no profile for this user"}, status_code=400)


@router.get("/me")
def my_profile(
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    profile = get_profile_by_user(db, identity.id)
    if not profile:
        return _no_profile()
    return serialize_profile(profile, populate=True)


@router.post("")
def create_or_update_profile(
    body: ProfileRequest,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    fields = build_profile_fields(body)
    profile = save_profile(db, identity.id, fields)
    db.commit()
    logger.info("Profile saved: user=%s, fields=%s", identity.id, ",".join(sorted(fields)))
    return serialize_profile(profile)


@router.get("")
def all_profiles(db: Session = Depends(get_db)):
    return [serialize_profile(p, populate=True) for p in list_profiles(db)]


@router.get("/user/{user_id}")
def profile_by_user(user_id: str, db: Session = Depends(get_db)):
    # Malformed ids and unknown users get the same answer
    profile = get_profile_by_user(db, user_id)
    if not profile:
        return JSONResponse({"msg": "Profile not found"}, status_code=400)
    return serialize_profile(profile, populate=True)


@router.delete("")
def delete_profile(
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    removed = delete_profile_and_user(db, identity.id)
    db.commit()
    if not removed:
        return {"msg": "No user to be removed"}
    logger.info("User and profile removed: user=%s", identity.id)
    return {"msg": "User removed"}


@router.put("/experience")
def add_experience(
    body: ExperienceRequest,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    profile = get_profile_by_user(db, identity.id)
    if not profile:
        return _no_profile()
    add_entry(db, profile, "experience", body)
    db.commit()
    return serialize_profile(profile)


@router.delete("/experience/{exp_id}")
def delete_experience(
    exp_id: str,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    profile = get_profile_by_user(db, identity.id)
    if not profile:
        return _no_profile()
    if not remove_entry(db, profile, "experience", exp_id):
        return {"msg": "No experience found"}
    db.commit()
    return serialize_profile(profile)


@router.put("/education")
def add_education(
    body: EducationRequest,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    profile = get_profile_by_user(db, identity.id)
    if not profile:
        return _no_profile()
    add_entry(db, profile, "education", body)
    db.commit()
    return serialize_profile(profile)


@router.delete("/education/{edu_id}")
def delete_education(
    edu_id: str,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    profile = get_profile_by_user(db, identity.id)
    if not profile:
        return _no_profile()
    if not remove_entry(db, profile, "education", edu_id):
        return {"msg": "No education found"}
    db.commit()
    return serialize_profile(profile)
