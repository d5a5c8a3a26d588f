"""Authentication routes."""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from ..config import Settings
from ..database.base import get_db
from ..dependencies import Identity, get_current_identity, get_settings
from .schemas import LoginRequest, TokenResponse, UserResponse
from .service import authenticate_user, get_user_by_id
from .tokens import sign_token

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.get("", response_model=UserResponse | None)
def current_user(
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    """Return the caller's user record, without the password hash."""
    user = get_user_by_id(db, identity.id)
    if not user:
        return None
    return UserResponse.from_user(user)


@router.post("", response_model=TokenResponse)
def login(
    body: LoginRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    email = body.email.lower()
    user = authenticate_user(db, email, body.password)
    if not user:
        logger.info("Login failed: email=%s", email)
        return JSONResponse({"errors": [{"msg": "Invalid Credentials"}]}, status_code=400)

    token = sign_token(str(user.id), settings.jwt_secret, settings.jwt_algorithm)
    logger.info("Login: user=%s", user.id)
    return TokenResponse(token=token)
