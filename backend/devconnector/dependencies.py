"""Shared FastAPI dependencies."""

from fastapi import Header, Request
from pydantic import BaseModel

from .auth.tokens import InvalidToken, verify_token
from .config import Settings


class Unauthorized(Exception):
    """Raised by the auth gate. Handled by exception handler in main.py."""

    def __init__(self, msg: str):
        super().__init__(msg)
        self.msg = msg


class Identity(BaseModel):
    """Caller identity decoded from the token."""

    id: str


def get_settings(request: Request) -> Settings:
    """Get the settings the app was created with."""
    return request.app.state.settings


def get_current_identity(request: Request, x_auth_token: str | None = Header(default=None)) -> Identity:
    """Resolve the caller from the x-auth-token header, without touching the database."""
    if not x_auth_token:
        raise Unauthorized("No token, access denied")

    settings = get_settings(request)
    try:
        payload = verify_token(x_auth_token, settings.jwt_secret, settings.jwt_algorithm)
    except InvalidToken:
        raise Unauthorized("Invalid token") from None

    identity = Identity(id=payload["user"]["id"])
    request.state.user = identity
    return identity
