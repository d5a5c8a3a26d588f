"""Signing and verification of x-auth-token values."""

from typing import Any

from jose import JWTError, jwt


class InvalidToken(Exception):
    """Token failed signature, format or payload checks."""


def sign_token(user_id: str, secret: str, algorithm: str = "HS256") -> str:
    """Sign a token embedding only the user id. No expiry claim is added."""
    payload = {"user": {"id": str(user_id)}}
    return jwt.encode(payload, secret, algorithm=algorithm)


def verify_token(token: str, secret: str, algorithm: str = "HS256") -> dict[str, Any]:
    """Decode a token and return its payload.

    Raises:
        InvalidToken: bad signature, malformed token, or no ``user.id`` claim.
    """
    try:
        payload = jwt.decode(token, secret, algorithms=[algorithm])
    except JWTError as exc:
        raise InvalidToken(str(exc)) from exc

    user = payload.get("user")
    if not isinstance(user, dict) or not user.get("id"):
        raise InvalidToken("Token carries no user id")
    return payload
