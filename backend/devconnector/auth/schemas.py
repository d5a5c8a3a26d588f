"""Authentication request/response schemas."""

from datetime import datetime

from pydantic import BaseModel

from ..validation import RequestModel, email_address, present


class LoginRequest(RequestModel):
    email: email_address("Email should be valid") = None
    password: present("Password is required") = None


class TokenResponse(BaseModel):
    token: str


class UserResponse(BaseModel):
    id: str
    name: str
    email: str
    avatar: str | None = None
    date: datetime | None = None

    @classmethod
    def from_user(cls, user) -> "UserResponse":
        return cls(
            id=str(user.id),
            name=user.name,
            email=user.email,
            avatar=user.avatar,
            date=user.date,
        )
