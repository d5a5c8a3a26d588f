"""Authentication service: credential checks and user lookup."""

from uuid import UUID

import bcrypt
from sqlalchemy.orm import Session

from .models import User


def verify_password(plain: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(plain.encode(), hashed.encode())
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


def get_user_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(User.email == email.lower()).first()


def get_user_by_id(db: Session, user_id: str) -> User | None:
    try:
        uid = UUID(user_id)
    except (ValueError, AttributeError, TypeError):
        return None
    return db.query(User).filter(User.id == uid).first()


def authenticate_user(db: Session, email: str, password: str) -> User | None:
    """Verify credentials and return user, or None if invalid.

    Unknown email and wrong password are indistinguishable to the caller.
    """
    user = get_user_by_email(db, email)
    if not user or not verify_password(password, user.password_hash):
        return None
    return user
