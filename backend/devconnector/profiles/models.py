"""Profile model with embedded experience and education entries."""

import uuid
from datetime import UTC, datetime

from sqlalchemy import JSON, Column, DateTime, ForeignKey, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from ..database.base import Base


class Profile(Base):
    __tablename__ = "profiles"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
        index=True,
    )
    company = Column(String(255), nullable=True)
    website = Column(String(500), nullable=True)
    location = Column(String(255), nullable=True)
    bio = Column(Text, nullable=True)
    status = Column(String(255), nullable=False)
    githubusername = Column(String(255), nullable=True)
    skills = Column(JSON, default=list)
    social = Column(JSON, default=dict)
    # Newest first. Entries are plain dicts keyed by a hex "id".
    experience = Column(JSON, default=list)
    education = Column(JSON, default=list)
    date = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
    )

    user = relationship("User", back_populates="profile")
