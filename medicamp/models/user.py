"""
User model for participants and organizers.
"""

import uuid
from datetime import datetime
from enum import Enum

from sqlalchemy import DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column

from medicamp.database import Base, utcnow


class UserType(str, Enum):
    """Role of a user on the platform."""

    PARTICIPANT = "participant"
    ORGANIZER = "organizer"


class User(Base):
    """
    A platform user, keyed by email.

    Created on first sign-in as a participant; organizers are promoted
    explicitly and never self-assigned.
    """

    __tablename__ = "user"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    email: Mapped[str] = mapped_column(String(320), unique=True, index=True, nullable=False)
    name: Mapped[str | None] = mapped_column(String(200))
    picture: Mapped[str | None] = mapped_column(String(500))

    # Role management
    type: Mapped[UserType] = mapped_column(default=UserType.PARTICIPANT)

    # Profile information
    phone: Mapped[str | None] = mapped_column(String(25))
    address: Mapped[str | None] = mapped_column(String(500))

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email}, type={self.type})>"

    @property
    def is_organizer(self) -> bool:
        return self.type == UserType.ORGANIZER
