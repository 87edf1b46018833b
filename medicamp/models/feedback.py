"""
Feedback model for participant reviews of camps.
"""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from medicamp.database import Base, utcnow


class Feedback(Base):
    """Rating and free-text feedback left by a participant after a camp."""

    __tablename__ = "feedback"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    camp_id: Mapped[uuid.UUID] = mapped_column(index=True, nullable=False)
    camp_name: Mapped[str | None] = mapped_column(String(200))

    # Author details shown next to the review
    participant_email: Mapped[str] = mapped_column(
        String(320), index=True, nullable=False
    )
    user_name: Mapped[str | None] = mapped_column(String(200))
    photo_url: Mapped[str | None] = mapped_column(String(500))

    rating: Mapped[int] = mapped_column(Integer, nullable=False)  # 1-5
    feedback: Mapped[str] = mapped_column(Text, nullable=False)

    date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now()
    )

    def __repr__(self) -> str:
        return f"<Feedback(id={self.id}, camp_id={self.camp_id}, rating={self.rating})>"
