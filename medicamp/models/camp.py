"""
Camp model for medical camps.
"""
import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import String, Text, Integer, Float, DateTime, func
from sqlalchemy.orm import Mapped, mapped_column

from medicamp.database import Base, utcnow


class Camp(Base):
    """
    Camp model representing a medical camp run by an organizer.
    Participants join camps through registrations.
    """
    __tablename__ = "camp"

    # Primary key
    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)

    # Basic camp information
    camp_name: Mapped[str] = mapped_column(String(200), nullable=False)
    image: Mapped[Optional[str]] = mapped_column(String(500))
    description: Mapped[Optional[str]] = mapped_column(Text)
    location: Mapped[str] = mapped_column(String(500), nullable=False)
    healthcare_professional: Mapped[Optional[str]] = mapped_column(String(200))

    # Camp timing
    date_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    # Fee in the configured payment currency
    camp_fees: Mapped[float] = mapped_column(Float, default=0)

    # Incremented as participants join; never decremented
    participant_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now()
    )

    def __repr__(self) -> str:
        return f"<Camp(id={self.id}, name={self.camp_name}, participants={self.participant_count})>"
