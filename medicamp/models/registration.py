"""
Registration model for participants who joined a camp.
"""

import uuid
from datetime import datetime
from enum import Enum

from sqlalchemy import DateTime, Float, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from medicamp.database import Base, utcnow


class ConfirmationStatus(str, Enum):
    """Organizer-set approval state of a registration."""

    PENDING = "Pending"
    CONFIRMED = "Confirmed"


class PaymentStatus(str, Enum):
    """Payment state of a registration."""

    UNPAID = "unpaid"
    PAID = "Paid"


class Registration(Base):
    """
    A participant's enrollment record for a camp.

    Camp details are copied at join time so the record stays readable
    after the camp is edited or deleted. ``camp_id`` is a plain reference
    without a foreign key; deleting a camp never cascades into paid
    registrations.
    """

    __tablename__ = "joined_participant"

    # Primary key
    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)

    # Camp snapshot
    camp_id: Mapped[uuid.UUID] = mapped_column(index=True, nullable=False)
    camp_name: Mapped[str | None] = mapped_column(String(200))
    camp_fees: Mapped[float | None] = mapped_column(Float)
    location: Mapped[str | None] = mapped_column(String(500))
    healthcare_professional: Mapped[str | None] = mapped_column(String(200))

    # Participant details
    participant_name: Mapped[str | None] = mapped_column(String(200))
    participant_email: Mapped[str] = mapped_column(
        String(320), index=True, nullable=False
    )
    age: Mapped[int | None] = mapped_column(Integer)
    phone_number: Mapped[str | None] = mapped_column(String(25))
    gender: Mapped[str | None] = mapped_column(String(20))
    emergency_contact: Mapped[str | None] = mapped_column(String(100))

    # Registration status
    confirmation_status: Mapped[ConfirmationStatus] = mapped_column(
        default=ConfirmationStatus.PENDING
    )
    payment_status: Mapped[PaymentStatus] = mapped_column(
        default=PaymentStatus.UNPAID
    )

    # Timestamps
    registered_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    def __repr__(self) -> str:
        return (
            f"<Registration(id={self.id}, email={self.participant_email}, "
            f"confirmation={self.confirmation_status}, payment={self.payment_status})>"
        )

    @property
    def is_paid(self) -> bool:
        return self.payment_status == PaymentStatus.PAID

    @property
    def is_confirmed(self) -> bool:
        return self.confirmation_status == ConfirmationStatus.CONFIRMED

    def can_cancel(self) -> tuple[bool, str]:
        """
        Check if this registration may be cancelled.

        Returns:
            Tuple of (can_cancel, reason)
        """
        if self.is_paid:
            return False, "Cannot cancel a paid registration"
        return True, "Registration can be cancelled"

    def can_change_payment_status(self, new_status: PaymentStatus) -> tuple[bool, str]:
        """Paid is final; any other status may move freely."""
        if self.is_paid and new_status != PaymentStatus.PAID:
            return False, "Cannot revert a paid registration"
        return True, "Payment status can be changed"

    def confirm(self) -> None:
        """Mark the registration confirmed. Repeated calls leave it confirmed."""
        self.confirmation_status = ConfirmationStatus.CONFIRMED
