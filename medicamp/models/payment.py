"""
Payment ledger model.
"""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, Float, String, func
from sqlalchemy.orm import Mapped, mapped_column

from medicamp.database import Base, utcnow


class Payment(Base):
    """
    Append-only record of a successful external charge.

    Written after the client reports success; it is not reconciled against
    the payment processor.
    """

    __tablename__ = "payment"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    participant_email: Mapped[str] = mapped_column(
        String(320), index=True, nullable=False
    )
    camp_id: Mapped[uuid.UUID] = mapped_column(index=True, nullable=False)
    camp_name: Mapped[str | None] = mapped_column(String(200))
    amount: Mapped[float] = mapped_column(Float, nullable=False)
    transaction_id: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now()
    )

    def __repr__(self) -> str:
        return f"<Payment(id={self.id}, transaction_id={self.transaction_id}, amount={self.amount})>"
