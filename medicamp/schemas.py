"""
Shared Pydantic schemas.

Records are exposed with camelCase field names (``campName``,
``participantEmail``) while Python code uses snake_case attributes.
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel

from medicamp.models import ConfirmationStatus, PaymentStatus, UserType


class CamelModel(BaseModel):
    """Base model serialising to camelCase and accepting either case."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class TokenPayload(BaseModel):
    """Claims carried by an access token."""
    email: EmailStr
    name: Optional[str] = None
    picture: Optional[str] = None


class UserRead(CamelModel):
    """User read schema - data returned when reading user info."""
    id: uuid.UUID
    email: EmailStr
    name: Optional[str] = None
    picture: Optional[str] = None
    type: UserType
    phone: Optional[str] = None
    address: Optional[str] = None
    created_at: Optional[datetime] = None


class CampRead(CamelModel):
    id: uuid.UUID
    camp_name: str
    image: Optional[str] = None
    description: Optional[str] = None
    location: str
    healthcare_professional: Optional[str] = None
    date_time: datetime
    camp_fees: float
    participant_count: int
    created_at: Optional[datetime] = None


class RegistrationRead(CamelModel):
    id: uuid.UUID
    camp_id: uuid.UUID
    camp_name: Optional[str] = None
    camp_fees: Optional[float] = None
    location: Optional[str] = None
    healthcare_professional: Optional[str] = None
    participant_name: Optional[str] = None
    participant_email: str
    age: Optional[int] = None
    phone_number: Optional[str] = None
    gender: Optional[str] = None
    emergency_contact: Optional[str] = None
    confirmation_status: ConfirmationStatus
    payment_status: PaymentStatus
    registered_at: Optional[datetime] = None


class FeedbackRead(CamelModel):
    id: uuid.UUID
    camp_id: uuid.UUID
    camp_name: Optional[str] = None
    participant_email: str
    user_name: Optional[str] = None
    photo_url: Optional[str] = Field(None, alias="photoURL")
    rating: int
    feedback: str
    date: Optional[datetime] = None


class PaymentRead(CamelModel):
    id: uuid.UUID
    participant_email: str
    camp_id: uuid.UUID
    camp_name: Optional[str] = None
    amount: float
    transaction_id: str
    date: Optional[datetime] = None
