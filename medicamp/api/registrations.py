"""
Registration API endpoints.

Handles participants joining camps, cancellation, organizer confirmation,
and the participant's own registration history.
"""

import uuid

from fastapi import APIRouter, Depends, status
from pydantic import EmailStr, Field
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from medicamp.api.camps import get_camp_or_404
from medicamp.auth import ensure_self_or_organizer, verify_organizer, verify_token
from medicamp.database import get_async_session
from medicamp.exceptions import ConflictError, NotFoundError
from medicamp.logging_config import get_logger
from medicamp.models import ConfirmationStatus, PaymentStatus, Registration, User
from medicamp.schemas import CamelModel, RegistrationRead, TokenPayload

router = APIRouter(tags=["Registrations"])
logger = get_logger("api.registrations")


class RegistrationCreate(CamelModel):
    """
    Join request. Camp details are copied from the camp record and both
    status fields start at their defaults, whatever the client sends.
    """
    camp_id: uuid.UUID
    participant_name: str | None = Field(None, max_length=200)
    participant_email: EmailStr | None = None
    age: int | None = Field(None, ge=0, le=150)
    phone_number: str | None = Field(None, max_length=25)
    gender: str | None = Field(None, max_length=20)
    emergency_contact: str | None = Field(None, max_length=100)


async def get_registration_or_404(
    session: AsyncSession, registration_id: uuid.UUID
) -> Registration:
    result = await session.execute(
        select(Registration).where(Registration.id == registration_id)
    )
    registration = result.scalar_one_or_none()
    if not registration:
        raise NotFoundError("Registration", registration_id, message="Not found")
    return registration


async def registrations_for(
    session: AsyncSession, email: str
) -> list[Registration]:
    result = await session.execute(
        select(Registration)
        .where(Registration.participant_email == email)
        .order_by(Registration.registered_at)
    )
    return list(result.scalars().all())


@router.post("/joined-participant", status_code=status.HTTP_201_CREATED)
@router.post(
    "/joinedParticipant",
    status_code=status.HTTP_201_CREATED,
    include_in_schema=False,
)
async def join_camp(
    registration_data: RegistrationCreate,
    session: AsyncSession = Depends(get_async_session),
    claims: TokenPayload = Depends(verify_token),
):
    """Register the caller (or, for organizers, someone else) for a camp."""
    email = registration_data.participant_email or claims.email
    await ensure_self_or_organizer(session, claims, email)

    camp = await get_camp_or_404(session, registration_data.camp_id)

    registration = Registration(
        camp_id=camp.id,
        camp_name=camp.camp_name,
        camp_fees=camp.camp_fees,
        location=camp.location,
        healthcare_professional=camp.healthcare_professional,
        participant_name=registration_data.participant_name or claims.name,
        participant_email=email,
        age=registration_data.age,
        phone_number=registration_data.phone_number,
        gender=registration_data.gender,
        emergency_contact=registration_data.emergency_contact,
        confirmation_status=ConfirmationStatus.PENDING,
        payment_status=PaymentStatus.UNPAID,
    )
    session.add(registration)
    await session.commit()
    await session.refresh(registration)

    logger.info(
        f"Participant joined camp '{camp.camp_name}'",
        extra={
            "operation": "join_camp",
            "user_email": email,
            "resource_id": str(registration.id),
        },
    )
    return {
        "success": True,
        "message": "Participant registered successfully",
        "insertedId": registration.id,
    }


@router.get("/participants", response_model=list[RegistrationRead])
async def list_participants(
    session: AsyncSession = Depends(get_async_session),
    organizer: User = Depends(verify_organizer),
):
    """All registrations across camps (organizer only)."""
    result = await session.execute(
        select(Registration).order_by(Registration.registered_at)
    )
    return result.scalars().all()


@router.delete("/cancel-registration/{registration_id}")
async def cancel_registration(
    registration_id: uuid.UUID,
    session: AsyncSession = Depends(get_async_session),
    claims: TokenPayload = Depends(verify_token),
):
    """Cancel an unpaid registration (owner or organizer)."""
    registration = await get_registration_or_404(session, registration_id)

    await ensure_self_or_organizer(session, claims, registration.participant_email)

    can_cancel, reason = registration.can_cancel()
    if not can_cancel:
        raise ConflictError(reason, rule="paid_registration_is_permanent")

    await session.delete(registration)
    await session.commit()

    logger.info(
        "Registration cancelled",
        extra={
            "operation": "cancel_registration",
            "user_email": claims.email,
            "resource_id": str(registration_id),
        },
    )
    return {"success": True, "message": "Registration canceled"}


async def _confirm(
    registration_id: uuid.UUID, session: AsyncSession, organizer: User
) -> dict:
    registration = await get_registration_or_404(session, registration_id)

    already_confirmed = registration.is_confirmed
    registration.confirm()
    await session.commit()

    if not already_confirmed:
        logger.info(
            "Registration confirmed",
            extra={
                "operation": "confirm_registration",
                "user_email": organizer.email,
                "resource_id": str(registration_id),
            },
        )
    return {
        "success": True,
        "message": "Registration confirmed",
        "confirmationStatus": ConfirmationStatus.CONFIRMED.value,
    }


@router.put("/confirm-registration/{registration_id}")
async def confirm_registration(
    registration_id: uuid.UUID,
    session: AsyncSession = Depends(get_async_session),
    organizer: User = Depends(verify_organizer),
):
    """Mark a registration confirmed (organizer only). Safe to repeat."""
    return await _confirm(registration_id, session, organizer)


@router.put("/update-confirmation/{registration_id}")
async def update_confirmation(
    registration_id: uuid.UUID,
    session: AsyncSession = Depends(get_async_session),
    organizer: User = Depends(verify_organizer),
):
    return await _confirm(registration_id, session, organizer)


@router.get("/registered-camps/{email}", response_model=list[RegistrationRead])
async def get_registered_camps(
    email: str,
    session: AsyncSession = Depends(get_async_session),
    claims: TokenPayload = Depends(verify_token),
):
    """A participant's registrations, possibly none."""
    await ensure_self_or_organizer(session, claims, email)
    return await registrations_for(session, email)


@router.get("/analytics/{email}", response_model=list[RegistrationRead])
async def get_participant_analytics(
    email: str,
    session: AsyncSession = Depends(get_async_session),
    claims: TokenPayload = Depends(verify_token),
):
    """A participant's registrations for the analytics chart."""
    await ensure_self_or_organizer(session, claims, email)

    registrations = await registrations_for(session, email)
    if not registrations:
        raise NotFoundError("Registration", message="No registered camps found.")
    return registrations
