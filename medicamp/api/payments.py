"""
Payment API endpoints.

Paying a camp fee is a client-driven sequence: create a payment intent,
confirm the charge in the browser, record it with ``/make-payment``, then
mark the registration paid. The server does not tie these steps together.
"""

import math
import uuid

from fastapi import APIRouter, Depends, status
from pydantic import EmailStr, Field
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from medicamp.auth import ensure_self_or_organizer, verify_token
from medicamp.database import get_async_session
from medicamp.exceptions import ConflictError, NotFoundError, ValidationError, conflict
from medicamp.logging_config import get_logger
from medicamp.models import Payment, PaymentStatus, Registration
from medicamp.schemas import CamelModel, PaymentRead, RegistrationRead, TokenPayload
from medicamp.services import PaymentProcessor, get_payment_processor

router = APIRouter(tags=["Payments"])
logger = get_logger("api.payments")


class PaymentIntentRequest(CamelModel):
    amount: float | None = None


class PaymentCreate(CamelModel):
    email: EmailStr
    camp_id: uuid.UUID
    camp_name: str | None = Field(None, max_length=200)
    amount: float = Field(..., gt=0, allow_inf_nan=False)
    transaction_id: str = Field(..., min_length=1, max_length=255)


class PaymentStatusUpdate(CamelModel):
    payment_status: PaymentStatus


async def get_payable_registration(
    session: AsyncSession, registration_id: uuid.UUID, claims: TokenPayload
) -> Registration:
    """Load a registration that the caller owns, or any one for organizers."""
    result = await session.execute(
        select(Registration).where(Registration.id == registration_id)
    )
    registration = result.scalar_one_or_none()
    if not registration:
        raise NotFoundError(
            "Registration", registration_id, message="Participant not found"
        )
    await ensure_self_or_organizer(session, claims, registration.participant_email)
    return registration


@router.get("/payment/{registration_id}", response_model=RegistrationRead)
async def get_registration_for_payment(
    registration_id: uuid.UUID,
    session: AsyncSession = Depends(get_async_session),
    claims: TokenPayload = Depends(verify_token),
):
    """The registration being paid for."""
    return await get_payable_registration(session, registration_id, claims)


@router.post("/create-payment-intent")
async def create_payment_intent(
    intent_request: PaymentIntentRequest,
    claims: TokenPayload = Depends(verify_token),
    processor: PaymentProcessor = Depends(get_payment_processor),
):
    """Create a card payment intent and return its client secret."""
    amount = intent_request.amount
    if amount is None or not math.isfinite(amount) or amount <= 0:
        raise ValidationError("Invalid amount", field="amount", value=amount)

    client_secret = await processor.create_payment_intent(amount)
    return {"success": True, "clientSecret": client_secret}


@router.post("/make-payment", status_code=status.HTTP_201_CREATED)
async def record_payment(
    payment_data: PaymentCreate,
    session: AsyncSession = Depends(get_async_session),
    claims: TokenPayload = Depends(verify_token),
):
    """Record a completed charge in the payment ledger."""
    await ensure_self_or_organizer(session, claims, payment_data.email)

    existing = await session.execute(
        select(Payment.id).where(Payment.transaction_id == payment_data.transaction_id)
    )
    if existing.scalar_one_or_none() is not None:
        conflict("Payment already recorded", rule="unique_transaction_id")

    payment = Payment(
        participant_email=payment_data.email,
        camp_id=payment_data.camp_id,
        camp_name=payment_data.camp_name,
        amount=payment_data.amount,
        transaction_id=payment_data.transaction_id,
    )
    session.add(payment)
    await session.commit()

    logger.info(
        f"Payment of {payment.amount} recorded for camp '{payment.camp_name}'",
        extra={
            "operation": "record_payment",
            "user_email": payment.participant_email,
            "resource_id": payment.transaction_id,
        },
    )
    return {
        "success": True,
        "message": "Payment successful",
        "insertedId": payment.id,
    }


@router.put("/update-payment-status/{registration_id}")
async def update_payment_status(
    registration_id: uuid.UUID,
    status_data: PaymentStatusUpdate,
    session: AsyncSession = Depends(get_async_session),
    claims: TokenPayload = Depends(verify_token),
):
    """Set the payment status of a registration. Paid is final."""
    registration = await get_payable_registration(session, registration_id, claims)

    allowed, reason = registration.can_change_payment_status(
        status_data.payment_status
    )
    if not allowed:
        raise ConflictError(reason, rule="paid_registration_is_permanent")

    registration.payment_status = status_data.payment_status
    await session.commit()

    logger.info(
        f"Payment status set to {status_data.payment_status.value}",
        extra={
            "operation": "update_payment_status",
            "user_email": claims.email,
            "resource_id": str(registration_id),
        },
    )
    return {"success": True, "message": "Status updated"}


@router.get("/payment-history/{email}")
async def get_payment_history(
    email: str,
    session: AsyncSession = Depends(get_async_session),
    claims: TokenPayload = Depends(verify_token),
):
    """Payments recorded for a participant, newest first."""
    await ensure_self_or_organizer(session, claims, email)

    result = await session.execute(
        select(Payment)
        .where(Payment.participant_email == email)
        .order_by(Payment.date.desc())
    )
    payments = result.scalars().all()
    if not payments:
        raise NotFoundError("Payment", message="No payments found")

    return {
        "success": True,
        "data": [
            PaymentRead.model_validate(p).model_dump(mode="json", by_alias=True)
            for p in payments
        ],
    }
