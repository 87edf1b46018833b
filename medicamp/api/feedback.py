"""
Feedback API endpoints.
"""

import uuid

from fastapi import APIRouter, Depends
from pydantic import EmailStr, Field
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from medicamp.auth import ensure_self_or_organizer, verify_organizer, verify_token
from medicamp.database import get_async_session
from medicamp.exceptions import NotFoundError
from medicamp.logging_config import get_logger
from medicamp.models import Feedback, User
from medicamp.schemas import CamelModel, FeedbackRead, TokenPayload

router = APIRouter(tags=["Feedback"])
logger = get_logger("api.feedback")


class FeedbackCreate(CamelModel):
    camp_id: uuid.UUID
    camp_name: str | None = Field(None, max_length=200)
    email: EmailStr
    rating: int = Field(..., ge=1, le=5)
    feedback: str = Field(..., min_length=1, max_length=5000)
    user_name: str | None = Field(None, max_length=200)
    photo_url: str | None = Field(None, max_length=500, alias="photoURL")


@router.get("/feedback", response_model=list[FeedbackRead])
async def list_feedback(session: AsyncSession = Depends(get_async_session)):
    """All feedback, newest first."""
    result = await session.execute(select(Feedback).order_by(Feedback.date.desc()))
    return result.scalars().all()


@router.post("/submit-feedback")
async def submit_feedback(
    feedback_data: FeedbackCreate,
    session: AsyncSession = Depends(get_async_session),
    claims: TokenPayload = Depends(verify_token),
):
    await ensure_self_or_organizer(session, claims, feedback_data.email)

    feedback = Feedback(
        camp_id=feedback_data.camp_id,
        camp_name=feedback_data.camp_name,
        participant_email=feedback_data.email,
        user_name=feedback_data.user_name,
        photo_url=feedback_data.photo_url,
        rating=feedback_data.rating,
        feedback=feedback_data.feedback,
    )
    session.add(feedback)
    await session.commit()

    logger.info(
        f"Feedback submitted with rating {feedback.rating}",
        extra={
            "operation": "submit_feedback",
            "user_email": feedback.participant_email,
            "resource_id": str(feedback.id),
        },
    )
    return {"success": True, "message": "Feedback submitted successfully"}


@router.get("/feedback/{email}", response_model=list[FeedbackRead])
async def get_feedback_by_participant(
    email: str,
    session: AsyncSession = Depends(get_async_session),
    claims: TokenPayload = Depends(verify_token),
):
    """Feedback left by one participant."""
    await ensure_self_or_organizer(session, claims, email)

    result = await session.execute(
        select(Feedback)
        .where(Feedback.participant_email == email)
        .order_by(Feedback.date.desc())
    )
    return result.scalars().all()


@router.delete("/feedback/{feedback_id}")
async def delete_feedback(
    feedback_id: uuid.UUID,
    session: AsyncSession = Depends(get_async_session),
    organizer: User = Depends(verify_organizer),
):
    """Remove a piece of feedback (organizer only)."""
    result = await session.execute(select(Feedback).where(Feedback.id == feedback_id))
    feedback = result.scalar_one_or_none()
    if not feedback:
        raise NotFoundError(
            "Feedback", feedback_id, message="Feedback not found or already deleted"
        )

    await session.delete(feedback)
    await session.commit()

    logger.info(
        "Feedback deleted",
        extra={
            "operation": "delete_feedback",
            "user_email": organizer.email,
            "resource_id": str(feedback_id),
        },
    )
    return {"success": True, "message": "Feedback deleted"}
