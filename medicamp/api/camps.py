"""
Camp Management API endpoints.

Handles public camp listings, the organizer's camp management dashboard,
and the participant counter.
"""

import uuid
from datetime import datetime
from enum import Enum

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse
from pydantic import Field
from sqlalchemy import or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from medicamp.auth import verify_organizer, verify_token
from medicamp.database import get_async_session
from medicamp.exceptions import NotFoundError, ValidationError
from medicamp.logging_config import get_logger
from medicamp.models import Camp, User
from medicamp.schemas import CamelModel, CampRead, TokenPayload

router = APIRouter(tags=["Camps"])
logger = get_logger("api.camps")

POPULAR_CAMPS_LIMIT = 6
UPCOMING_EVENTS_LIMIT = 3

# Columns that may be changed but never cleared
NON_NULLABLE_FIELDS = {"camp_name", "location", "date_time", "camp_fees"}


class CampSort(str, Enum):
    PARTICIPANTS = "participants"
    FEES = "fees"
    NAME = "name"


# Pydantic models for requests
class CampCreate(CamelModel):
    camp_name: str = Field("", max_length=200)
    image: str | None = Field(None, max_length=500)
    description: str | None = Field(None, max_length=5000)
    location: str = Field("", max_length=500)
    healthcare_professional: str | None = Field(None, max_length=200)
    date_time: datetime | None = None
    camp_fees: float = Field(0, ge=0)


class CampUpdate(CamelModel):
    camp_name: str | None = Field(None, min_length=1, max_length=200)
    image: str | None = Field(None, max_length=500)
    description: str | None = Field(None, max_length=5000)
    location: str | None = Field(None, min_length=1, max_length=500)
    healthcare_professional: str | None = Field(None, max_length=200)
    date_time: datetime | None = None
    camp_fees: float | None = Field(None, ge=0)


async def get_camp_or_404(session: AsyncSession, camp_id: uuid.UUID) -> Camp:
    result = await session.execute(select(Camp).where(Camp.id == camp_id))
    camp = result.scalar_one_or_none()
    if not camp:
        raise NotFoundError("Camp", camp_id)
    return camp


@router.get("/popular-camps", response_model=list[CampRead])
@router.get("/popularcamps", response_model=list[CampRead], include_in_schema=False)
async def get_popular_camps(session: AsyncSession = Depends(get_async_session)):
    """Camps with the most participants."""
    result = await session.execute(
        select(Camp)
        .order_by(Camp.participant_count.desc())
        .limit(POPULAR_CAMPS_LIMIT)
    )
    return result.scalars().all()


@router.get("/camps-stat", response_model=list[CampRead])
async def get_camp_statistics(session: AsyncSession = Depends(get_async_session)):
    """All camps, for the public statistics chart."""
    result = await session.execute(select(Camp).order_by(Camp.created_at))
    return result.scalars().all()


@router.get("/available-camps", response_model=list[CampRead])
async def get_available_camps(
    search: str | None = Query(None, max_length=200),
    sort: CampSort | None = Query(None),
    session: AsyncSession = Depends(get_async_session),
):
    """All camps, optionally filtered by a search term and sorted."""
    query = select(Camp)

    if search:
        pattern = f"%{search}%"
        query = query.where(
            or_(
                Camp.camp_name.ilike(pattern),
                Camp.location.ilike(pattern),
                Camp.healthcare_professional.ilike(pattern),
            )
        )

    if sort == CampSort.PARTICIPANTS:
        query = query.order_by(Camp.participant_count.desc())
    elif sort == CampSort.FEES:
        query = query.order_by(Camp.camp_fees.asc())
    elif sort == CampSort.NAME:
        query = query.order_by(Camp.camp_name.asc())
    else:
        query = query.order_by(Camp.created_at)

    result = await session.execute(query)
    return result.scalars().all()


@router.get("/upcoming-events", response_model=list[CampRead])
async def get_upcoming_events(session: AsyncSession = Depends(get_async_session)):
    """The most recently added camps."""
    result = await session.execute(
        select(Camp).order_by(Camp.created_at.desc()).limit(UPCOMING_EVENTS_LIMIT)
    )
    return result.scalars().all()


@router.get("/camps", response_model=list[CampRead])
async def get_managed_camps(
    session: AsyncSession = Depends(get_async_session),
    organizer: User = Depends(verify_organizer),
):
    """All camps for the organizer's management dashboard."""
    result = await session.execute(select(Camp).order_by(Camp.created_at))
    return result.scalars().all()


@router.get("/camps/{camp_id}", response_model=CampRead)
async def get_camp(
    camp_id: uuid.UUID,
    session: AsyncSession = Depends(get_async_session),
):
    """Get a specific camp."""
    return await get_camp_or_404(session, camp_id)


@router.post("/camps", status_code=status.HTTP_201_CREATED)
async def create_camp(
    camp_data: CampCreate,
    session: AsyncSession = Depends(get_async_session),
    organizer: User = Depends(verify_organizer),
):
    """Create a new camp (organizer only)."""
    if (
        not camp_data.camp_name.strip()
        or not camp_data.location.strip()
        or camp_data.date_time is None
    ):
        raise ValidationError("Missing required camp details")

    camp = Camp(**camp_data.model_dump())
    session.add(camp)
    await session.commit()
    await session.refresh(camp)

    logger.info(
        f"Camp '{camp.camp_name}' created",
        extra={
            "operation": "create_camp",
            "user_email": organizer.email,
            "resource_id": str(camp.id),
        },
    )
    return {"success": True, "insertedId": camp.id}


@router.put("/update-camp/{camp_id}")
async def update_camp(
    camp_id: uuid.UUID,
    camp_data: CampUpdate,
    session: AsyncSession = Depends(get_async_session),
    organizer: User = Depends(verify_organizer),
):
    """Update a camp (organizer only)."""
    camp = await get_camp_or_404(session, camp_id)

    update_data = camp_data.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        if value is None and field in NON_NULLABLE_FIELDS:
            continue
        setattr(camp, field, value)

    await session.commit()
    await session.refresh(camp)

    return {
        "success": True,
        "message": "Camp updated successfully",
        "camp": CampRead.model_validate(camp),
    }


@router.delete("/delete-camp/{camp_id}")
async def delete_camp(
    camp_id: uuid.UUID,
    session: AsyncSession = Depends(get_async_session),
    organizer: User = Depends(verify_organizer),
):
    """Delete a camp (organizer only). Registrations are left untouched."""
    result = await session.execute(select(Camp).where(Camp.id == camp_id))
    camp = result.scalar_one_or_none()
    if not camp:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"message": "Camp not found", "deleted": False},
        )

    await session.delete(camp)
    await session.commit()

    logger.info(
        "Camp deleted",
        extra={
            "operation": "delete_camp",
            "user_email": organizer.email,
            "resource_id": str(camp_id),
        },
    )
    return {"message": "Camp deleted successfully", "deleted": True}


@router.patch("/camps/{camp_id}/increment")
async def increment_participant_count(
    camp_id: uuid.UUID,
    session: AsyncSession = Depends(get_async_session),
    claims: TokenPayload = Depends(verify_token),
):
    """Add one to a camp's participant count."""
    result = await session.execute(
        update(Camp)
        .where(Camp.id == camp_id)
        .values(participant_count=Camp.participant_count + 1)
    )
    await session.commit()

    if result.rowcount != 1:
        raise NotFoundError("Camp", camp_id)

    return {"success": True, "message": "Participant count incremented"}
