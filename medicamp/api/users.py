"""
User API endpoints.

Handles first sign-in registration, existence and role lookups, profile
updates, and organizer role management.
"""

from fastapi import APIRouter, Depends, Query, status
from pydantic import EmailStr, Field
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from medicamp.auth import (
    ensure_self_or_organizer,
    get_user_by_email,
    verify_organizer,
    verify_token,
)
from medicamp.database import get_async_session
from medicamp.exceptions import NotFoundError, conflict
from medicamp.logging_config import get_logger
from medicamp.models import User, UserType
from medicamp.schemas import CamelModel, TokenPayload, UserRead

router = APIRouter(tags=["Users"])
logger = get_logger("api.users")


class UserCreate(CamelModel):
    """User creation schema. A client-supplied ``type`` is accepted and ignored."""
    email: EmailStr
    name: str | None = Field(None, max_length=200)
    picture: str | None = Field(None, max_length=500)
    type: str | None = None


class UserUpdate(CamelModel):
    """Profile fields a user may change. Email and role are not updatable here."""
    name: str | None = Field(None, max_length=200)
    picture: str | None = Field(None, max_length=500)
    phone: str | None = Field(None, max_length=25)
    address: str | None = Field(None, max_length=500)


class UserTypeUpdate(CamelModel):
    type: UserType


@router.get("/users", response_model=list[UserRead])
async def list_users(
    session: AsyncSession = Depends(get_async_session),
    organizer: User = Depends(verify_organizer),
):
    """List all users (organizer only)."""
    result = await session.execute(select(User).order_by(User.created_at))
    return result.scalars().all()


@router.get("/user")
async def user_exists(
    email: str = Query(...),
    session: AsyncSession = Depends(get_async_session),
):
    """Report whether a user with this email exists."""
    user = await get_user_by_email(session, email)
    return {"exists": user is not None}


@router.get("/user-type", response_model=UserRead)
async def get_user_type(
    email: str = Query(...),
    session: AsyncSession = Depends(get_async_session),
):
    """Return the user record, whose ``type`` drives the client dashboard."""
    user = await get_user_by_email(session, email)
    if not user:
        raise NotFoundError("User", email)
    return user


@router.post("/users", status_code=status.HTTP_201_CREATED)
async def create_user(
    user_data: UserCreate,
    session: AsyncSession = Depends(get_async_session),
):
    """Create a user on first sign-in. New users are always participants."""
    if await get_user_by_email(session, user_data.email):
        conflict("User already exists", rule="unique_email")

    user = User(
        email=user_data.email,
        name=user_data.name,
        picture=user_data.picture,
        type=UserType.PARTICIPANT,
    )
    session.add(user)
    await session.commit()
    await session.refresh(user)

    logger.info(
        "User registered",
        extra={"operation": "create_user", "user_email": user.email},
    )
    return {
        "success": True,
        "insertedId": user.id,
        "user": UserRead.model_validate(user),
    }


@router.get("/user/{email}", response_model=UserRead)
async def get_user(
    email: str,
    session: AsyncSession = Depends(get_async_session),
    claims: TokenPayload = Depends(verify_token),
):
    """Get a user profile (self or organizer)."""
    await ensure_self_or_organizer(session, claims, email)

    user = await get_user_by_email(session, email)
    if not user:
        raise NotFoundError("User", email)
    return user


@router.put("/user/{email}")
async def update_user(
    email: str,
    user_data: UserUpdate,
    session: AsyncSession = Depends(get_async_session),
    claims: TokenPayload = Depends(verify_token),
):
    """Update a user profile (self or organizer)."""
    await ensure_self_or_organizer(session, claims, email)

    user = await get_user_by_email(session, email)
    if not user:
        raise NotFoundError("User", email)

    update_data = user_data.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        setattr(user, field, value)

    await session.commit()
    await session.refresh(user)

    return {
        "success": True,
        "message": "Profile updated successfully",
        "user": UserRead.model_validate(user),
    }


@router.patch("/users/{email}/type", response_model=UserRead)
async def set_user_type(
    email: str,
    type_data: UserTypeUpdate,
    session: AsyncSession = Depends(get_async_session),
    organizer: User = Depends(verify_organizer),
):
    """Change a user's role (organizer only)."""
    user = await get_user_by_email(session, email)
    if not user:
        raise NotFoundError("User", email)

    user.type = type_data.type
    await session.commit()
    await session.refresh(user)

    logger.info(
        f"User role set to {user.type.value} by {organizer.email}",
        extra={"operation": "set_user_type", "user_email": user.email},
    )
    return user
