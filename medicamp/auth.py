"""
Authentication dependencies and utilities.

Access tokens are HS256 JWTs signed with ``SECRET_KEY`` and carrying the
caller's ``email``, ``name`` and ``picture``. They are accepted from an
``Authorization: Bearer`` header or, failing that, from the http-only
cookie set at sign-in. Encoding and decoding go through the JWT helpers
of FastAPI-Users.
"""

import jwt
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from fastapi_users.jwt import decode_jwt, generate_jwt
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from medicamp.config import settings
from medicamp.database import get_async_session
from medicamp.exceptions import AuthenticationError, AuthorizationError
from medicamp.logging_config import get_logger
from medicamp.models import User
from medicamp.schemas import TokenPayload

logger = get_logger("auth")

TOKEN_AUDIENCE = ["medicamp:auth"]

bearer_scheme = HTTPBearer(auto_error=False)


def get_token_secret() -> str:
    return settings.get("SECRET_KEY")


def get_cookie_name() -> str:
    return settings.get("TOKEN_COOKIE_NAME", "token")


def create_access_token(
    email: str, name: str | None = None, picture: str | None = None
) -> str:
    """Sign an access token for the given identity."""
    data = {
        "email": email,
        "name": name,
        "picture": picture,
        "aud": TOKEN_AUDIENCE,
    }
    return generate_jwt(
        data,
        get_token_secret(),
        lifetime_seconds=settings.get("TOKEN_LIFETIME_SECONDS", 86400),
    )


def decode_access_token(token: str) -> TokenPayload:
    """
    Verify an access token and return its claims.

    Raises:
        AuthenticationError: If the token is malformed, expired or forged
    """
    try:
        claims = decode_jwt(token, get_token_secret(), TOKEN_AUDIENCE)
        return TokenPayload.model_validate(claims)
    except (jwt.PyJWTError, PydanticValidationError) as e:
        logger.info(f"Rejected access token: {type(e).__name__}")
        raise AuthenticationError() from e


def cookie_options() -> dict:
    """Cookie flags for the token cookie, tightened outside production."""
    is_production = settings.get("ENVIRONMENT", "development") == "production"
    return {
        "httponly": True,
        "secure": is_production,
        "samesite": "none" if is_production else "strict",
    }


async def verify_token(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> TokenPayload:
    """Dependency requiring a valid access token."""
    token = credentials.credentials if credentials else request.cookies.get(get_cookie_name())
    if not token:
        raise AuthenticationError()
    return decode_access_token(token)


async def get_user_by_email(session: AsyncSession, email: str) -> User | None:
    result = await session.execute(select(User).where(User.email == email))
    return result.scalar_one_or_none()


async def verify_organizer(
    claims: TokenPayload = Depends(verify_token),
    session: AsyncSession = Depends(get_async_session),
) -> User:
    """Dependency to ensure the caller is an organizer."""
    user = await get_user_by_email(session, claims.email)
    if user is None or not user.is_organizer:
        logger.warning(
            "Organizer route refused",
            extra={"operation": "verify_organizer", "user_email": claims.email},
        )
        raise AuthorizationError(required_permission="organizer")
    return user


async def ensure_self_or_organizer(
    session: AsyncSession, claims: TokenPayload, email: str
) -> None:
    """Allow access to another user's records only for organizers."""
    if claims.email.lower() == email.lower():
        return

    user = await get_user_by_email(session, claims.email)
    if user is None or not user.is_organizer:
        raise AuthorizationError()
