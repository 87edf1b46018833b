"""
Access token endpoints.

Sign-in happens on the client; the client then exchanges the verified
identity for an API access token here.
"""

from fastapi import APIRouter, Response
from pydantic import BaseModel, EmailStr

from medicamp.auth import cookie_options, create_access_token, get_cookie_name
from medicamp.config import settings
from medicamp.logging_config import get_logger

router = APIRouter(tags=["Auth"])
logger = get_logger("api.tokens")


class TokenRequest(BaseModel):
    email: EmailStr
    name: str | None = None
    picture: str | None = None


@router.post("/jwt")
async def issue_token(token_request: TokenRequest, response: Response):
    """Issue an access token as a response field and an http-only cookie."""
    token = create_access_token(
        email=token_request.email,
        name=token_request.name,
        picture=token_request.picture,
    )

    response.set_cookie(
        get_cookie_name(),
        token,
        max_age=settings.get("TOKEN_LIFETIME_SECONDS", 86400),
        **cookie_options(),
    )

    logger.info(
        "Issued access token",
        extra={"operation": "issue_token", "user_email": token_request.email},
    )
    return {"success": True, "token": token}


@router.post("/logout")
async def logout(response: Response):
    """Clear the token cookie."""
    response.delete_cookie(get_cookie_name(), **cookie_options())
    return {"success": True}
