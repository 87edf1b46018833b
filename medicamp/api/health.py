"""
Health check and configuration status endpoints.
"""

from typing import Any

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from medicamp.auth import verify_organizer
from medicamp.database import get_async_session
from medicamp.logging_config import get_logger
from medicamp.models import User
from medicamp.utils.settings_validator import validate_settings

router = APIRouter(tags=["Health"])
logger = get_logger("api.health")

SERVICE_NAME = "MediCamp API"
SERVICE_VERSION = "1.0.0"


@router.get("/health")
async def health_check() -> dict[str, Any]:
    """
    Basic health check endpoint.

    Available to all callers and exposes no configuration details.
    """
    return {
        "status": "healthy",
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
    }


@router.get("/health/detailed")
async def detailed_health_check(
    session: AsyncSession = Depends(get_async_session),
    organizer: User = Depends(verify_organizer),
):
    """
    Health check with configuration validation and a database round trip.

    Returns 503 when the configuration is invalid or the database is
    unreachable. Requires organizer privileges.
    """
    validation_report = validate_settings()

    try:
        await session.execute(text("SELECT 1"))
        database_ok = True
    except SQLAlchemyError as e:
        logger.error(
            f"Database health check failed: {e}", extra={"operation": "health_check"}
        )
        database_ok = False

    healthy = validation_report["valid"] and database_ok
    system_info = {
        "status": "healthy" if healthy else "degraded",
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "database": "ok" if database_ok else "unavailable",
        "configuration": {
            "valid": validation_report["valid"],
            "errors_count": len(validation_report["errors"]),
            "warnings_count": len(validation_report["warnings"]),
            "checks_passed": len(validation_report["info"]),
        },
    }

    if validation_report["errors"] or validation_report["warnings"]:
        system_info["validation_details"] = {
            "errors": validation_report["errors"],
            "warnings": validation_report["warnings"],
            "summary": validation_report["summary"],
        }

    return JSONResponse(
        status_code=status.HTTP_200_OK if healthy else status.HTTP_503_SERVICE_UNAVAILABLE,
        content=system_info,
    )
