"""
Error handling for consistent error responses and logging.

Every error is rendered as::

    {"success": false, "message": "...",
     "error": {"code": "...", "correlation_id": "...", "details": {...}}}
"""

import logging
import traceback
import uuid
from datetime import UTC, datetime
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from medicamp.exceptions import DatabaseError, MediCampException
from medicamp.logging_config import correlation_id_var

logger = logging.getLogger(__name__)


def create_error_response(
    status_code: int,
    error_code: str,
    message: str,
    details: dict[str, Any] | None = None,
    correlation_id: str | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Create standardized error response."""
    error = {
        "code": error_code,
        "correlation_id": correlation_id,
        "timestamp": datetime.now(UTC).isoformat(),
    }
    if details:
        error["details"] = details

    response_headers = {"X-Correlation-ID": correlation_id or "unknown"}
    if headers:
        response_headers.update(headers)

    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": message, "error": error},
        headers=response_headers,
    )


def _correlation_id(request: Request) -> str | None:
    return getattr(request.state, "correlation_id", None)


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """Assigns a correlation ID per request and catches unexpected errors."""

    async def dispatch(self, request: Request, call_next):
        correlation_id = str(uuid.uuid4())
        request.state.correlation_id = correlation_id
        token = correlation_id_var.set(correlation_id)

        try:
            response = await call_next(request)
            response.headers["X-Correlation-ID"] = correlation_id
            return response

        except Exception as e:
            logger.error(
                f"Unexpected error [{correlation_id}]: {str(e)}",
                extra={
                    "correlation_id": correlation_id,
                    "error_type": type(e).__name__,
                    "path": request.url.path,
                    "method": request.method,
                    "traceback": traceback.format_exc(),
                },
            )

            # Don't expose internal error details
            return create_error_response(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                error_code="INTERNAL_SERVER_ERROR",
                message="Internal server error",
                correlation_id=correlation_id,
            )
        finally:
            correlation_id_var.reset(token)


def register_error_handlers(app: FastAPI) -> None:
    """Register the application's exception handlers."""

    @app.exception_handler(MediCampException)
    async def medicamp_exception_handler(request: Request, exc: MediCampException):
        correlation_id = _correlation_id(request)
        log = logger.error if exc.status_code >= 500 else logger.warning
        log(
            f"Application error [{correlation_id}]: {exc.error_code} - {exc.message}",
            extra={
                "correlation_id": correlation_id,
                "error_code": exc.error_code,
                "error_details": exc.details,
                "path": request.url.path,
                "method": request.method,
            },
        )
        return create_error_response(
            status_code=exc.status_code,
            error_code=exc.error_code,
            message=exc.message,
            details=exc.details,
            correlation_id=correlation_id,
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        correlation_id = _correlation_id(request)
        logger.info(
            f"HTTP exception [{correlation_id}]: {exc.status_code} - {exc.detail}",
            extra={
                "correlation_id": correlation_id,
                "status_code": exc.status_code,
                "path": request.url.path,
                "method": request.method,
            },
        )
        return create_error_response(
            status_code=exc.status_code,
            error_code="HTTP_EXCEPTION",
            message=str(exc.detail) if exc.detail else "HTTP error",
            correlation_id=correlation_id,
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ):
        return create_error_response(
            status_code=status.HTTP_422_UNPROCESSABLE_CONTENT,
            error_code="VALIDATION_ERROR",
            message="Request validation failed",
            details=handle_validation_errors(exc.errors()),
            correlation_id=_correlation_id(request),
        )

    @app.exception_handler(SQLAlchemyError)
    async def database_exception_handler(request: Request, exc: SQLAlchemyError):
        correlation_id = _correlation_id(request)
        db_error = create_database_error_from_exception(exc)
        logger.error(
            f"Database error [{correlation_id}]: {db_error.message} - {str(exc)}",
            extra={
                "correlation_id": correlation_id,
                "error_type": type(exc).__name__,
                "path": request.url.path,
                "method": request.method,
            },
        )
        return create_error_response(
            status_code=db_error.status_code,
            error_code=db_error.error_code,
            message=db_error.message,
            correlation_id=correlation_id,
        )


def create_database_error_from_exception(
    e: SQLAlchemyError, operation: str = None, table: str = None
) -> DatabaseError:
    """Convert SQLAlchemy exception to DatabaseError."""
    if isinstance(e, IntegrityError):
        message = "Data integrity constraint violated"
        if "UNIQUE constraint failed" in str(e):
            message = "Duplicate entry - record already exists"
        elif "NOT NULL constraint failed" in str(e):
            message = "Required field cannot be empty"
    elif isinstance(e, OperationalError):
        message = "Database connection or operational error"
    else:
        message = "Database operation failed"

    return DatabaseError(message=message, operation=operation, table=table)


def handle_validation_errors(errors: list) -> dict[str, Any]:
    """Convert pydantic validation errors to structured format."""
    formatted_errors = []

    for error in errors:
        formatted_error = {
            "field": ".".join(str(loc) for loc in error["loc"]),
            "message": error["msg"],
            "type": error["type"],
        }

        if "input" in error:
            formatted_error["invalid_value"] = str(error["input"])

        formatted_errors.append(formatted_error)

    return {"validation_errors": formatted_errors, "error_count": len(formatted_errors)}
