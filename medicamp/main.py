"""
Main FastAPI application entry point.

This module creates and configures the FastAPI application with all routes,
middleware, and startup/shutdown handlers.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from medicamp import __version__
from medicamp.api import (
    camps_router,
    feedback_router,
    health_router,
    payments_router,
    registrations_router,
    tokens_router,
    users_router,
)
from medicamp.config import settings
from medicamp.database import close_db, create_db_and_tables
from medicamp.exceptions import ConfigurationError
from medicamp.logging_config import get_logger, setup_logging
from medicamp.middleware import (
    ErrorHandlingMiddleware,
    SecurityMiddleware,
    register_error_handlers,
)
from medicamp.utils.settings_validator import validate_settings


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    setup_logging()
    logger = get_logger("startup")

    logger.info("Starting MediCamp API", extra={"operation": "startup"})

    validation_report = validate_settings()
    if not validation_report["valid"]:
        for error in validation_report["errors"]:
            logger.error(
                f"Configuration error: {error}", extra={"operation": "startup"}
            )
        raise ConfigurationError(
            "Invalid configuration - check settings and try again",
            errors=validation_report["errors"],
        )

    for warning in validation_report["warnings"]:
        logger.warning(
            f"Configuration warning: {warning}", extra={"operation": "startup"}
        )

    await create_db_and_tables()
    logger.info("Application startup complete", extra={"operation": "startup"})

    yield

    logger.info("Starting application shutdown", extra={"operation": "shutdown"})
    await close_db()
    logger.info("Application shutdown complete", extra={"operation": "shutdown"})


app = FastAPI(
    title="MediCamp API",
    description="Backend for medical camp listings, registrations, payments and feedback.",
    version=__version__,
    docs_url="/docs" if settings.get("DEBUG", False) else None,
    redoc_url="/redoc" if settings.get("DEBUG", False) else None,
    lifespan=lifespan,
)

register_error_handlers(app)

# Error handling middleware (innermost - wraps every route)
app.add_middleware(ErrorHandlingMiddleware)

app.add_middleware(SecurityMiddleware, enable_security_headers=True)

# The token cookie requires credentialed CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get("ALLOWED_ORIGINS", ["http://localhost:5173"]),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health_router)
app.include_router(tokens_router)
app.include_router(users_router)
app.include_router(camps_router)
app.include_router(registrations_router)
app.include_router(feedback_router)
app.include_router(payments_router)


@app.get("/", response_class=PlainTextResponse)
async def root():
    """Liveness banner."""
    return "mediCamp server is running..."


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "medicamp.main:app",
        host=settings.get("HOST", "127.0.0.1"),
        port=settings.get("PORT", 5000),
        reload=settings.get("DEBUG", False),
        log_level="info",
    )
