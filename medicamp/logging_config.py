"""
Logging configuration for the MediCamp API.

Provides structured logging with correlation IDs, console output and
rotating log files for development and production environments.
"""

import contextvars
import logging
import logging.config
import os
import sys
from datetime import UTC, datetime
from pathlib import Path

from medicamp.config import settings

# Set per request by ErrorHandlingMiddleware
correlation_id_var: contextvars.ContextVar[str] = contextvars.ContextVar(
    "correlation_id", default="-"
)


class CorrelationFilter(logging.Filter):
    """Add correlation ID to log records."""

    def filter(self, record):
        if not getattr(record, "correlation_id", None):
            record.correlation_id = correlation_id_var.get()
        return True


class CustomFormatter(logging.Formatter):
    """Custom formatter with correlation ID and structured output."""

    extra_fields = ("operation", "user_email", "error_code", "resource_id")

    def __init__(self, include_correlation: bool = True):
        self.include_correlation = include_correlation
        super().__init__()

    def format(self, record):
        record.timestamp = datetime.now(UTC).isoformat()

        if self.include_correlation:
            fmt = "[{timestamp}] [{levelname}] [{correlation_id}] {name}: {message}"
        else:
            fmt = "[{timestamp}] [{levelname}] {name}: {message}"

        extras = [
            f"{field}={getattr(record, field)}"
            for field in self.extra_fields
            if getattr(record, field, None) is not None
        ]
        if extras:
            fmt += f" | {' | '.join(extras)}"

        formatter = logging.Formatter(fmt, style="{")
        return formatter.format(record)


def setup_logging():
    """Configure logging for the application."""

    log_level = str(settings.get("LOG_LEVEL", "INFO")).upper()
    if log_level not in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]:
        log_level = "INFO"

    environment = settings.get("ENVIRONMENT", "development")
    is_development = environment != "production"
    log_to_file = settings.get("LOG_TO_FILE", True)

    handlers = {
        "console": {
            "class": "logging.StreamHandler",
            "level": log_level,
            "formatter": "detailed" if is_development else "simple",
            "filters": ["correlation"],
            "stream": sys.stdout,
        },
    }
    app_handlers = ["console"]

    if log_to_file:
        log_dir = Path("logs")
        log_dir.mkdir(exist_ok=True)
        handlers["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "level": "INFO",
            "formatter": "detailed",
            "filters": ["correlation"],
            "filename": log_dir / "app.log",
            "maxBytes": 10485760,  # 10MB
            "backupCount": 5,
            "encoding": "utf-8",
        }
        handlers["error_file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "level": "ERROR",
            "formatter": "detailed",
            "filters": ["correlation"],
            "filename": log_dir / "error.log",
            "maxBytes": 10485760,  # 10MB
            "backupCount": 10,
            "encoding": "utf-8",
        }
        app_handlers += ["file", "error_file"]

    logging_config = {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {
            "correlation": {
                "()": CorrelationFilter,
            },
        },
        "formatters": {
            "detailed": {
                "()": CustomFormatter,
                "include_correlation": True,
            },
            "simple": {
                "format": "[%(asctime)s] [%(levelname)s] [%(correlation_id)s] %(name)s: %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": handlers,
        "loggers": {
            "medicamp": {
                "level": log_level,
                "handlers": app_handlers,
                "propagate": False,
            },
            "sqlalchemy.engine": {
                "level": "WARNING" if is_development else "ERROR",
                "handlers": app_handlers,
                "propagate": False,
            },
            "uvicorn": {
                "level": "INFO",
                "handlers": ["console"],
                "propagate": False,
            },
            "uvicorn.access": {
                "level": "INFO" if is_development else "WARNING",
                "handlers": ["console"],
                "propagate": False,
            },
        },
        "root": {
            "level": "WARNING",
            "handlers": ["console"],
        },
    }

    logging.config.dictConfig(logging_config)

    logger = logging.getLogger("medicamp")
    logger.info(
        f"Logging configured - Level: {log_level}, Environment: {environment}",
        extra={"operation": "startup"},
    )


def get_logger(name: str = None) -> logging.Logger:
    """Get a logger under the application namespace."""
    if name is None:
        name = "medicamp"
    elif not name.startswith("medicamp."):
        name = f"medicamp.{name}"

    return logging.getLogger(name)


class LoggerAdapter(logging.LoggerAdapter):
    """Logger adapter that merges fixed context into every record."""

    def __init__(self, logger, extra=None):
        super().__init__(logger, extra or {})

    def process(self, msg, kwargs):
        kwargs["extra"] = {**self.extra, **kwargs.get("extra", {})}
        return msg, kwargs

    def with_context(self, **context):
        """Create a new adapter with additional context."""
        return LoggerAdapter(self.logger, {**self.extra, **context})


def get_contextual_logger(name: str = None, **context) -> LoggerAdapter:
    """Get a logger with additional context."""
    return LoggerAdapter(get_logger(name), context)


# Initialize logging on import
if not os.getenv("PYTEST_CURRENT_TEST"):  # Don't setup logging during tests
    setup_logging()
