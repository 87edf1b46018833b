"""
Middleware package for the MediCamp API.

Provides centralized middleware for security headers, error handling, and
request correlation.
"""

from medicamp.middleware.error_handler import (
    ErrorHandlingMiddleware,
    register_error_handlers,
)
from medicamp.middleware.security import SecurityMiddleware

__all__ = ["ErrorHandlingMiddleware", "SecurityMiddleware", "register_error_handlers"]
