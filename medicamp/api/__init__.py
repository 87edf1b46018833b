"""
API package for all HTTP endpoints.
"""

from .camps import router as camps_router
from .feedback import router as feedback_router
from .health import router as health_router
from .payments import router as payments_router
from .registrations import router as registrations_router
from .tokens import router as tokens_router
from .users import router as users_router

__all__ = [
    "tokens_router",
    "users_router",
    "camps_router",
    "registrations_router",
    "feedback_router",
    "payments_router",
    "health_router",
]
