"""
Database models package.
"""

from .camp import Camp
from .feedback import Feedback
from .payment import Payment
from .registration import ConfirmationStatus, PaymentStatus, Registration
from .user import User, UserType

__all__ = [
    "User",
    "UserType",
    "Camp",
    "Registration",
    "ConfirmationStatus",
    "PaymentStatus",
    "Feedback",
    "Payment",
]
