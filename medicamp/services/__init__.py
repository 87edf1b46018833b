"""
Services package for integrations with external systems.
"""

from .payment_processor import PaymentProcessor, get_payment_processor, to_minor_units

__all__ = [
    "PaymentProcessor",
    "get_payment_processor",
    "to_minor_units",
]
