"""
Payment Processor Service

Creates Stripe payment intents for camp fees. The Stripe SDK is
synchronous, so calls run in the threadpool.
"""
import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

import stripe
from fastapi import status
from starlette.concurrency import run_in_threadpool

from medicamp.config import settings
from medicamp.exceptions import ExternalServiceError, ValidationError
from medicamp.logging_config import get_logger

logger = get_logger("services.payment_processor")


def to_minor_units(amount: float) -> int:
    """Convert a major-unit amount to cents, rounding halves up."""
    cents = (Decimal(str(amount)) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return int(cents)


class PaymentProcessor:
    """Thin wrapper over Stripe's PaymentIntent API."""

    service_name = "stripe"

    def __init__(self, api_key: Optional[str], currency: str = "usd"):
        self.api_key = api_key
        self.currency = currency.lower()

    async def create_payment_intent(self, amount: float) -> str:
        """
        Create a card payment intent for ``amount`` in major units.

        Returns:
            The intent's client secret, handed to the browser to confirm the charge

        Raises:
            ValidationError: If the amount is not finite or rounds to less than one cent
            ExternalServiceError: If Stripe is not configured or rejects the request
        """
        if not math.isfinite(amount):
            raise ValidationError("Invalid amount", field="amount", value=amount)

        minor_units = to_minor_units(amount)
        if minor_units < 1:
            raise ValidationError("Invalid amount", field="amount", value=amount)

        if not self.api_key:
            raise ExternalServiceError(
                "Payment processor is not configured",
                service=self.service_name,
                operation="create_payment_intent",
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            )

        try:
            intent = await run_in_threadpool(
                stripe.PaymentIntent.create,
                amount=minor_units,
                currency=self.currency,
                payment_method_types=["card"],
                api_key=self.api_key,
            )
        except stripe.StripeError as e:
            logger.error(
                f"Stripe rejected payment intent: {e.user_message or str(e)}",
                extra={"operation": "create_payment_intent"},
            )
            raise ExternalServiceError(
                "Payment processor request failed",
                service=self.service_name,
                operation="create_payment_intent",
            ) from e

        logger.info(
            f"Created payment intent {intent.id} for {minor_units} {self.currency}",
            extra={"operation": "create_payment_intent"},
        )
        return intent.client_secret


def get_payment_processor() -> PaymentProcessor:
    """Dependency returning a processor configured from settings."""
    return PaymentProcessor(
        api_key=settings.get("STRIPE_SECRET_KEY"),
        currency=settings.get("PAYMENT_CURRENCY", "usd"),
    )
