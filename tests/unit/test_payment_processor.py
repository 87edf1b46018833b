"""
Unit tests for the Stripe payment processor wrapper.
"""

from types import SimpleNamespace
from unittest.mock import patch

import pytest
import stripe

from medicamp.exceptions import ExternalServiceError, ValidationError
from medicamp.services import PaymentProcessor, to_minor_units


@pytest.mark.unit
class TestToMinorUnits:
    @pytest.mark.parametrize(
        "amount,expected",
        [(25, 2500), (25.5, 2550), (49.99, 4999), (0.005, 1), (0.004, 0), (19.995, 2000)],
    )
    def test_rounds_half_up_to_cents(self, amount, expected):
        assert to_minor_units(amount) == expected


@pytest.mark.unit
class TestPaymentProcessor:
    async def test_creates_card_intent_in_minor_units(self):
        processor = PaymentProcessor(api_key="sk_test_123", currency="USD")
        intent = SimpleNamespace(id="pi_1", client_secret="pi_1_secret")

        with patch(
            "medicamp.services.payment_processor.stripe.PaymentIntent.create",
            return_value=intent,
        ) as create:
            secret = await processor.create_payment_intent(49.99)

        assert secret == "pi_1_secret"
        create.assert_called_once_with(
            amount=4999,
            currency="usd",
            payment_method_types=["card"],
            api_key="sk_test_123",
        )

    async def test_missing_api_key_is_service_unavailable(self):
        processor = PaymentProcessor(api_key=None)

        with pytest.raises(ExternalServiceError) as exc_info:
            await processor.create_payment_intent(10)

        assert exc_info.value.status_code == 503

    async def test_sub_cent_amount_is_invalid(self):
        processor = PaymentProcessor(api_key="sk_test_123")

        with pytest.raises(ValidationError) as exc_info:
            await processor.create_payment_intent(0.001)

        assert exc_info.value.message == "Invalid amount"

    @pytest.mark.parametrize("amount", [float("inf"), float("-inf"), float("nan")])
    async def test_non_finite_amount_is_invalid(self, amount):
        processor = PaymentProcessor(api_key="sk_test_123")

        with patch(
            "medicamp.services.payment_processor.stripe.PaymentIntent.create"
        ) as create:
            with pytest.raises(ValidationError) as exc_info:
                await processor.create_payment_intent(amount)

        assert exc_info.value.message == "Invalid amount"
        create.assert_not_called()

    async def test_stripe_error_becomes_bad_gateway(self):
        processor = PaymentProcessor(api_key="sk_test_123")

        with patch(
            "medicamp.services.payment_processor.stripe.PaymentIntent.create",
            side_effect=stripe.StripeError("card declined"),
        ):
            with pytest.raises(ExternalServiceError) as exc_info:
                await processor.create_payment_intent(10)

        assert exc_info.value.status_code == 502
        assert exc_info.value.details["service"] == "stripe"
