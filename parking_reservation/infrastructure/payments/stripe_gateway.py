"""Stripe implementation of the payment gateway.

The Stripe SDK is synchronous, so every call is run in a worker thread to
keep the event loop free.
"""
import asyncio
from typing import Dict, Optional

import stripe
from loguru import logger

from parking_reservation.application.payments import AbstractPaymentGateway, PaymentResult
from parking_reservation.config.settings_env import settings
from parking_reservation.domain.exceptions import PaymentFailedError, PaymentGatewayError


class StripePaymentGateway(AbstractPaymentGateway):
    def __init__(self, api_key: Optional[str] = None):
        self.api_key = api_key or settings.STRIPE_SECRET_KEY

    @staticmethod
    def _handle_stripe_error(error: stripe.StripeError, action: str):
        logger.error(
            f"Stripe {action} failed: {type(error).__name__} "
            f"(code={getattr(error, 'code', None)}): {error.user_message or error}"
        )
        # Declines and bad requests are the caller's problem, the rest is ours
        if isinstance(error, (stripe.CardError, stripe.InvalidRequestError)):
            raise PaymentFailedError("Payment failed") from error
        raise PaymentGatewayError(f"Stripe {action} failed", original_error=error) from error

    async def charge(
        self,
        amount_cents: int,
        currency: str,
        payment_method_id: Optional[str],
        description: str,
        metadata: Optional[Dict[str, str]] = None,
    ) -> PaymentResult:
        logger.info(f"Creating payment intent for {amount_cents} {currency} cents: {description}")
        try:
            intent = await asyncio.to_thread(
                stripe.PaymentIntent.create,
                api_key=self.api_key,
                amount=amount_cents,
                currency=currency.lower(),
                payment_method=payment_method_id,
                confirm=True,
                description=description,
                metadata=metadata or {},
                automatic_payment_methods={"enabled": True, "allow_redirects": "never"},
            )
        except stripe.StripeError as e:
            self._handle_stripe_error(e, "charge")

        logger.info(f"Payment intent {intent.id} status: {intent.status}")
        return PaymentResult(id=intent.id, status=intent.status, amount_cents=intent.amount)

    async def refund(self, payment_id: str, amount_cents: int) -> PaymentResult:
        logger.info(f"Refunding {amount_cents} cents of payment intent {payment_id}")
        try:
            refund = await asyncio.to_thread(
                stripe.Refund.create,
                api_key=self.api_key,
                payment_intent=payment_id,
                amount=amount_cents,
            )
        except stripe.StripeError as e:
            self._handle_stripe_error(e, "refund")

        logger.info(f"Refund {refund.id} status: {refund.status}")
        return PaymentResult(id=refund.id, status=refund.status, amount_cents=refund.amount)
