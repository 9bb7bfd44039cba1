"""
PetSoft Backend — Stripe Payment Gateway
==========================================

What:  PaymentGateway implementation backed by Stripe Checkout.
How:   Calls stripe.checkout.Session.create(mode="payment") with the
       configured secret key. The Stripe SDK call is blocking, so it runs in
       the threadpool.
Who:   Default gateway of PaymentService.
"""

import logging
from typing import Optional

import stripe
from starlette.concurrency import run_in_threadpool

from petsoft.config import PLACEHOLDER_STRIPE_KEY, settings
from petsoft.exceptions import PaymentGatewayError
from petsoft.services.payment_base import HostedCheckoutSession, PaymentGateway

logger = logging.getLogger(__name__)


class StripePaymentGateway(PaymentGateway):
    """Opens Stripe-hosted checkout pages."""

    def __init__(self, api_key: Optional[str] = None):
        self.api_key = api_key if api_key is not None else settings.stripe_secret_key

    async def create_checkout_session(
        self,
        customer_email: str,
        price_id: str,
        quantity: int,
        success_url: str,
        cancel_url: str,
    ) -> HostedCheckoutSession:
        if not await self.health_check():
            raise PaymentGatewayError(context={"reason": "stripe_secret_key not configured"})

        try:
            checkout = await run_in_threadpool(
                stripe.checkout.Session.create,
                api_key=self.api_key,
                customer_email=customer_email,
                line_items=[{"price": price_id, "quantity": quantity}],
                mode="payment",
                success_url=success_url,
                cancel_url=cancel_url,
            )
        except stripe.StripeError as e:
            logger.error(
                "Stripe checkout session failed: %s (code=%s)",
                type(e).__name__,
                getattr(e, "code", None),
            )
            raise PaymentGatewayError(
                context={"stripe_error": type(e).__name__, "code": getattr(e, "code", None)},
            ) from e

        logger.info("Stripe checkout session created: %s", checkout.id)
        return HostedCheckoutSession(id=checkout.id, url=checkout.url)

    async def health_check(self) -> bool:
        return bool(self.api_key) and self.api_key != PLACEHOLDER_STRIPE_KEY


# ── Singleton Instance ────────────────────────────────────────────────────
stripe_gateway = StripePaymentGateway()
