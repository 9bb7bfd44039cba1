"""
PetSoft Backend — Payment Service
===================================

What:  The payment checkout action: send the logged-in user to a hosted
       checkout page for the fixed-price item.
How:   Builds success/cancel URLs from the canonical base URL and asks the
       payment gateway for a hosted session. No local record is written.
Who:   Called by POST /payment/checkout-session.
"""

import logging
from typing import Optional, Union

from petsoft.config import settings
from petsoft.exceptions import PaymentGatewayError
from petsoft.results import ActionError, Redirect
from petsoft.schemas.auth import SessionUser
from petsoft.services.payment_base import PaymentGateway
from petsoft.services.stripe_gateway import stripe_gateway

logger = logging.getLogger(__name__)


class PaymentService:
    def __init__(self, gateway: Optional[PaymentGateway] = None):
        self.gateway = gateway or stripe_gateway

    async def create_checkout_session(
        self,
        session: SessionUser,
    ) -> Union[Redirect, ActionError]:
        """
        Returns:
            Redirect to the hosted checkout URL, or
            ActionError("could not create checkout session.") when the
            gateway fails.
        """
        try:
            hosted = await self.gateway.create_checkout_session(
                customer_email=session.email,
                price_id=settings.stripe_price_id,
                quantity=1,
                success_url=f"{settings.canonical_url}/payment?success=true",
                cancel_url=f"{settings.canonical_url}/payment?canceled=true",
            )
        except PaymentGatewayError as e:
            logger.error("Checkout for user %s failed: %s", session.user_id, e.context)
            return ActionError.from_error(e)

        return Redirect(location=hosted.url)


# ── Singleton Instance ────────────────────────────────────────────────────
payment_service = PaymentService()
