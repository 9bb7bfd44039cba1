"""
PetSoft Backend — Abstract Payment Gateway Interface
======================================================

What:  Contract for opening hosted checkout sessions with a payment provider.
How:   Concrete gateways (StripePaymentGateway) implement
       create_checkout_session(); the payment action only sees this interface.
Who:   Called by PaymentService.create_checkout_session.

Scope:
    Opening the hosted page only. Whether the customer actually paid is
    reconciled by the provider, not by this service.
"""

from abc import ABC, abstractmethod

from pydantic import BaseModel


class HostedCheckoutSession(BaseModel):
    """A checkout page hosted by the provider."""

    id: str
    url: str


class PaymentGateway(ABC):
    """
    Abstract interface for hosted payment checkout.

    Contract:
        - create_checkout_session() returns the hosted page to redirect to
        - Provider-specific errors are wrapped in PaymentGatewayError
        - No retries: a failure is reported once, immediately
    """

    @abstractmethod
    async def create_checkout_session(
        self,
        customer_email: str,
        price_id: str,
        quantity: int,
        success_url: str,
        cancel_url: str,
    ) -> HostedCheckoutSession:
        """
        Open a hosted checkout for `quantity` units of `price_id`.

        Args:
            customer_email: Pre-fills and scopes the checkout to this customer
            price_id:       Provider identifier of the fixed price
            quantity:       Units to buy
            success_url:    Where the provider sends the customer after paying
            cancel_url:     Where the provider sends the customer on cancel

        Raises:
            PaymentGatewayError: The provider rejected or failed the request.
        """
        ...

    @abstractmethod
    async def health_check(self) -> bool:
        """True when the gateway is configured to take payments."""
        ...
