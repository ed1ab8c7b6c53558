"""Payment gateway port (abstract interface).

Defines the contract that all payment gateway adapters must implement, so
that orders can be placed against the fake gateway in tests and against
Stripe in production without touching the shop operations.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class PaymentIntent:
    """A payment intent as reported by the provider."""

    id: str
    client_secret: str
    status: str


class PaymentGateway(ABC):
    """Abstract payment gateway interface."""

    @abstractmethod
    def create_payment_intent(self, order) -> PaymentIntent:
        """Create an intent to charge ``order.total_price`` to the order's owner.

        The order id is used as idempotency key so a retried placement never
        charges twice.
        """
        ...

    @abstractmethod
    def verify_webhook(self, payload: bytes, signature: str | None) -> dict:
        """Authenticate a webhook delivery and return the decoded event."""
        ...
