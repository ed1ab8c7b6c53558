"""Configurable fake payment gateway for development and testing.

Intents are never sent anywhere; their status can be chosen up front so
tests can place orders that end up pending, paid or cancelled.
"""

from uuid import uuid4

from protean.exceptions import ValidationError

from shop.payment.port import PaymentGateway, PaymentIntent
from shop.payment.stripe_adapter import decode_event


class PaymentProviderUnavailable(Exception):
    pass


class FakeGateway(PaymentGateway):
    def __init__(self) -> None:
        self.intent_status: str = "requires_payment_method"
        self.should_fail: bool = False
        self.expected_signature: str | None = None
        self.calls: list[dict] = []

    def configure(self, intent_status: str = "requires_payment_method", should_fail: bool = False) -> None:
        self.intent_status = intent_status
        self.should_fail = should_fail

    def create_payment_intent(self, order) -> PaymentIntent:
        self.calls.append(
            {
                "method": "create_payment_intent",
                "amount": order.total_price,
                "metadata": {"orderID": str(order.id), "userID": str(order.user_id)},
                "idempotency_key": str(order.id),
            }
        )
        if self.should_fail:
            raise PaymentProviderUnavailable("payment provider unavailable")

        intent_id = f"pi_fake_{uuid4().hex[:12]}"
        return PaymentIntent(id=intent_id, client_secret=f"{intent_id}_secret", status=self.intent_status)

    def verify_webhook(self, payload: bytes, signature: str | None) -> dict:
        if self.expected_signature is not None and signature != self.expected_signature:
            raise ValidationError({"signature": ["invalid Stripe-Signature header"]})
        return decode_event(payload)
