"""Stripe payment gateway adapter."""

import json

import stripe
from protean.exceptions import ValidationError

from shop.domain import logger
from shop.payment.port import PaymentGateway, PaymentIntent

CURRENCY = "usd"
TIMEOUT_SECONDS = 10


def decode_event(payload: bytes) -> dict:
    try:
        event = json.loads(payload)
    except ValueError:
        raise ValidationError({"body": ["invalid webhook payload"]}) from None
    if not isinstance(event, dict):
        raise ValidationError({"body": ["the webhook payload must be a JSON object"]})
    return event


class StripeGateway(PaymentGateway):
    """Creates card PaymentIntents in USD; amounts are in cents."""

    def __init__(self, api_key: str, webhook_secret: str | None = None, client: stripe.StripeClient | None = None):
        self.webhook_secret = webhook_secret
        self._client = client or stripe.StripeClient(
            api_key,
            http_client=stripe.RequestsClient(timeout=TIMEOUT_SECONDS),
        )

    def create_payment_intent(self, order) -> PaymentIntent:
        order_id = str(order.id)
        logger.debug("Creating payment intent", order_id=order_id, amount=order.total_price)
        intent = self._client.payment_intents.create(
            params={
                "amount": order.total_price,
                "currency": CURRENCY,
                "payment_method_types": ["card"],
                "metadata": {"orderID": order_id, "userID": str(order.user_id)},
            },
            options={"idempotency_key": order_id},
        )
        return PaymentIntent(id=intent.id, client_secret=intent.client_secret, status=intent.status)

    def verify_webhook(self, payload: bytes, signature: str | None) -> dict:
        if self.webhook_secret:
            try:
                stripe.WebhookSignature.verify_header(payload.decode("utf-8"), signature or "", self.webhook_secret)
            except stripe.SignatureVerificationError:
                raise ValidationError({"signature": ["invalid Stripe-Signature header"]}) from None
        return decode_event(payload)
