"""Tests for the Stripe gateway against a mocked client."""

import json
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest
import stripe
from protean.exceptions import ValidationError
from shop.order.order import Order
from shop.payment.stripe_adapter import StripeGateway


@pytest.fixture()
def client():
    client = MagicMock()
    client.payment_intents.create.return_value = SimpleNamespace(
        id="pi_123", client_secret="pi_123_secret_abc", status="requires_payment_method"
    )
    return client


@pytest.fixture()
def order():
    return Order.place(
        id="order-1",
        user_id="user-1",
        items=[
            {"id": "book-1", "name": "Dune", "price": 1999, "preview_image_id": "img-1"},
            {"id": "book-2", "name": "Neuromancer", "price": 1500},
        ],
    )


def test_create_payment_intent(client, order):
    intent = StripeGateway("sk_test", client=client).create_payment_intent(order)

    assert (intent.id, intent.client_secret, intent.status) == (
        "pi_123",
        "pi_123_secret_abc",
        "requires_payment_method",
    )
    client.payment_intents.create.assert_called_once_with(
        params={
            "amount": 3499,
            "currency": "usd",
            "payment_method_types": ["card"],
            "metadata": {"orderID": "order-1", "userID": "user-1"},
        },
        options={"idempotency_key": "order-1"},
    )


def test_stripe_errors_propagate(client, order):
    client.payment_intents.create.side_effect = stripe.APIConnectionError("network down")

    with pytest.raises(stripe.APIConnectionError):
        StripeGateway("sk_test", client=client).create_payment_intent(order)


class TestVerifyWebhook:
    payload = json.dumps({"id": "evt_1", "type": "payment_intent.succeeded"}).encode()

    def test_without_secret(self, client):
        event = StripeGateway("sk_test", client=client).verify_webhook(self.payload, None)
        assert event["type"] == "payment_intent.succeeded"

    def test_valid_signature(self, client):
        gateway = StripeGateway("sk_test", webhook_secret="whsec_1", client=client)

        with patch.object(stripe.WebhookSignature, "verify_header", return_value=True) as verify:
            event = gateway.verify_webhook(self.payload, "t=1,v1=sig")

        verify.assert_called_once_with(self.payload.decode(), "t=1,v1=sig", "whsec_1")
        assert event["id"] == "evt_1"

    def test_invalid_signature(self, client):
        gateway = StripeGateway("sk_test", webhook_secret="whsec_1", client=client)
        error = stripe.SignatureVerificationError("bad signature", "t=1,v1=sig")

        with patch.object(stripe.WebhookSignature, "verify_header", side_effect=error):
            with pytest.raises(ValidationError) as exc_info:
                gateway.verify_webhook(self.payload, "t=1,v1=sig")

        assert exc_info.value.messages == {"signature": ["invalid Stripe-Signature header"]}

    def test_not_an_object(self, client):
        with pytest.raises(ValidationError):
            StripeGateway("sk_test", client=client).verify_webhook(b"[1, 2]", None)
