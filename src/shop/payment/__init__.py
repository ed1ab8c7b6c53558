"""Payment gateway factory.

Provides get_gateway() / set_gateway() to swap implementations:
- FakeGateway when ENV=test
- StripeGateway otherwise
"""

from shared.config import get_settings
from shop.payment.port import PaymentGateway

_current_gateway: PaymentGateway | None = None


def get_gateway() -> PaymentGateway:
    global _current_gateway
    if _current_gateway is None:
        settings = get_settings()
        if settings.testing:
            from shop.payment.fake_adapter import FakeGateway

            _current_gateway = FakeGateway()
        else:
            from shop.payment.stripe_adapter import StripeGateway

            _current_gateway = StripeGateway(settings.stripe_api_key, settings.stripe_webhook_secret)
    return _current_gateway


def set_gateway(gateway: PaymentGateway) -> None:
    """Override the active payment gateway (useful for tests)."""
    global _current_gateway
    _current_gateway = gateway


def reset_gateway() -> None:
    global _current_gateway
    _current_gateway = None
