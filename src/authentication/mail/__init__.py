"""Email client factory.

Provides get_email_client() / set_email_client() to swap implementations:
- FakeEmailClient when ENV=test
- SESEmailClient otherwise
"""

from authentication.mail.port import EmailClient
from shared.config import get_settings

_current_client: EmailClient | None = None


def get_email_client() -> EmailClient:
    global _current_client
    if _current_client is None:
        settings = get_settings()
        if settings.testing:
            from authentication.mail.fake_adapter import FakeEmailClient

            _current_client = FakeEmailClient()
        else:
            from authentication.mail.ses_adapter import SESEmailClient

            _current_client = SESEmailClient(
                source_email=settings.aws_ses_source_email,
                region=settings.aws_region,
                endpoint_url=settings.aws_ses_endpoint,
            )
    return _current_client


def set_email_client(client: EmailClient) -> None:
    global _current_client
    _current_client = client


def reset_email_client() -> None:
    global _current_client
    _current_client = None
