"""AWS SES email adapter."""

import boto3
from botocore.config import Config

from authentication.domain import logger
from authentication.mail.port import PASSWORD_RESET_SUBJECT, EmailClient, password_reset_body

CHARSET = "UTF-8"
TIMEOUT_SECONDS = 10


class SESEmailClient(EmailClient):
    def __init__(self, source_email: str, region: str, endpoint_url: str | None = None, client=None) -> None:
        self.source_email = source_email
        self._client = client or boto3.client(
            "ses",
            region_name=region,
            endpoint_url=endpoint_url,
            config=Config(connect_timeout=TIMEOUT_SECONDS, read_timeout=TIMEOUT_SECONDS, retries={"max_attempts": 2}),
        )

    def send_password_reset_email(self, email: str, first_name: str, new_password: str) -> None:
        logger.info("Sending password reset email")
        response = self._client.send_email(
            Source=self.source_email,
            Destination={"ToAddresses": [email]},
            Message={
                "Subject": {"Charset": CHARSET, "Data": PASSWORD_RESET_SUBJECT},
                "Body": {"Html": {"Charset": CHARSET, "Data": password_reset_body(first_name, new_password)}},
            },
        )
        logger.debug("Password reset email accepted", message_id=response.get("MessageId"))
