"""Fake email client that keeps sent messages in memory."""

from authentication.mail.port import PASSWORD_RESET_SUBJECT, EmailClient, password_reset_body


class FakeEmailClient(EmailClient):
    def __init__(self) -> None:
        self.should_fail: bool = False
        self.sent: list[dict] = []

    def configure(self, should_fail: bool) -> None:
        self.should_fail = should_fail

    def send_password_reset_email(self, email: str, first_name: str, new_password: str) -> None:
        if self.should_fail:
            raise ConnectionError("email delivery failed")
        self.sent.append(
            {
                "to": email,
                "subject": PASSWORD_RESET_SUBJECT,
                "body": password_reset_body(first_name, new_password),
                "password": new_password,
            }
        )
