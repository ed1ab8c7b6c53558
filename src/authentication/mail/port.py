"""Email client port.

Both adapters send the password-reset message; the fake one records it
instead of talking to AWS.
"""

from abc import ABC, abstractmethod
from html import escape

PASSWORD_RESET_SUBJECT = "Your Password has been Reset!"


def password_reset_body(first_name: str, new_password: str) -> str:
    return (
        f"<h1>Hello, {escape(first_name)}!</h1>"
        "<p>You've reset your password successfully!</p>"
        f"<p>Your new password is: {escape(new_password)}</p>"
        "<p>If you did not ask for this change, please contact us!</p>"
    )


class EmailClient(ABC):
    @abstractmethod
    def send_password_reset_email(self, email: str, first_name: str, new_password: str) -> None:
        """Deliver the generated password to ``email``."""
        ...
