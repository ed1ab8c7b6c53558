"""Password reset: command and handler.

A new password is generated, mailed to the user and only then persisted, so
a failed delivery leaves the previous password in place.
"""

import secrets
import string

from protean import handle
from protean.fields import String
from protean.utils.globals import current_domain

from authentication.domain import authentication, logger
from authentication.hashing import get_hasher
from authentication.mail import get_email_client
from authentication.user.user import User

PASSWORD_ALPHABET = string.ascii_letters + string.digits
PASSWORD_LENGTH = 8


def generate_password(length: int = PASSWORD_LENGTH) -> str:
    return "".join(secrets.choice(PASSWORD_ALPHABET) for _ in range(length))


@authentication.command(part_of="User")
class ResetPassword:
    """Replace the password of the account registered under ``email``."""

    email: String(required=True, max_length=254)


@authentication.command_handler(part_of=User)
class ResetPasswordHandler:
    @handle(ResetPassword)
    def reset_password(self, command):
        repo = current_domain.repository_for(User)
        user = repo.find_by_email(command.email)

        logger.info("Resetting password", user_id=str(user.id))

        new_password = generate_password()
        user.change_password(get_hasher().hash_password(new_password))

        get_email_client().send_password_reset_email(user.email, user.first_name, new_password)
        repo.update(user)
