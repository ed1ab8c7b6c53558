"""Authentication operations: register, login, password reset and token identification.

Every function runs inside the ``authentication`` domain context and returns
plain values the HTTP layer can serialize.
"""

from uuid import uuid4

from protean.utils.globals import current_domain

from authentication.domain import logger
from authentication.hashing import get_hasher
from authentication.tokens import Identity, get_token_handler
from authentication.user.forms import LoginForm, PasswordResetForm, RegistrationForm
from authentication.user.password_reset import ResetPassword
from authentication.user.registration import RegisterUser
from authentication.user.user import Role, User, normalize_email
from shared.errors import DuplicateKey, Unauthorized, annotate
from shared.persistence import WRITE_ERRORS, is_unique_violation


class WrongPassword(Unauthorized):
    message = "the provided password is wrong"


def _issue_token(user_id: str, email: str, full_name: str, is_admin: bool) -> str:
    return get_token_handler().generate_token(Identity(id=user_id, email=email, full_name=full_name, is_admin=is_admin))


def register(first_name, last_name, email, password, password_confirmation, role=Role.CUSTOMER) -> str:
    """Create an account (a customer one unless told otherwise) and return a bearer token for it."""
    with annotate("(Register) failed validating request"):
        form = RegistrationForm(
            first_name=first_name,
            last_name=last_name,
            email=email,
            password=password,
            password_confirmation=password_confirmation,
        )

    user_id = str(uuid4())
    logger.info("Creating new user", user_id=user_id)

    with annotate("(Register) failed hashing password"):
        password_hash = get_hasher().hash_password(form.password)

    with annotate("(Register) failed saving user"):
        try:
            current_domain.process(
                RegisterUser(
                    user_id=user_id,
                    first_name=form.first_name,
                    last_name=form.last_name,
                    email=normalize_email(form.email),
                    password_hash=password_hash,
                    role=role.value,
                ),
                asynchronous=False,
            )
        except WRITE_ERRORS as exc:
            # A concurrent registration won the unique index on email
            if not is_unique_violation(exc):
                raise
            raise DuplicateKey("email") from exc

    with annotate("(Register) failed generating credentials"):
        return _issue_token(
            user_id,
            normalize_email(form.email),
            f"{form.first_name} {form.last_name}",
            role is Role.ADMIN,
        )


def login(email, password) -> str:
    """Check the password of the account registered under ``email`` and return a bearer token."""
    with annotate("(Login) failed validating request"):
        form = LoginForm(email=email, password=password)

    with annotate("(Login) failed finding user"):
        user = current_domain.repository_for(User).find_by_email(form.email)

    logger.info("New login attempt", user_id=str(user.id))

    if not get_hasher().matches(user.password_hash, form.password):
        error = WrongPassword()
        error.add_note("(Login) failed comparing hash and password")
        raise error

    with annotate("(Login) failed generating credentials"):
        return _issue_token(str(user.id), user.email, user.full_name, user.is_admin)


def reset_password(email) -> None:
    """Mail a freshly generated password to the account registered under ``email``."""
    with annotate("(ResetPassword) failed validating request"):
        form = PasswordResetForm(email=email)

    with annotate("(ResetPassword) failed resetting password"):
        current_domain.process(ResetPassword(email=normalize_email(form.email)), asynchronous=False)


def identify(token: str) -> Identity:
    """Resolve a bearer token into the identity it was issued for."""
    return get_token_handler().extract_identity(token)
