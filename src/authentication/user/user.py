"""User aggregate: the authentication principal."""

from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, String

from authentication.domain import authentication


class Role(Enum):
    ADMIN = "ADMIN"
    CUSTOMER = "CUSTOMER"


_FORBIDDEN_EMAIL_CHARACTERS = (";", ",", "(", ")", '"', ":", "<", ">", "[", "]", "\\")


@authentication.value_object(part_of="User")
class EmailAddress:
    """A structurally valid email address.

    Enforces exactly one @, non-empty local and domain parts, a dotted domain
    without leading/trailing hyphens in its labels, no consecutive dots and no
    forbidden characters.
    """

    address: String(required=True, max_length=254)

    @invariant.post
    def verify_email_address(self):
        email = self.address
        error = ValidationError({"email": [f"Invalid email address: {email!r}"]})

        if any(char.isspace() for char in email) or email.count("@") != 1:
            raise error

        local_part, domain_part = email.split("@", 1)

        if not local_part or local_part.startswith(".") or local_part.endswith("."):
            raise error

        if not domain_part or "." not in domain_part or domain_part.startswith(".") or domain_part.endswith("."):
            raise error

        if any(label.startswith("-") or label.endswith("-") for label in domain_part.split(".")):
            raise error

        if ".." in email or any(char in email for char in _FORBIDDEN_EMAIL_CHARACTERS):
            raise error


def normalize_email(email: str) -> str:
    return email.strip().lower()


@authentication.aggregate(schema_name="users")
class User:
    first_name = String(required=True, min_length=1, max_length=150)
    last_name = String(required=True, min_length=1, max_length=150)
    email = String(required=True, max_length=254, unique=True)
    password_hash = String(required=True, max_length=255)
    role = String(choices=Role, default=Role.CUSTOMER.value)
    created_at = DateTime()

    @invariant.post
    def email_must_be_well_formed(self):
        if self.email:
            EmailAddress(address=self.email)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN.value

    @classmethod
    def register(cls, id, first_name, last_name, email, password_hash, role=Role.CUSTOMER):
        from authentication.user.events import UserRegistered

        now = datetime.now(UTC)
        user = cls(
            id=id,
            first_name=first_name,
            last_name=last_name,
            email=normalize_email(email),
            password_hash=password_hash,
            role=role.value,
            created_at=now,
        )
        user.raise_(
            UserRegistered(
                user_id=str(user.id),
                email=user.email,
                role=user.role,
                registered_at=now,
            )
        )
        return user

    def change_password(self, password_hash):
        from authentication.user.events import PasswordChanged

        self.password_hash = password_hash
        self.raise_(PasswordChanged(user_id=str(self.id), changed_at=datetime.now(UTC)))
