"""Domain events for the User aggregate."""

from protean.fields import DateTime, Identifier, String

from authentication.domain import authentication


@authentication.event(part_of="User")
class UserRegistered:
    """A new account was created, as a customer unless provisioned otherwise."""

    __version__ = 1

    user_id: Identifier(required=True)
    email: String(required=True)
    role: String(required=True)
    registered_at: DateTime(required=True)


@authentication.event(part_of="User")
class PasswordChanged:
    """The password of an account was replaced by a generated one."""

    __version__ = 1

    user_id: Identifier(required=True)
    changed_at: DateTime(required=True)
