"""User registration: command and handler."""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from authentication.domain import authentication
from authentication.user.user import Role, User


@authentication.command(part_of="User")
class RegisterUser:
    """Create an account. The password arrives already hashed."""

    user_id: Identifier(required=True)
    first_name: String(required=True, max_length=150)
    last_name: String(required=True, max_length=150)
    email: String(required=True, max_length=254)
    password_hash: String(required=True, max_length=255)
    role: String(choices=Role, default=Role.CUSTOMER.value)


@authentication.command_handler(part_of=User)
class RegisterUserHandler:
    @handle(RegisterUser)
    def register_user(self, command):
        user = User.register(
            id=command.user_id,
            first_name=command.first_name,
            last_name=command.last_name,
            email=command.email,
            password_hash=command.password_hash,
            role=Role(command.role or Role.CUSTOMER.value),
        )
        current_domain.repository_for(User).create(user)
        return str(user.id)
