"""Validated shapes of the authentication requests.

Constructing a form raises ``ValidationError`` listing the offending fields,
before any password is hashed or any repository is touched.
"""

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import String

from authentication.domain import authentication
from authentication.user.user import EmailAddress

# bcrypt only reads the first 72 bytes of a password
MAX_PASSWORD_BYTES = 72


@authentication.value_object(part_of="User")
class RegistrationForm:
    first_name: String(required=True, min_length=1, max_length=150)
    last_name: String(required=True, min_length=1, max_length=150)
    email: String(required=True, max_length=254)
    password: String(required=True, min_length=6, max_length=20)
    password_confirmation: String(required=True, max_length=20)

    @invariant.post
    def email_must_be_well_formed(self):
        if self.email:
            EmailAddress(address=self.email)

    @invariant.post
    def password_must_fit_the_hash(self):
        if self.password and len(self.password.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValidationError({"password": [f"must not exceed {MAX_PASSWORD_BYTES} bytes once encoded"]})

    @invariant.post
    def confirmation_must_match_password(self):
        if self.password != self.password_confirmation:
            raise ValidationError({"password_confirmation": ["must be equal to password"]})


@authentication.value_object(part_of="User")
class LoginForm:
    email: String(required=True, max_length=254)
    password: String(required=True, max_length=20)

    @invariant.post
    def email_must_be_well_formed(self):
        if self.email:
            EmailAddress(address=self.email)


@authentication.value_object(part_of="User")
class PasswordResetForm:
    email: String(required=True, max_length=254)

    @invariant.post
    def email_must_be_well_formed(self):
        if self.email:
            EmailAddress(address=self.email)
