"""Tests for the User aggregate."""

import pytest
from authentication.user.events import PasswordChanged, UserRegistered
from authentication.user.user import Role, User
from protean.exceptions import ValidationError


def _register(**overrides):
    values = {
        "id": "user-1",
        "first_name": "Ada",
        "last_name": "Lovelace",
        "email": "Ada@Example.com",
        "password_hash": "$2b$04$hash",
    }
    values.update(overrides)
    return User.register(**values)


class TestUserRegistration:
    def test_email_is_lower_cased(self):
        user = _register()
        assert user.email == "ada@example.com"

    def test_customer_by_default(self):
        user = _register()
        assert user.role == Role.CUSTOMER.value
        assert not user.is_admin

    def test_admin_role(self):
        user = _register(role=Role.ADMIN)
        assert user.is_admin

    def test_full_name(self):
        assert _register().full_name == "Ada Lovelace"

    def test_created_at_is_set(self):
        assert _register().created_at is not None

    def test_raises_user_registered(self):
        user = _register()
        assert len(user._events) == 1
        event = user._events[0]
        assert isinstance(event, UserRegistered)
        assert event.user_id == "user-1"
        assert event.email == "ada@example.com"
        assert event.role == "CUSTOMER"

    @pytest.mark.parametrize("email", ["plain", "a@b", "a@@example.com", "a b@example.com", "a@-example.com"])
    def test_malformed_email_is_rejected(self, email):
        with pytest.raises(ValidationError) as exc_info:
            _register(email=email)
        assert "email" in exc_info.value.messages

    def test_names_are_required(self):
        with pytest.raises(ValidationError) as exc_info:
            _register(first_name="")
        assert "first_name" in exc_info.value.messages


class TestPasswordChange:
    def test_change_password(self):
        user = _register()
        user._events.clear()

        user.change_password("$2b$04$other")

        assert user.password_hash == "$2b$04$other"
        assert isinstance(user._events[-1], PasswordChanged)
