"""Tests for registering accounts."""

import pytest
from authentication import authenticator
from authentication.tokens import get_token_handler
from authentication.user.registration import RegisterUser
from authentication.user.user import Role, User
from protean import current_domain
from protean.exceptions import TransactionError, ValidationError
from shared.errors import DuplicateKey
from sqlalchemy.exc import IntegrityError, OperationalError


def _failing_create(cause):
    def create(self, user):
        raise TransactionError("Unit of Work commit failed") from cause

    return create


class TestRegister:
    def test_returns_token_for_new_customer(self, register_user):
        token = register_user(email="Ada@Example.com")

        identity = get_token_handler().extract_identity(token)
        assert identity.email == "ada@example.com"
        assert identity.full_name == "Ada Lovelace"
        assert not identity.is_admin

        user = current_domain.repository_for(User).find_by_email("ada@example.com")
        assert str(user.id) == identity.id
        assert user.role == Role.CUSTOMER.value

    def test_password_is_stored_hashed(self, register_user):
        register_user(password="secret1")

        user = current_domain.repository_for(User).find_by_email("reader@example.com")
        assert user.password_hash != "secret1"
        assert user.password_hash.startswith("$2")

    def test_duplicate_email(self, register_user):
        register_user(email="reader@example.com")

        with pytest.raises(DuplicateKey) as exc_info:
            register_user(email="READER@example.com")

        assert exc_info.value.message == "the provided email is already being used"
        assert "(Register) failed saving user" in exc_info.value.__notes__

    def test_concurrent_duplicate_email_at_commit(self, register_user, monkeypatch):
        cause = IntegrityError("INSERT INTO users", {}, Exception("duplicate key value violates unique constraint"))
        monkeypatch.setattr(type(current_domain.repository_for(User)), "create", _failing_create(cause))

        with pytest.raises(DuplicateKey) as exc_info:
            register_user(email="reader@example.com")

        assert exc_info.value.message == "the provided email is already being used"
        assert "(Register) failed saving user" in exc_info.value.__notes__

    def test_other_commit_failures_propagate(self, register_user, monkeypatch):
        cause = OperationalError("INSERT INTO users", {}, Exception("connection reset"))
        monkeypatch.setattr(type(current_domain.repository_for(User)), "create", _failing_create(cause))

        with pytest.raises(TransactionError):
            register_user(email="reader@example.com")

    def test_invalid_request_touches_nothing(self):
        with pytest.raises(ValidationError):
            authenticator.register(
                first_name="Ada",
                last_name="Lovelace",
                email="ada@example.com",
                password="secret1",
                password_confirmation="different",
            )

        assert current_domain.repository_for(User)._dao.query.all().total == 0

    def test_admin_registration(self, register_user):
        token = register_user(email="admin@example.com", role=Role.ADMIN)
        assert get_token_handler().extract_identity(token).is_admin


class TestRegisterUserCommand:
    def test_command_creates_user(self):
        current_domain.process(
            RegisterUser(
                user_id="user-42",
                first_name="Grace",
                last_name="Hopper",
                email="grace@example.com",
                password_hash="$2b$04$hash",
            ),
            asynchronous=False,
        )

        user = current_domain.repository_for(User).find_by_id("user-42")
        assert user.full_name == "Grace Hopper"
        assert user.role == Role.CUSTOMER.value
