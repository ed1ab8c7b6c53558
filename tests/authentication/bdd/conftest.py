"""Shared BDD fixtures and step definitions for the authentication domain."""

import pytest
from authentication import authenticator
from pytest_bdd import given, parsers, then
from shared.errors import EbookStoreError


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def outcome():
    """Container for the token or the captured error of the last action."""
    return {"token": None, "exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a customer registered with email "{email}" and password "{password}"'))
def registered_customer(email, password):
    authenticator.register(
        first_name="Ada",
        last_name="Lovelace",
        email=email,
        password=password,
        password_confirmation=password,
    )


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then("a token is returned")
def token_returned(outcome):
    assert outcome["exc"] is None
    assert outcome["token"]


@then(parsers.cfparse('the request fails with "{message}"'))
def request_fails(outcome, message):
    assert isinstance(outcome["exc"], EbookStoreError)
    assert outcome["exc"].message == message
