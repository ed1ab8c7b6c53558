"""Shared BDD fixtures and step definitions for the shop domain."""

from contextlib import ExitStack

import pytest
from pytest_bdd import given, parsers, then
from shared.context import request_context
from shared.errors import Forbidden, PaymentRequired
from shop import shop as shop_service


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def outcome():
    """Container for the result or the captured error of the last action."""
    return {"result": None, "exc": None}


@pytest.fixture()
def session():
    """Keeps the signed-in request context open until the scenario ends."""
    with ExitStack() as stack:
        yield stack


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a signed-in customer "{user_id}"'), target_fixture="caller")
def signed_in_customer(session, user_id):
    return session.enter_context(request_context(request_id="bdd", user_id=user_id, admin=False))


@given(parsers.cfparse('"{book_id}" is in their cart'))
def book_in_cart(caller, book_id):
    shop_service.add_item_to_cart(book_id)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then("the request is forbidden")
def request_forbidden(outcome):
    assert isinstance(outcome["exc"], Forbidden)


@then("the payment is required")
def payment_required(outcome):
    assert isinstance(outcome["exc"], PaymentRequired)
