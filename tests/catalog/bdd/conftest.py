"""Shared BDD fixtures and step definitions for the catalog domain."""

from contextlib import ExitStack

import pytest
from pytest_bdd import given, parsers, then
from shared.context import request_context
from shared.errors import Forbidden


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
@given("a signed-in customer", target_fixture="caller")
def signed_in_customer(session):
    return session.enter_context(request_context(request_id="bdd", user_id="customer-1", admin=False))


@given("a signed-in admin", target_fixture="caller")
def signed_in_admin(session):
    return session.enter_context(request_context(request_id="bdd", user_id="admin-1", admin=True))


@given(parsers.cfparse('a published book "{title}"'), target_fixture="book_id")
def published_book(add_book, title):
    return add_book(title=title)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then("the request is forbidden")
def request_forbidden(outcome):
    assert isinstance(outcome["exc"], Forbidden)
