"""Tests for error kinds and note annotation."""

import pytest
from shared.errors import (
    DuplicateKey,
    EbookStoreError,
    EntityNotFound,
    Forbidden,
    PaymentRequired,
    Unauthorized,
    annotate,
    error_details,
)


class TestErrorMessages:
    def test_default_message(self):
        assert EbookStoreError().message == "Some unexpected error happened"

    def test_entity_not_found(self):
        error = EntityNotFound("book")
        assert error.entity == "book"
        assert error.message == "the provided book was not found"
        assert str(error) == "the provided book was not found"

    def test_duplicate_key(self):
        assert DuplicateKey("email").message == "the provided email is already being used"

    def test_custom_message_wins(self):
        assert EntityNotFound("item", "item not found in cart").message == "item not found in cart"

    @pytest.mark.parametrize("kind", [Forbidden, Unauthorized, PaymentRequired])
    def test_kinds_are_store_errors(self, kind):
        assert isinstance(kind(), EbookStoreError)


class TestAnnotate:
    def test_notes_are_added_innermost_first(self):
        with pytest.raises(EntityNotFound) as exc_info:
            with annotate("(Outer) failed"):
                with annotate("(Inner) failed"):
                    raise EntityNotFound("order")

        assert error_details(exc_info.value) == [
            "the provided order was not found",
            "(Inner) failed",
            "(Outer) failed",
        ]

    def test_leaf_type_is_preserved(self):
        with pytest.raises(Forbidden):
            with annotate("(DeleteBook) failed"):
                raise Forbidden()

    def test_no_exception_no_note(self):
        with annotate("(Noop) failed"):
            value = 1
        assert value == 1

    def test_details_of_plain_exception(self):
        assert error_details(RuntimeError("boom")) == ["boom"]
