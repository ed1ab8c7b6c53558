"""Tests for the Book aggregate and its images."""

from datetime import datetime

import pytest
from catalog.book.book import Book
from catalog.book.events import BookAdded, BookDetailsUpdated
from protean.exceptions import ValidationError


def _book(images=None, **overrides):
    values = {
        "id": "book-1",
        "title": "Dune",
        "description": "A desert planet and its spice",
        "author_name": "Frank Herbert",
        "price": 1999,
        "release_date": datetime(1965, 8, 1),
        "content_id": "content-dune",
    }
    values.update(overrides)
    return Book.create(images=images, **values)


class TestBookCreation:
    def test_create(self):
        book = _book()
        assert book.title == "Dune"
        assert book.created_at == book.updated_at
        assert book.main_image_id == ""

    def test_raises_book_added(self):
        book = _book()
        event = book._events[-1]
        assert isinstance(event, BookAdded)
        assert event.book_id == "book-1"
        assert event.price == 1999

    def test_images_keep_request_order(self):
        book = _book(images=[{"id": "img-2", "description": "cover"}, {"id": "img-1", "description": "back"}])
        assert [str(image.id) for image in book.ordered_images] == ["img-2", "img-1"]
        assert book.main_image_id == "img-2"

    def test_title_is_limited(self):
        with pytest.raises(ValidationError) as exc_info:
            _book(title="x" * 101)
        assert "title" in exc_info.value.messages

    def test_price_cannot_be_negative(self):
        with pytest.raises(ValidationError) as exc_info:
            _book(price=-1)
        assert "price" in exc_info.value.messages

    def test_content_id_is_required(self):
        with pytest.raises(ValidationError) as exc_info:
            _book(content_id=None)
        assert "content_id" in exc_info.value.messages

    def test_image_ids_must_be_unique(self):
        with pytest.raises(ValidationError):
            _book(images=[{"id": "img-1"}, {"id": "img-1"}])

    def test_image_ids_are_required(self):
        with pytest.raises(ValidationError):
            _book(images=[{"description": "cover"}])


class TestUpdateDetails:
    def test_empty_values_keep_current_ones(self):
        book = _book()
        book.update_details(title="Dune Messiah", description="", author_name=None)

        assert book.title == "Dune Messiah"
        assert book.description == "A desert planet and its spice"
        assert book.author_name == "Frank Herbert"
        assert isinstance(book._events[-1], BookDetailsUpdated)

    def test_images_none_keeps_images(self):
        book = _book(images=[{"id": "img-1", "description": "cover"}])
        book.update_details(title="Dune Messiah")
        assert [str(image.id) for image in book.images] == ["img-1"]

    def test_images_replace_the_set(self):
        book = _book(images=[{"id": "img-1", "description": "cover"}, {"id": "img-2", "description": "back"}])

        book.update_details(images=[{"id": "img-2", "description": "new back"}, {"id": "img-3", "description": "map"}])

        ordered = book.ordered_images
        assert [str(image.id) for image in ordered] == ["img-2", "img-3"]
        assert ordered[0].description == "new back"
        assert book.main_image_id == "img-2"

    def test_empty_image_list_clears_images(self):
        book = _book(images=[{"id": "img-1", "description": "cover"}])
        book.update_details(images=[])
        assert list(book.images) == []
        assert book.main_image_id == ""
