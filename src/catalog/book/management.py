"""Catalog maintenance: create, update and delete books."""

import json

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from catalog.book.book import Book
from catalog.domain import catalog, logger


def decode_images(images_json):
    """Decode the JSON image list carried by a command; ``None`` stays ``None``."""
    if images_json is None:
        return None
    try:
        images = json.loads(images_json)
    except (json.JSONDecodeError, TypeError):
        raise ValidationError({"images": ["Images must be a JSON list"]}) from None
    if not isinstance(images, list) or not all(isinstance(image, dict) for image in images):
        raise ValidationError({"images": ["Images must be a list of objects with id and description"]})
    return images


@catalog.command(part_of="Book")
class CreateBook:
    """Publish a book whose content and images were already uploaded."""

    book_id: Identifier(required=True)
    title: String(required=True, max_length=100)
    description: Text(required=True)
    author_name: String(required=True, max_length=100)
    content_id: String(required=True, max_length=100)
    price: Integer(required=True, min_value=1)
    release_date: DateTime(required=True)
    images: Text()  # JSON list of {"id", "description"}


@catalog.command(part_of="Book")
class UpdateBook:
    """Change the details of a book. Empty fields are left untouched."""

    book_id: Identifier(required=True)
    title: String(max_length=100)
    description: Text()
    author_name: String(max_length=100)
    images: Text()  # JSON list; absent keeps the current images


@catalog.command(part_of="Book")
class DeleteBook:
    book_id: Identifier(required=True)


@catalog.command_handler(part_of=Book)
class ManageBookHandler:
    @handle(CreateBook)
    def create_book(self, command):
        book = Book.create(
            id=command.book_id,
            title=command.title,
            description=command.description,
            author_name=command.author_name,
            price=command.price,
            release_date=command.release_date,
            content_id=command.content_id,
            images=decode_images(command.images),
        )
        current_domain.repository_for(Book).create(book)
        logger.info("Book created", book_id=str(book.id))
        return str(book.id)

    @handle(UpdateBook)
    def update_book(self, command):
        repo = current_domain.repository_for(Book)
        book = repo.find_by_id(command.book_id)
        book.update_details(
            title=command.title,
            description=command.description,
            author_name=command.author_name,
            images=decode_images(command.images),
        )
        repo.update(book)

    @handle(DeleteBook)
    def delete_book(self, command):
        current_domain.repository_for(Book).delete_by_id(command.book_id)
        logger.info("Book deleted", book_id=command.book_id)
