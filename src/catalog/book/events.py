"""Domain events for the Book aggregate."""

from protean.fields import DateTime, Identifier, Integer, String

from catalog.domain import catalog


@catalog.event(part_of="Book")
class BookAdded:
    """A new book was published in the catalog."""

    __version__ = 1

    book_id: Identifier(required=True)
    title: String(required=True)
    author_name: String(required=True)
    price: Integer(required=True)
    added_at: DateTime(required=True)


@catalog.event(part_of="Book")
class BookDetailsUpdated:
    """Title, description, author or images of a book were changed."""

    __version__ = 1

    book_id: Identifier(required=True)
    title: String(required=True)
    author_name: String(required=True)
    image_count: Integer(required=True)
    updated_at: DateTime(required=True)
