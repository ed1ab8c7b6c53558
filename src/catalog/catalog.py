"""Catalog operations.

Reads are open to every authenticated caller; writes require the admin flag
of the request context and check it before looking at the payload.
"""

import json
from dataclasses import dataclass
from uuid import uuid4

from protean.utils.globals import current_domain

from catalog.book.book import Book
from catalog.book.management import CreateBook, DeleteBook, UpdateBook
from catalog.domain import logger
from catalog.responses import BookResponse, BookSummary, PaginatedBooksResponse, PresignedURLResponse
from catalog.storage import get_storage
from shared.context import current_context
from shared.errors import Forbidden, annotate
from shared.query import DEFAULT_PAGE, ComparisonOperator, Page, Query


class ForbiddenCatalogAccess(Forbidden):
    message = "the access to this action is restricted to allowed users"


@dataclass(frozen=True)
class SearchBooks:
    title: str | None = None
    description: str | None = None
    author_name: str | None = None
    page: int | None = None
    per_page: int | None = None

    def to_query(self) -> Query:
        query = Query()
        for field_name, value in (
            ("title", self.title),
            ("description", self.description),
            ("author_name", self.author_name),
        ):
            if value:
                query.and_(field_name, ComparisonOperator.MATCH, value)
        return query

    def to_page(self) -> Page:
        return Page(
            number=self.page if self.page and self.page > 0 else DEFAULT_PAGE.number,
            size=self.per_page if self.per_page and self.per_page > 0 else DEFAULT_PAGE.size,
        )


def require_admin(operation: str) -> None:
    if not current_context().admin:
        error = ForbiddenCatalogAccess()
        error.add_note(f"({operation}) failed validating access conditions")
        raise error


def _repository():
    return current_domain.repository_for(Book)


def _image_links(book: Book) -> list[str]:
    storage = get_storage()
    return [storage.generate_get_presigned_url(str(image.id)) for image in book.ordered_images]


def _encode_images(images):
    if images is None:
        return None
    return json.dumps([{"id": image.get("id"), "description": image.get("description")} for image in images])


def find_books(search: SearchBooks) -> PaginatedBooksResponse:
    logger.info("Finding books", search=search)

    with annotate("(FindBooks) failed finding books"):
        books = _repository().find_by_query(search.to_query(), search.to_page())

    results = []
    for book in books.items:
        with annotate(f"(FindBooks) failed generating url for book {book.id}"):
            results.append(BookResponse.from_book(book, _image_links(book)))

    return PaginatedBooksResponse.build(results, limit=books.limit, offset=books.offset, total=books.total)


def find_book_by_id(book_id: str) -> BookResponse:
    with annotate(f"(FindBookByID) failed finding book {book_id}"):
        book = _repository().find_by_id(book_id)

    with annotate("(FindBookByID) failed generating presigned url"):
        return BookResponse.from_book(book, _image_links(book))


def find_book_summary(book_id: str) -> BookSummary:
    with annotate(f"(FindBookSummary) failed finding book {book_id}"):
        book = _repository().find_by_id(book_id)
    return BookSummary(id=str(book.id), title=book.title, price=book.price, main_image_id=book.main_image_id)


def get_book_content_url(book_id: str) -> str:
    with annotate(f"(GetBookContentURL) failed finding book {book_id}"):
        book = _repository().find_by_id(book_id)

    with annotate("(GetBookContentURL) failed generating presigned url"):
        return get_storage().generate_get_presigned_url(book.content_id)


def create_book(
    title=None,
    description=None,
    author_name=None,
    content_id=None,
    price=None,
    release_date=None,
    images=None,
) -> BookResponse:
    require_admin("CreateBook")

    book_id = str(uuid4())
    with annotate("(CreateBook) failed validating request"):
        command = CreateBook(
            book_id=book_id,
            title=title,
            description=description,
            author_name=author_name,
            content_id=content_id,
            price=price,
            release_date=release_date,
            images=_encode_images(images),
        )

    logger.info("Creating book", book_id=book_id)
    with annotate("(CreateBook) failed creating book"):
        current_domain.process(command, asynchronous=False)

    return find_book_by_id(book_id)


def update_book(book_id, title=None, description=None, author_name=None, images=None) -> None:
    require_admin("UpdateBook")

    with annotate("(UpdateBook) failed validating request"):
        command = UpdateBook(
            book_id=book_id,
            title=title,
            description=description,
            author_name=author_name,
            images=_encode_images(images),
        )

    logger.info("Updating book", book_id=book_id)
    with annotate(f"(UpdateBook) failed updating book {book_id}"):
        current_domain.process(command, asynchronous=False)


def delete_book(book_id: str) -> None:
    require_admin("DeleteBook")

    logger.info("Deleting book", book_id=book_id)
    with annotate(f"(DeleteBook) failed deleting book {book_id}"):
        current_domain.process(DeleteBook(book_id=book_id), asynchronous=False)


def generate_put_presigned_url() -> PresignedURLResponse:
    key = str(uuid4())
    with annotate("(GeneratePutPreSignedUrl) failed generating presigned url"):
        url = get_storage().generate_put_presigned_url(key)
    return PresignedURLResponse(id=key, url=url)
