"""Repository for the Book aggregate."""

from protean.exceptions import ObjectNotFoundError

from catalog.book.book import Book
from catalog.domain import catalog
from shared.errors import EntityNotFound
from shared.persistence import QueryableRepository


@catalog.repository(part_of=Book)
class BookRepository(QueryableRepository):
    def find_by_id(self, book_id: str) -> Book:
        try:
            return self.get(book_id)
        except ObjectNotFoundError:
            raise EntityNotFound("book") from None

    def create(self, book: Book) -> Book:
        return self.add(book)

    def update(self, book: Book) -> Book:
        return self.add(book)

    def delete_by_id(self, book_id: str) -> None:
        """Delete a book together with its images."""
        book = self.find_by_id(book_id)
        for image in list(book.images):
            book.remove_images(image)
        self.add(book)
        self._dao.delete(book)
