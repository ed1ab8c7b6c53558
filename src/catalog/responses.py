"""Client-facing representations of books."""

from dataclasses import dataclass
from datetime import datetime

from catalog.book.book import Book
from shared.responses import CamelModel, PaginatedResponse


class ImageResponse(CamelModel):
    id: str
    link: str
    description: str | None = None


class BookResponse(CamelModel):
    id: str
    title: str
    description: str
    author_name: str
    images: list[ImageResponse]
    price: int
    release_date: datetime
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_book(cls, book: Book, links: list[str]) -> "BookResponse":
        """``links[i]`` is the presigned URL of the i-th image in display order."""
        return cls(
            id=str(book.id),
            title=book.title,
            description=book.description,
            author_name=book.author_name,
            images=[
                ImageResponse(id=str(image.id), link=link, description=image.description)
                for image, link in zip(book.ordered_images, links, strict=True)
            ],
            price=book.price,
            release_date=book.release_date,
            created_at=book.created_at,
            updated_at=book.updated_at,
        )


class PaginatedBooksResponse(PaginatedResponse[BookResponse]):
    pass


class PresignedURLResponse(CamelModel):
    id: str
    url: str


@dataclass(frozen=True)
class BookSummary:
    """What the shop needs to know about a book to sell it."""

    id: str
    title: str
    price: int
    main_image_id: str
