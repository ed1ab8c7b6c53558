"""Book aggregate root with its Image entities."""

from datetime import UTC, datetime

from protean import atomic_change
from protean.exceptions import ValidationError
from protean.fields import DateTime, HasMany, Integer, String, Text

from catalog.domain import catalog


@catalog.entity(part_of="Book", schema_name="images")
class Image:
    """A poster or illustration of a book.

    The image id is the object-store key the client uploaded the bytes to.
    """

    description = String(max_length=255)
    position = Integer(default=0, min_value=0)


@catalog.aggregate(schema_name="books")
class Book:
    title = String(required=True, max_length=100)
    description = Text(required=True)
    author_name = String(required=True, max_length=100)
    price = Integer(required=True, min_value=0)
    release_date = DateTime(required=True)
    content_id = String(required=True, max_length=100)
    images = HasMany(Image)
    created_at = DateTime()
    updated_at = DateTime()

    @property
    def ordered_images(self) -> list[Image]:
        return sorted(self.images, key=lambda image: image.position or 0)

    @property
    def main_image_id(self) -> str:
        images = self.ordered_images
        return str(images[0].id) if images else ""

    @classmethod
    def create(cls, id, title, description, author_name, price, release_date, content_id, images=None):
        from catalog.book.events import BookAdded

        now = datetime.now(UTC)
        book = cls(
            id=id,
            title=title,
            description=description,
            author_name=author_name,
            price=price,
            release_date=release_date,
            content_id=content_id,
            created_at=now,
            updated_at=now,
        )
        if images:
            book.replace_images(images)

        book.raise_(
            BookAdded(
                book_id=str(book.id),
                title=book.title,
                author_name=book.author_name,
                price=book.price,
                added_at=now,
            )
        )
        return book

    def update_details(self, title=None, description=None, author_name=None, images=None):
        """Partial update: empty values keep the current ones, ``images`` replaces the set."""
        from catalog.book.events import BookDetailsUpdated

        if title:
            self.title = title
        if description:
            self.description = description
        if author_name:
            self.author_name = author_name
        if images is not None:
            self.replace_images(images)

        self.updated_at = datetime.now(UTC)

        self.raise_(
            BookDetailsUpdated(
                book_id=str(self.id),
                title=self.title,
                author_name=self.author_name,
                image_count=len(self.images),
                updated_at=self.updated_at,
            )
        )

    def replace_images(self, images):
        """Make the image set equal to ``images`` (dicts with ``id`` and ``description``), in that order."""
        requested = [image for image in images if image.get("id")]
        if len(requested) != len(images):
            raise ValidationError({"images": ["Every image must carry the id of an uploaded object"]})

        ids = [image["id"] for image in requested]
        if len(set(ids)) != len(ids):
            raise ValidationError({"images": ["Image ids must be unique"]})

        with atomic_change(self):
            for image in list(self.images):
                if str(image.id) not in ids:
                    self.remove_images(image)

            existing = {str(image.id): image for image in self.images}
            for position, data in enumerate(requested):
                image = existing.get(data["id"])
                if image is None:
                    self.add_images(Image(id=data["id"], description=data.get("description"), position=position))
                else:
                    image.description = data.get("description")
                    image.position = position
