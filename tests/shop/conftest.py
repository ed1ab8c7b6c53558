import pytest
from catalog.responses import BookSummary
from protean.integrations.pytest import DomainFixture
from shared.errors import EntityNotFound
from shop.catalog_gateway import CatalogGateway, set_catalog_gateway

BOOKS = {
    "book-1": BookSummary(id="book-1", title="Dune", price=1999, main_image_id="img-1"),
    "book-2": BookSummary(id="book-2", title="Neuromancer", price=1500, main_image_id=""),
}


class StubCatalogGateway(CatalogGateway):
    """Serves a fixed set of books without touching the catalog domain."""

    def __init__(self, books):
        self.books = dict(books)

    def find_book(self, book_id):
        try:
            return self.books[book_id]
        except KeyError:
            raise EntityNotFound("book") from None

    def get_book_content_url(self, book_id):
        self.find_book(book_id)
        return f"memory://ebooks-test/content-{book_id}?method=GET"


@pytest.fixture(scope="session")
def shop_bed():
    from shop.domain import shop

    bed = DomainFixture(shop)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(shop_bed):
    with shop_bed.domain_context():
        yield

        from protean import current_domain

        for _, provider in current_domain.providers.items():
            provider._data_reset()

        current_domain.event_store.store._data_reset()


@pytest.fixture(autouse=True)
def catalog_gateway(_adapters):
    gateway = StubCatalogGateway(BOOKS)
    set_catalog_gateway(gateway)
    return gateway


@pytest.fixture()
def as_user():
    """Run the block on behalf of ``user_id``."""
    from shared.context import request_context

    def _as_user(user_id, admin=False):
        return request_context(request_id=f"req-{user_id}", user_id=user_id, admin=admin)

    return _as_user
