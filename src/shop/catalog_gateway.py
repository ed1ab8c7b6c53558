"""Access to the catalog bounded context from the shop.

The catalog runs in its own protean domain, so every call is made inside
that domain's context.

Provides get_catalog_gateway() / set_catalog_gateway() to swap
implementations in tests.
"""

from catalog import catalog as catalog_service
from catalog.domain import catalog
from catalog.responses import BookSummary


class CatalogGateway:
    def find_book(self, book_id: str) -> BookSummary:
        with catalog.domain_context():
            return catalog_service.find_book_summary(book_id)

    def get_book_content_url(self, book_id: str) -> str:
        with catalog.domain_context():
            return catalog_service.get_book_content_url(book_id)


_current_gateway: CatalogGateway | None = None


def get_catalog_gateway() -> CatalogGateway:
    global _current_gateway
    if _current_gateway is None:
        _current_gateway = CatalogGateway()
    return _current_gateway


def set_catalog_gateway(gateway: CatalogGateway) -> None:
    global _current_gateway
    _current_gateway = gateway


def reset_catalog_gateway() -> None:
    global _current_gateway
    _current_gateway = None
