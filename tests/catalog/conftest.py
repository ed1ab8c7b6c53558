import json
from datetime import datetime
from uuid import uuid4

import pytest
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def catalog_bed():
    from catalog.domain import catalog

    bed = DomainFixture(catalog)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(catalog_bed):
    with catalog_bed.domain_context():
        yield

        from protean import current_domain

        for _, provider in current_domain.providers.items():
            provider._data_reset()

        current_domain.event_store.store._data_reset()


@pytest.fixture()
def book_details():
    return {
        "title": "Dune",
        "description": "A desert planet and its spice",
        "author_name": "Frank Herbert",
        "content_id": "content-dune",
        "price": 1999,
        "release_date": datetime(1965, 8, 1),
    }


@pytest.fixture()
def add_book(book_details):
    """Store a book through the CreateBook command, bypassing the admin check, and return its id."""
    from catalog.book.management import CreateBook
    from protean import current_domain

    def _add(images=None, **overrides):
        book_id = str(uuid4())
        current_domain.process(
            CreateBook(
                book_id=book_id,
                images=json.dumps(images) if images is not None else None,
                **{**book_details, **overrides},
            ),
            asynchronous=False,
        )
        return book_id

    return _add
