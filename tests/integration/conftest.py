"""Fixtures for tests that drive the assembled application.

Requests are routed to the authentication, catalog and shop domains by the
application itself, so every domain is reset after each test.
"""

import pytest


@pytest.fixture(scope="session")
def application():
    from app import app

    return app


@pytest.fixture()
def client(application):
    from fastapi.testclient import TestClient

    with TestClient(application) as client:
        yield client


@pytest.fixture(autouse=True)
def _reset_domains(application):
    yield

    from authentication.domain import authentication
    from catalog.domain import catalog
    from shop.domain import shop

    for domain in (authentication, catalog, shop):
        with domain.domain_context():
            for _, provider in domain.providers.items():
                provider._data_reset()
            domain.event_store.store._data_reset()
