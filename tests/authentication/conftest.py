import pytest
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def authentication_bed():
    from authentication.domain import authentication

    bed = DomainFixture(authentication)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(authentication_bed):
    with authentication_bed.domain_context():
        yield

        from protean import current_domain

        for _, provider in current_domain.providers.items():
            provider._data_reset()

        current_domain.event_store.store._data_reset()


@pytest.fixture()
def register_user():
    """Register an account through the public operation and return its token."""
    from authentication import authenticator
    from authentication.user.user import Role

    def _register(email="reader@example.com", password="secret1", role=Role.CUSTOMER, first_name="Ada"):
        return authenticator.register(
            first_name=first_name,
            last_name="Lovelace",
            email=email,
            password=password,
            password_confirmation=password,
            role=role,
        )

    return _register
