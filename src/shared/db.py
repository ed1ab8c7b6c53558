"""Schema management for domains bound to relational providers."""

from protean.domain import Domain
from sqlalchemy import create_engine

from shared.logging import get_logger

logger = get_logger(__name__)

RELATIONAL_PROVIDERS = ("sqlite", "postgresql")


def _relational_providers(domain: Domain):
    for _, provider in domain.providers.items():
        if provider.conn_info["provider"] in RELATIONAL_PROVIDERS:
            yield provider


def setup_db(domain: Domain):
    """Create the tables of every aggregate and entity of ``domain``."""
    with domain.domain_context():
        for provider in _relational_providers(domain):
            engine = create_engine(provider.conn_info["database_uri"])

            # Accessing the DAO registers the model with the provider's metadata
            for _, aggregate_record in domain.registry.aggregates.items():
                if aggregate_record.cls.meta_.provider == provider.name:
                    domain.repository_for(aggregate_record.cls)._dao  # noqa: B018

            for _, entity_record in domain.registry.entities.items():
                if entity_record.cls.meta_.provider == provider.name:
                    domain.repository_for(entity_record.cls)._dao  # noqa: B018

            provider._metadata.create_all(engine)
            engine.dispose()
            logger.info("Schema ready", domain=domain.name, provider=provider.name)


def drop_db(domain: Domain):
    """Drop the tables of ``domain``."""
    with domain.domain_context():
        for provider in _relational_providers(domain):
            engine = create_engine(provider.conn_info["database_uri"])
            provider._metadata.drop_all(engine)
            engine.dispose()
            logger.info("Schema dropped", domain=domain.name, provider=provider.name)
