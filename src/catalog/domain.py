"""Domain initialization and configuration."""

from protean.domain import Domain

from shared.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

catalog = Domain(name="catalog")
