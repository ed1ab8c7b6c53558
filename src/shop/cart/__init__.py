"""Cart repository factory.

Provides get_cart_repository() / set_cart_repository() to swap implementations:
- InMemoryCartRepository when ENV=test
- RedisCartRepository otherwise
"""

from shared.config import get_settings
from shop.cart.repository import CartRepository

_current_repository: CartRepository | None = None


def get_cart_repository() -> CartRepository:
    global _current_repository
    if _current_repository is None:
        settings = get_settings()
        ttl_seconds = settings.redis_cart_ttl * 60
        if settings.testing:
            from shop.cart.memory_adapter import InMemoryCartRepository

            _current_repository = InMemoryCartRepository(ttl_seconds=ttl_seconds)
        else:
            from shop.cart.redis_adapter import RedisCartRepository, client_from_address

            client = client_from_address(settings.redis_addr, settings.redis_password, settings.redis_db)
            _current_repository = RedisCartRepository(client, ttl_seconds=ttl_seconds)
    return _current_repository


def set_cart_repository(repository: CartRepository) -> None:
    global _current_repository
    _current_repository = repository


def reset_cart_repository() -> None:
    global _current_repository
    _current_repository = None
