"""Redis-backed cart repository."""

import redis

from shared.errors import EntityNotFound
from shop.cart.cart import Cart
from shop.cart.repository import CartRepository
from shop.domain import logger

TIMEOUT_SECONDS = 10
LOCK_TIMEOUT_SECONDS = 10


def client_from_address(address: str, password: str | None = None, db: int = 0) -> redis.Redis:
    host, _, port = address.rpartition(":")
    return redis.Redis(
        host=host or "localhost",
        port=int(port or 6379),
        password=password,
        db=db,
        socket_timeout=TIMEOUT_SECONDS,
        socket_connect_timeout=TIMEOUT_SECONDS,
    )


class RedisCartRepository(CartRepository):
    def __init__(self, client: redis.Redis, ttl_seconds: int) -> None:
        self._client = client
        self.ttl_seconds = ttl_seconds

    def find_by_user_id(self, user_id: str) -> Cart:
        payload = self._client.get(user_id)
        if payload is None:
            raise EntityNotFound("cart")
        return Cart.from_json(payload)

    def save(self, cart: Cart) -> None:
        logger.debug("Saving cart", cart_id=cart.id, items=len(cart.items))
        self._client.setex(cart.user_id, self.ttl_seconds, cart.to_json())

    def delete_by_user_id(self, user_id: str) -> None:
        self._client.delete(user_id)

    def lock(self, user_id: str):
        return self._client.lock(
            f"cart-lock:{user_id}",
            timeout=LOCK_TIMEOUT_SECONDS,
            blocking_timeout=LOCK_TIMEOUT_SECONDS,
        )

    def close(self) -> None:
        self._client.close()
