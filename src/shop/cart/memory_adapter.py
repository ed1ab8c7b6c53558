"""Process-local cart repository with the same expiry semantics as Redis."""

import threading
import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager

from shared.errors import EntityNotFound
from shop.cart.cart import Cart
from shop.cart.repository import CartRepository


class InMemoryCartRepository(CartRepository):
    def __init__(self, ttl_seconds: int, clock: Callable[[], float] = time.monotonic) -> None:
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[str, tuple[str, float]] = {}
        # user id -> (lock, number of callers holding or waiting on it)
        self._locks: dict[str, tuple[threading.Lock, int]] = {}
        self._locks_guard = threading.Lock()

    def find_by_user_id(self, user_id: str) -> Cart:
        entry = self._entries.get(user_id)
        if entry is None or entry[1] <= self._clock():
            self._entries.pop(user_id, None)
            raise EntityNotFound("cart")
        return Cart.from_json(entry[0])

    def save(self, cart: Cart) -> None:
        self._entries[cart.user_id] = (cart.to_json(), self._clock() + self.ttl_seconds)

    def delete_by_user_id(self, user_id: str) -> None:
        self._entries.pop(user_id, None)

    @contextmanager
    def lock(self, user_id: str) -> Iterator[None]:
        """Per-user lock, dropped once its last holder or waiter leaves."""
        with self._locks_guard:
            lock, users = self._locks.get(user_id, (None, 0))
            lock = lock or threading.Lock()
            self._locks[user_id] = (lock, users + 1)
        try:
            with lock:
                yield
        finally:
            with self._locks_guard:
                users = self._locks[user_id][1] - 1
                if users:
                    self._locks[user_id] = (lock, users)
                else:
                    del self._locks[user_id]

    def clear(self) -> None:
        self._entries.clear()
