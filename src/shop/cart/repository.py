"""Cart repository port."""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager

from shop.cart.cart import Cart


class CartRepository(ABC):
    """Carts are stored under their owner's user id and expire after ``ttl_seconds``."""

    @abstractmethod
    def find_by_user_id(self, user_id: str) -> Cart:
        """Return the user's cart or raise ``EntityNotFound("cart")``."""
        ...

    @abstractmethod
    def save(self, cart: Cart) -> None:
        """Store ``cart``, refreshing its expiry."""
        ...

    @abstractmethod
    def delete_by_user_id(self, user_id: str) -> None: ...

    @abstractmethod
    def lock(self, user_id: str) -> AbstractContextManager:
        """Serialize read-modify-write cycles on one user's cart."""
        ...
