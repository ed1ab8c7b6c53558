"""Shopping cart kept in the cache.

A cart is not a durable aggregate: it lives under its owner's user id with a
TTL, so it is modelled as plain dataclasses serialized to JSON.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import uuid4

from shop.errors import ItemAlreadyInCart, ItemNotFoundInCart


def _now() -> datetime:
    return datetime.now(UTC)


@dataclass
class CartItem:
    """A purchasable line; ``id`` is the id of the book."""

    id: str
    name: str
    price: int
    preview_image_id: str = ""
    order_id: str = ""

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "price": self.price,
            "previewImageId": self.preview_image_id,
            "orderId": self.order_id,
        }

    @classmethod
    def from_dict(cls, data: dict) -> CartItem:
        return cls(
            id=data["id"],
            name=data["name"],
            price=int(data["price"]),
            preview_image_id=data.get("previewImageId") or "",
            order_id=data.get("orderId") or "",
        )


@dataclass
class Cart:
    id: str
    user_id: str
    items: list[CartItem] = field(default_factory=list)
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)

    @classmethod
    def new(cls, user_id: str) -> Cart:
        return cls(id=str(uuid4()), user_id=user_id)

    @property
    def total_price(self) -> int:
        return sum(item.price for item in self.items)

    def has_item(self, item_id: str) -> bool:
        return any(item.id == item_id for item in self.items)

    def add_item(self, item: CartItem) -> None:
        if self.has_item(item.id):
            raise ItemAlreadyInCart()
        self.items.append(item)
        self.updated_at = _now()

    def remove_item(self, item_id: str) -> None:
        remaining = [item for item in self.items if item.id != item_id]
        if len(remaining) == len(self.items):
            raise ItemNotFoundInCart()
        self.items = remaining
        self.updated_at = _now()

    def to_json(self) -> str:
        return json.dumps(
            {
                "id": self.id,
                "userId": self.user_id,
                "items": [item.to_dict() for item in self.items],
                "createdAt": self.created_at.isoformat(),
                "updatedAt": self.updated_at.isoformat(),
            }
        )

    @classmethod
    def from_json(cls, payload: str | bytes) -> Cart:
        data = json.loads(payload)
        return cls(
            id=data["id"],
            user_id=data["userId"],
            items=[CartItem.from_dict(item) for item in data.get("items", [])],
            created_at=datetime.fromisoformat(data["createdAt"]),
            updated_at=datetime.fromisoformat(data["updatedAt"]),
        )
