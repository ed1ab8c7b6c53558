"""Client-facing representations of carts and orders."""

from datetime import datetime

from shared.responses import CamelModel, PaginatedResponse
from shop.cart.cart import Cart
from shop.order.order import Order


class ItemResponse(CamelModel):
    id: str
    name: str
    price: int
    preview_image_id: str = ""


class CartResponse(CamelModel):
    id: str
    items: list[ItemResponse]
    user_id: str
    total: int
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_cart(cls, cart: Cart) -> "CartResponse":
        return cls(
            id=cart.id,
            items=[
                ItemResponse(id=item.id, name=item.name, price=item.price, preview_image_id=item.preview_image_id)
                for item in cart.items
            ],
            user_id=cart.user_id,
            total=cart.total_price,
            created_at=cart.created_at,
            updated_at=cart.updated_at,
        )


class OrderResponse(CamelModel):
    id: str
    status: str
    total: int
    payment_intent_id: str | None = None
    client_secret: str | None = None
    items: list[ItemResponse]
    user_id: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_order(cls, order: Order) -> "OrderResponse":
        return cls(
            id=str(order.id),
            status=order.status,
            total=order.total_price,
            payment_intent_id=order.payment_intent_id,
            client_secret=order.client_secret,
            items=[
                ItemResponse(
                    id=str(item.item_id),
                    name=item.name,
                    price=item.price,
                    preview_image_id=item.preview_image_id or "",
                )
                for item in order.ordered_items
            ],
            user_id=str(order.user_id),
            created_at=order.created_at,
            updated_at=order.updated_at,
        )


class PaginatedOrdersResponse(PaginatedResponse[OrderResponse]):
    pass


class DownloadResponse(CamelModel):
    url: str
