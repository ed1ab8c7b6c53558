"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Identifier, Integer

from shop.domain import shop


@shop.event(part_of="Order")
class OrderPlaced:
    """A cart was turned into an order awaiting payment."""

    __version__ = 1

    order_id: Identifier(required=True)
    user_id: Identifier(required=True)
    total_price: Integer(required=True)
    item_count: Integer(required=True)
    placed_at: DateTime(required=True)


@shop.event(part_of="Order")
class OrderPaid:
    __version__ = 1

    order_id: Identifier(required=True)
    user_id: Identifier(required=True)
    total_price: Integer(required=True)
    paid_at: DateTime(required=True)


@shop.event(part_of="Order")
class OrderCancelled:
    __version__ = 1

    order_id: Identifier(required=True)
    user_id: Identifier(required=True)
    cancelled_at: DateTime(required=True)
