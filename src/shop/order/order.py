"""Order aggregate: a paid-for (or to be paid) copy of a cart.

State Machine:
    PENDING → PAID
    PENDING → CANCELLED

Completing an already PAID order is a no-op: the payment provider retries
webhooks until it gets a 2xx answer.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, HasMany, Identifier, Integer, String

from shop.domain import shop


class OrderStatus(Enum):
    PENDING = "PENDING"
    PAID = "PAID"
    CANCELLED = "CANCELLED"


_VALID_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.PAID, OrderStatus.CANCELLED},
    OrderStatus.PAID: set(),  # Terminal
    OrderStatus.CANCELLED: set(),  # Terminal
}

# Payment intent status (as reported by the payment provider) → order status
INTENT_STATUS_TO_ORDER_STATUS = {
    "canceled": OrderStatus.CANCELLED,
    "processing": OrderStatus.PENDING,
    "requires_action": OrderStatus.PENDING,
    "requires_capture": OrderStatus.PENDING,
    "requires_confirmation": OrderStatus.PENDING,
    "requires_payment_method": OrderStatus.PENDING,
    "succeeded": OrderStatus.PAID,
}


@shop.entity(part_of="Order", schema_name="order_items")
class OrderItem:
    """A book bought within an order.

    ``item_id`` is the id of the book; the row itself has its own id so the
    same book can appear in many orders.
    """

    item_id = Identifier(required=True)
    name = String(required=True, max_length=100)
    price = Integer(required=True, min_value=0)
    preview_image_id = String(max_length=100)
    position = Integer(default=0, min_value=0)


@shop.aggregate(schema_name="orders")
class Order:
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    payment_intent_id = String(max_length=255)
    client_secret = String(max_length=255)
    items = HasMany(OrderItem)
    user_id = Identifier(required=True)
    created_at = DateTime()
    updated_at = DateTime()

    @property
    def ordered_items(self) -> list[OrderItem]:
        return sorted(self.items, key=lambda item: item.position or 0)

    @property
    def total_price(self) -> int:
        return sum(item.price for item in self.items)

    @property
    def completed(self) -> bool:
        return self.status == OrderStatus.PAID.value

    def has_item(self, item_id: str) -> bool:
        return any(str(item.item_id) == item_id for item in self.items)

    @classmethod
    def place(cls, id, user_id, items):
        """Create a PENDING order from cart items (dicts with id, name, price, preview_image_id)."""
        from shop.order.events import OrderPlaced

        if not items:
            raise ValidationError({"items": ["An order must contain at least one item"]})

        now = datetime.now(UTC)
        order = cls(
            id=id,
            user_id=user_id,
            status=OrderStatus.PENDING.value,
            items=[
                OrderItem(
                    item_id=item["id"],
                    name=item["name"],
                    price=item["price"],
                    preview_image_id=item.get("preview_image_id") or "",
                    position=position,
                )
                for position, item in enumerate(items)
            ],
            created_at=now,
            updated_at=now,
        )
        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                user_id=str(order.user_id),
                total_price=order.total_price,
                item_count=len(items),
                placed_at=now,
            )
        )
        return order

    def apply_payment_intent(self, intent_id, client_secret, intent_status):
        """Record the payment intent created for this order and follow its status."""
        target = INTENT_STATUS_TO_ORDER_STATUS.get(intent_status)
        if target is None:
            raise ValidationError({"payment_intent": [f"Unknown payment intent status {intent_status!r}"]})

        self.payment_intent_id = intent_id
        self.client_secret = client_secret
        self.updated_at = datetime.now(UTC)

        if target is OrderStatus.PAID:
            self.complete()
        elif target is OrderStatus.CANCELLED:
            self.cancel()

    def complete(self) -> bool:
        """Mark the order as paid. Returns False when it already was."""
        from shop.order.events import OrderPaid

        if self.completed:
            return False

        self._assert_can_transition(OrderStatus.PAID)
        now = datetime.now(UTC)
        self.status = OrderStatus.PAID.value
        self.updated_at = now
        self.raise_(
            OrderPaid(
                order_id=str(self.id),
                user_id=str(self.user_id),
                total_price=self.total_price,
                paid_at=now,
            )
        )
        return True

    def cancel(self):
        from shop.order.events import OrderCancelled

        self._assert_can_transition(OrderStatus.CANCELLED)
        now = datetime.now(UTC)
        self.status = OrderStatus.CANCELLED.value
        self.updated_at = now
        self.raise_(OrderCancelled(order_id=str(self.id), user_id=str(self.user_id), cancelled_at=now))

    def _assert_can_transition(self, target_status):
        current = OrderStatus(self.status)
        if target_status not in _VALID_TRANSITIONS.get(current, set()):
            raise ValidationError({"status": [f"Cannot transition from {current.value} to {target_status.value}"]})
