"""Order placement: command and handler."""

import json

from protean import handle
from protean.fields import Identifier, Text
from protean.utils.globals import current_domain

from shop.domain import logger, shop
from shop.order.order import Order
from shop.payment import get_gateway


@shop.command(part_of="Order")
class PlaceOrder:
    order_id: Identifier(required=True)
    user_id: Identifier(required=True)
    items: Text(required=True)  # JSON: list of cart item dicts


@shop.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        order = Order.place(id=command.order_id, user_id=command.user_id, items=json.loads(command.items))

        intent = get_gateway().create_payment_intent(order)
        order.apply_payment_intent(intent.id, intent.client_secret, intent.status)

        current_domain.repository_for(Order).create(order)
        logger.info("Order placed", order_id=str(order.id), status=order.status, total=order.total_price)
        return str(order.id)
