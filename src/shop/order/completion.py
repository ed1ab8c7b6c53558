"""Order completion, triggered by the payment provider's webhook."""

from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from shop.domain import logger, shop
from shop.order.order import Order


@shop.command(part_of="Order")
class CompleteOrder:
    order_id: Identifier(required=True)


@shop.command_handler(part_of=Order)
class CompleteOrderHandler:
    @handle(CompleteOrder)
    def complete_order(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.find_by_id(command.order_id)
        if order.complete():
            repo.update(order)
            logger.info("Order completed", order_id=command.order_id)
        else:
            logger.info("Order already completed", order_id=command.order_id)
