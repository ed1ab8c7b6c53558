"""Repository for the Order aggregate."""

from protean.exceptions import ObjectNotFoundError

from shared.errors import EntityNotFound
from shared.persistence import QueryableRepository
from shop.domain import shop
from shop.order.order import Order


@shop.repository(part_of=Order)
class OrderRepository(QueryableRepository):
    def find_by_id(self, order_id: str) -> Order:
        try:
            return self.get(order_id)
        except ObjectNotFoundError:
            raise EntityNotFound("order") from None

    def create(self, order: Order) -> Order:
        return self.add(order)

    def update(self, order: Order) -> Order:
        return self.add(order)
