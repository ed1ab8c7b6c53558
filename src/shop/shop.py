"""Shop operations: the active cart, orders and downloads.

Every operation acts on behalf of the caller bound in the request context.
Orders are visible to their owner and to admins only.
"""

import json
from dataclasses import dataclass
from uuid import uuid4

from protean.utils.globals import current_domain

from shared.context import current_context
from shared.errors import EntityNotFound, annotate
from shared.query import DEFAULT_PAGE, ComparisonOperator, Page, Query
from shop.cart import get_cart_repository
from shop.cart.cart import Cart, CartItem
from shop.catalog_gateway import get_catalog_gateway
from shop.domain import logger
from shop.errors import ForbiddenOrderAccess, ItemNotFoundInOrder, OrderNotCompleted
from shop.order.completion import CompleteOrder
from shop.order.order import Order
from shop.order.placement import PlaceOrder
from shop.responses import CartResponse, DownloadResponse, OrderResponse, PaginatedOrdersResponse


@dataclass(frozen=True)
class SearchOrders:
    status: str | None = None
    page: int | None = None
    per_page: int | None = None

    def to_query(self) -> Query:
        query = Query()
        if self.status:
            query.and_("status", ComparisonOperator.EQUAL, self.status)
        return query

    def to_page(self) -> Page:
        return Page(
            number=self.page if self.page and self.page > 0 else DEFAULT_PAGE.number,
            size=self.per_page if self.per_page and self.per_page > 0 else DEFAULT_PAGE.size,
        )


def _orders():
    return current_domain.repository_for(Order)


def _require_order_access(order: Order, operation: str) -> None:
    context = current_context()
    if not context.admin and str(order.user_id) != context.user_id:
        error = ForbiddenOrderAccess()
        error.add_note(f"({operation}) failed validating access conditions")
        raise error


def get_cart() -> CartResponse:
    user_id = current_context().user_id
    with annotate(f"(GetCart) failed finding cart of user {user_id}"):
        cart = get_cart_repository().find_by_user_id(user_id)
    return CartResponse.from_cart(cart)


def add_item_to_cart(item_id: str) -> CartResponse:
    user_id = current_context().user_id
    logger.info("Adding item to cart", item_id=item_id)

    with annotate(f"(AddItemToCart) failed finding book {item_id}"):
        book = get_catalog_gateway().find_book(item_id)

    carts = get_cart_repository()
    with carts.lock(user_id):
        try:
            cart = carts.find_by_user_id(user_id)
        except EntityNotFound:
            cart = Cart.new(user_id)

        with annotate("(AddItemToCart) failed adding item"):
            cart.add_item(CartItem(id=book.id, name=book.title, price=book.price, preview_image_id=book.main_image_id))

        with annotate("(AddItemToCart) failed saving cart"):
            carts.save(cart)

    return CartResponse.from_cart(cart)


def remove_item_from_cart(item_id: str) -> CartResponse:
    user_id = current_context().user_id
    logger.info("Removing item from cart", item_id=item_id)

    carts = get_cart_repository()
    with carts.lock(user_id):
        with annotate(f"(RemoveItemFromCart) failed finding cart of user {user_id}"):
            cart = carts.find_by_user_id(user_id)

        with annotate("(RemoveItemFromCart) failed removing item"):
            cart.remove_item(item_id)

        with annotate("(RemoveItemFromCart) failed saving cart"):
            carts.save(cart)

    return CartResponse.from_cart(cart)


def create_order() -> OrderResponse:
    """Turn the caller's cart into a PENDING order with a payment intent.

    The cart is only deleted once the order is stored.
    """
    user_id = current_context().user_id
    order_id = str(uuid4())
    logger.info("Creating order", order_id=order_id)

    carts = get_cart_repository()
    with carts.lock(user_id):
        with annotate(f"(CreateOrder) failed finding cart of user {user_id}"):
            cart = carts.find_by_user_id(user_id)

        items = [
            {"id": item.id, "name": item.name, "price": item.price, "preview_image_id": item.preview_image_id}
            for item in cart.items
        ]
        with annotate("(CreateOrder) failed placing order"):
            current_domain.process(
                PlaceOrder(order_id=order_id, user_id=user_id, items=json.dumps(items)),
                asynchronous=False,
            )

        with annotate("(CreateOrder) failed deleting cart"):
            carts.delete_by_user_id(user_id)

    return find_order_by_id(order_id)


def find_orders(search: SearchOrders) -> PaginatedOrdersResponse:
    logger.info("Finding orders", search=search)

    context = current_context()
    query = search.to_query()
    if not context.admin:
        query.and_("user_id", ComparisonOperator.EQUAL, context.user_id)

    with annotate("(FindOrders) failed finding orders"):
        orders = _orders().find_by_query(query, search.to_page())

    return PaginatedOrdersResponse.build(
        [OrderResponse.from_order(order) for order in orders.items],
        limit=orders.limit,
        offset=orders.offset,
        total=orders.total,
    )


def find_order_by_id(order_id: str) -> OrderResponse:
    with annotate(f"(FindOrderByID) failed finding order {order_id}"):
        order = _orders().find_by_id(order_id)
    _require_order_access(order, "FindOrderByID")
    return OrderResponse.from_order(order)


def complete_order(order_id: str) -> None:
    logger.info("Completing order", order_id=order_id)
    with annotate(f"(CompleteOrder) failed completing order {order_id}"):
        current_domain.process(CompleteOrder(order_id=order_id), asynchronous=False)


def download_order_item_content(order_id: str, item_id: str) -> DownloadResponse:
    logger.info("Downloading order item", order_id=order_id, item_id=item_id)

    with annotate(f"(DownloadOrderItemContent) failed finding order {order_id}"):
        order = _orders().find_by_id(order_id)

    if not order.completed:
        raise OrderNotCompleted()
    if not order.has_item(item_id):
        raise ItemNotFoundInOrder()
    _require_order_access(order, "DownloadOrderItemContent")

    with annotate(f"(DownloadOrderItemContent) failed generating url for book {item_id}"):
        url = get_catalog_gateway().get_book_content_url(item_id)
    return DownloadResponse(url=url)
