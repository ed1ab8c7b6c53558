"""Tests for placing, finding and completing orders."""

import pytest
from protean import current_domain
from protean.exceptions import ValidationError
from shared.errors import EntityNotFound
from shop import shop as shop_service
from shop.cart import get_cart_repository
from shop.errors import ForbiddenOrderAccess
from shop.order.order import Order
from shop.payment import get_gateway
from shop.payment.fake_adapter import PaymentProviderUnavailable
from shop.shop import SearchOrders


def _place_order(as_user, user_id="user-1", books=("book-1",)):
    with as_user(user_id):
        for book_id in books:
            shop_service.add_item_to_cart(book_id)
        return shop_service.create_order()


class TestCreateOrder:
    def test_order_from_cart(self, as_user):
        order = _place_order(as_user, books=("book-1", "book-2"))

        assert order.status == "PENDING"
        assert order.user_id == "user-1"
        assert order.total == 3499
        assert [item.id for item in order.items] == ["book-1", "book-2"]
        assert order.payment_intent_id.startswith("pi_fake_")
        assert order.client_secret.endswith("_secret")

    def test_cart_is_deleted(self, as_user):
        _place_order(as_user)

        with pytest.raises(EntityNotFound):
            get_cart_repository().find_by_user_id("user-1")

    def test_intent_carries_order_metadata(self, as_user):
        order = _place_order(as_user)

        call = get_gateway().calls[-1]
        assert call["amount"] == 1999
        assert call["metadata"] == {"orderID": order.id, "userID": "user-1"}
        assert call["idempotency_key"] == order.id

    def test_succeeded_intent_pays_the_order(self, as_user):
        get_gateway().configure(intent_status="succeeded")
        assert _place_order(as_user).status == "PAID"

    def test_without_cart(self, as_user):
        with as_user("user-1"):
            with pytest.raises(EntityNotFound) as exc_info:
                shop_service.create_order()
        assert exc_info.value.entity == "cart"

    def test_empty_cart(self, as_user):
        with as_user("user-1"):
            shop_service.add_item_to_cart("book-1")
            shop_service.remove_item_from_cart("book-1")
            with pytest.raises(ValidationError):
                shop_service.create_order()

    def test_payment_failure_keeps_cart_and_stores_nothing(self, as_user):
        get_gateway().configure(should_fail=True)

        with as_user("user-1"):
            shop_service.add_item_to_cart("book-1")
            with pytest.raises(PaymentProviderUnavailable) as exc_info:
                shop_service.create_order()

        assert "(CreateOrder) failed placing order" in exc_info.value.__notes__
        assert get_cart_repository().find_by_user_id("user-1").items
        with as_user("admin-1", admin=True):
            assert shop_service.find_orders(SearchOrders()).total_items == 0


class TestFindOrders:
    def test_customers_see_their_own_orders(self, as_user):
        _place_order(as_user, "user-1")
        _place_order(as_user, "user-2")

        with as_user("user-1"):
            result = shop_service.find_orders(SearchOrders())

        assert result.total_items == 1
        assert result.results[0].user_id == "user-1"

    def test_admins_see_every_order(self, as_user):
        _place_order(as_user, "user-1")
        _place_order(as_user, "user-2")

        with as_user("admin-1", admin=True):
            result = shop_service.find_orders(SearchOrders())

        assert result.total_items == 2
        assert result.per_page == 15

    def test_filter_by_status(self, as_user):
        paid = _place_order(as_user, "user-1")
        _place_order(as_user, "user-2")
        with as_user("admin-1", admin=True):
            shop_service.complete_order(paid.id)
            result = shop_service.find_orders(SearchOrders(status="PAID"))

        assert [order.id for order in result.results] == [paid.id]


class TestFindOrderByID:
    def test_owner(self, as_user):
        order = _place_order(as_user, "user-1")
        with as_user("user-1"):
            assert shop_service.find_order_by_id(order.id).id == order.id

    def test_admin(self, as_user):
        order = _place_order(as_user, "user-1")
        with as_user("admin-1", admin=True):
            assert shop_service.find_order_by_id(order.id).id == order.id

    def test_other_customer(self, as_user):
        order = _place_order(as_user, "user-1")
        with as_user("user-2"):
            with pytest.raises(ForbiddenOrderAccess) as exc_info:
                shop_service.find_order_by_id(order.id)
        assert exc_info.value.message == "the access to this order is restricted to allowed users"

    def test_missing(self, as_user):
        with as_user("user-1"):
            with pytest.raises(EntityNotFound) as exc_info:
                shop_service.find_order_by_id("missing")
        assert exc_info.value.entity == "order"


class TestCompleteOrder:
    def test_pending_becomes_paid(self, as_user):
        order = _place_order(as_user)

        shop_service.complete_order(order.id)

        assert current_domain.repository_for(Order).find_by_id(order.id).completed

    def test_completing_twice(self, as_user):
        order = _place_order(as_user)
        shop_service.complete_order(order.id)
        shop_service.complete_order(order.id)

        assert current_domain.repository_for(Order).find_by_id(order.id).status == "PAID"

    def test_cancelled_order(self, as_user):
        get_gateway().configure(intent_status="canceled")
        order = _place_order(as_user)
        assert order.status == "CANCELLED"

        with pytest.raises(ValidationError):
            shop_service.complete_order(order.id)

    def test_unknown_order(self):
        with pytest.raises(EntityNotFound):
            shop_service.complete_order("missing")
