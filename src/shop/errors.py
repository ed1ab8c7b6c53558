"""Errors raised by cart, order and download operations."""

from shared.errors import DuplicateKey, EntityNotFound, Forbidden, PaymentRequired


class ItemAlreadyInCart(DuplicateKey):
    def __init__(self) -> None:
        super().__init__("item", "item already in cart")


class ItemNotFoundInCart(EntityNotFound):
    def __init__(self) -> None:
        super().__init__("item", "item not found in cart")


class ItemNotFoundInOrder(EntityNotFound):
    def __init__(self) -> None:
        super().__init__("item", "item not found in order")


class OrderNotCompleted(PaymentRequired):
    message = "only books from completed orders can be downloaded"


class ForbiddenOrderAccess(Forbidden):
    message = "the access to this order is restricted to allowed users"
