"""FastAPI endpoints for the shop domain.

``router`` requires a bearer token; ``webhook_router`` is called by the
payment provider and authenticates through the webhook signature instead.
"""

from fastapi import APIRouter, Depends, Header, Query, Response
from protean.exceptions import ValidationError

from authentication.api.dependencies import require_identity
from shared.http import raw_body
from shop import shop as shop_service
from shop.domain import logger
from shop.payment import get_gateway
from shop.responses import CartResponse, DownloadResponse, OrderResponse, PaginatedOrdersResponse

PAYMENT_SUCCEEDED = "payment_intent.succeeded"

router = APIRouter(tags=["shop"], dependencies=[Depends(require_identity)])
webhook_router = APIRouter(tags=["webhooks"])


@router.get("/active-cart", response_model=CartResponse)
def get_active_cart() -> CartResponse:
    return shop_service.get_cart()


@router.post("/cart/items/{item_id}", response_model=CartResponse)
def add_item_to_cart(item_id: str) -> CartResponse:
    return shop_service.add_item_to_cart(item_id)


@router.delete("/cart/items/{item_id}", response_model=CartResponse)
def remove_item_from_cart(item_id: str) -> CartResponse:
    return shop_service.remove_item_from_cart(item_id)


@router.get("/orders", response_model=PaginatedOrdersResponse)
def get_orders(
    status: str | None = None,
    page: int | None = Query(None, ge=1),
    per_page: int | None = Query(None, alias="perPage", ge=1),
) -> PaginatedOrdersResponse:
    return shop_service.find_orders(shop_service.SearchOrders(status=status, page=page, per_page=per_page))


@router.post("/orders", status_code=201, response_model=OrderResponse)
def create_order() -> OrderResponse:
    return shop_service.create_order()


@router.get("/orders/{order_id}", response_model=OrderResponse)
def get_order(order_id: str) -> OrderResponse:
    return shop_service.find_order_by_id(order_id)


@router.get("/orders/{order_id}/items/{item_id}/download", response_model=DownloadResponse)
def download_order_item(order_id: str, item_id: str) -> DownloadResponse:
    return shop_service.download_order_item_content(order_id, item_id)


def _order_id(event: dict) -> str:
    value = event
    for key in ("data", "object", "metadata", "orderID"):
        value = value.get(key) if isinstance(value, dict) else None
    if not value or not isinstance(value, str):
        raise ValidationError({"data.object.metadata.orderID": ["is required"]})
    return value


@webhook_router.post("/stripe/webhook")
def stripe_webhook(body: bytes = Depends(raw_body), stripe_signature: str | None = Header(None)) -> Response:
    event = get_gateway().verify_webhook(body, stripe_signature)
    event_type = event.get("type")
    logger.info("Payment webhook received", event_type=event_type, event_id=event.get("id"))

    if event_type == PAYMENT_SUCCEEDED:
        shop_service.complete_order(_order_id(event))

    return Response(status_code=200)
