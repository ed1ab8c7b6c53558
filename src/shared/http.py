"""HTTP plumbing shared by every router: middleware chain and error translation.

Errors are rendered as ``{"message": str, "details": [str, ...]}``. Domain
exceptions are classified by type; anything unknown falls through to the
recovery middleware and becomes a 500.
"""

import json
import math
import threading
import time
from collections.abc import Callable
from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError, ValidationError
from starlette.datastructures import Headers
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from shared.context import request_context
from shared.errors import (
    DuplicateKey,
    EbookStoreError,
    EntityNotFound,
    Forbidden,
    PaymentRequired,
    Unauthorized,
    error_details,
)
from shared.logging import get_logger

logger = get_logger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"
MAX_BODY_SIZE = 2 * 1024 * 1024
VALIDATION_MESSAGE = "the payload is not valid"
INTERNAL_MESSAGE = "Some unexpected error happened"

# Most specific first
_STATUS_BY_KIND: tuple[tuple[type[EbookStoreError], int], ...] = (
    (Unauthorized, 401),
    (Forbidden, 403),
    (EntityNotFound, 404),
    (PaymentRequired, 402),
    (DuplicateKey, 409),
)


def error_response(status_code: int, message: str, details: list[str] | None = None, headers=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"message": message, "details": details or []},
        headers=headers,
    )


def status_for(exc: EbookStoreError) -> int:
    for kind, status_code in _STATUS_BY_KIND:
        if isinstance(exc, kind):
            return status_code
    return 500


def validation_details(messages: dict) -> list[str]:
    details = []
    for field_name, errors in messages.items():
        if isinstance(errors, str):
            errors = [errors]
        details.extend(f"{field_name}: {error}" for error in errors)
    return details


async def _domain_error_handler(request: Request, exc: EbookStoreError) -> JSONResponse:
    status_code = status_for(exc)
    logger.warning("Error processing the request", path=request.url.path, status=status_code, error=exc.message)
    if status_code == 500:
        return error_response(500, INTERNAL_MESSAGE, error_details(exc))
    return error_response(status_code, exc.message, error_details(exc))


async def _validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    details = validation_details(exc.messages)
    logger.warning("Invalid payload", path=request.url.path, details=details)
    return error_response(400, VALIDATION_MESSAGE, details)


async def _request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"] if part != "body")
        details.append(f"{location}: {error['msg']}" if location else error["msg"])
    logger.warning("Invalid request", path=request.url.path, details=details)
    return error_response(400, VALIDATION_MESSAGE, details)


async def _object_not_found_handler(request: Request, exc: ObjectNotFoundError) -> JSONResponse:
    logger.warning("Object not found", path=request.url.path, error=str(exc))
    return error_response(404, "the provided resource was not found", error_details(exc))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(EbookStoreError, _domain_error_handler)
    app.add_exception_handler(ValidationError, _validation_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_error_handler)
    app.add_exception_handler(ObjectNotFoundError, _object_not_found_handler)


class TokenBucketRateLimiter:
    """In-memory token bucket per client key.

    ``rate`` tokens are granted every ``period`` seconds, up to ``rate``
    tokens banked. Every ``sweep_every`` calls, buckets that have refilled to
    capacity are forgotten, since a missing bucket starts full.
    """

    def __init__(
        self,
        rate: int = 1000,
        period: float = 3600.0,
        clock: Callable[[], float] = time.monotonic,
        sweep_every: int = 1024,
    ) -> None:
        self.capacity = float(rate)
        self.refill_per_second = rate / period
        self._clock = clock
        self._buckets: dict[str, tuple[float, float]] = {}
        self._lock = threading.Lock()
        self._sweep_every = sweep_every
        self._calls = 0

    def allow(self, key: str) -> bool:
        now = self._clock()
        with self._lock:
            self._calls += 1
            if self._calls % self._sweep_every == 0:
                self._evict_full(now)
            tokens, last = self._buckets.get(key, (self.capacity, now))
            tokens = min(self.capacity, tokens + (now - last) * self.refill_per_second)
            if tokens < 1:
                self._buckets[key] = (tokens, now)
                return False
            self._buckets[key] = (tokens - 1, now)
            return True

    def retry_after(self, key: str) -> int:
        with self._lock:
            tokens, _ = self._buckets.get(key, (self.capacity, 0.0))
        return max(1, math.ceil((1 - tokens) / self.refill_per_second))

    def _evict_full(self, now: float) -> None:
        full = [
            key
            for key, (tokens, last) in self._buckets.items()
            if tokens + (now - last) * self.refill_per_second >= self.capacity
        ]
        for key in full:
            del self._buckets[key]


class BodySizeLimitMiddleware:
    """Reject request bodies over ``max_size`` bytes with a 413.

    A declared ``Content-Length`` is checked before anything is read. Bodies
    streamed without one are buffered up to the limit and replayed to the
    application as a single message.
    """

    def __init__(self, app: ASGIApp, max_size: int = MAX_BODY_SIZE) -> None:
        self.app = app
        self.max_size = max_size

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        content_length = Headers(scope=scope).get("content-length")
        if content_length is not None:
            if content_length.isdigit() and int(content_length) > self.max_size:
                await self._reject(scope, receive, send)
                return
            await self.app(scope, receive, send)
            return

        chunks: list[bytes] = []
        received = 0
        more_body = True
        while more_body:
            message = await receive()
            if message["type"] != "http.request":
                # Client disconnected mid-body
                return
            chunk = message.get("body", b"")
            received += len(chunk)
            if received > self.max_size:
                await self._reject(scope, receive, send)
                return
            chunks.append(chunk)
            more_body = message.get("more_body", False)

        body = b"".join(chunks)
        replayed = False

        async def replay() -> Message:
            nonlocal replayed
            if replayed:
                return await receive()
            replayed = True
            return {"type": "http.request", "body": body, "more_body": False}

        await self.app(scope, replay, send)

    async def _reject(self, scope: Scope, receive: Receive, send: Send) -> None:
        logger.warning("Request body too large", path=scope["path"], limit=self.max_size)
        response = error_response(413, "the request body is too large", [f"limit is {self.max_size} bytes"])
        await response(scope, receive, send)


def install_middleware(app: FastAPI, rate_limiter: TokenBucketRateLimiter | None = None) -> None:
    """Install the request pipeline.

    Starlette runs the last registered middleware first, so they are added
    innermost first: access log, rate limit, CORS, body size, recovery and
    finally correlation id.
    """
    rate_limiter = rate_limiter or TokenBucketRateLimiter()

    @app.middleware("http")
    async def access_log(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        logger.info(
            "Request handled",
            method=request.method,
            path=request.url.path,
            status=response.status_code,
            duration_ms=round((time.perf_counter() - started) * 1000, 2),
            client=request.client.host if request.client else None,
        )
        return response

    @app.middleware("http")
    async def rate_limit(request: Request, call_next):
        key = request.client.host if request.client else "unknown"
        if not rate_limiter.allow(key):
            logger.warning("Rate limit exceeded", client=key)
            return error_response(
                429,
                "too many requests",
                headers={"Retry-After": str(rate_limiter.retry_after(key))},
            )
        return await call_next(request)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[CORRELATION_HEADER],
    )

    app.add_middleware(BodySizeLimitMiddleware, max_size=MAX_BODY_SIZE)

    @app.middleware("http")
    async def recover(request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as exc:
            logger.exception("Unhandled error processing the request", path=request.url.path)
            return error_response(500, INTERNAL_MESSAGE, error_details(exc))

    @app.middleware("http")
    async def correlation_id(request: Request, call_next):
        request_id = request.headers.get(CORRELATION_HEADER) or str(uuid4())
        with request_context(request_id=request_id):
            response = await call_next(request)
        response.headers[CORRELATION_HEADER] = request_id
        return response


async def raw_body(request: Request) -> bytes:
    """Dependency reading the whole body on the event loop for sync endpoints."""
    return await request.body()


def parse_json_object(body: bytes) -> dict:
    """Parse ``body`` as a JSON object, raising ``ValidationError`` otherwise."""
    try:
        payload = json.loads(body)
    except ValueError:
        raise ValidationError({"body": ["invalid request body. check the documentation"]}) from None
    if not isinstance(payload, dict):
        raise ValidationError({"body": ["the request body must be a JSON object"]})
    return payload
