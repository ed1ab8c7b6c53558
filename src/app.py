"""E-book store FastAPI application.

Multi-domain web server that processes commands synchronously via HTTP.
Each request is wrapped in the correct domain context based on URL prefix.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8080
"""

import os
from contextlib import asynccontextmanager

# PROTEAN_ENV selects the config overlay: "production" switches the
# providers to PostgreSQL. It mirrors ENV unless set explicitly.
os.environ.setdefault("PROTEAN_ENV", os.environ.get("ENV", "local"))

from authentication.domain import authentication  # noqa: E402
from catalog.domain import catalog  # noqa: E402
from fastapi import FastAPI, Request  # noqa: E402
from shop.domain import shop  # noqa: E402

from shared.config import get_settings  # noqa: E402
from shared.db import setup_db  # noqa: E402
from shared.http import install_middleware, register_exception_handlers  # noqa: E402
from shared.logging import get_logger  # noqa: E402

logger = get_logger(__name__)

authentication.init()
catalog.init()
shop.init()

API_PREFIX = "/api/v1"

# ---------------------------------------------------------------------------
# Route-to-domain mapping
# ---------------------------------------------------------------------------
_ROUTE_DOMAIN_MAP = {
    f"{API_PREFIX}/register": authentication,
    f"{API_PREFIX}/login": authentication,
    f"{API_PREFIX}/password-reset": authentication,
    f"{API_PREFIX}/books": catalog,
    f"{API_PREFIX}/presign-url": catalog,
    f"{API_PREFIX}/orders": shop,
    f"{API_PREFIX}/active-cart": shop,
    f"{API_PREFIX}/cart": shop,
    f"{API_PREFIX}/stripe": shop,
}


def _resolve_domain(path: str):
    """Return the domain for the given request path, or None."""
    for prefix, domain in _ROUTE_DOMAIN_MAP.items():
        if path.startswith(prefix):
            return domain
    return None


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    logger.info("Starting e-book store", environment=settings.env.value, address=settings.server_addr)
    for domain in (authentication, catalog, shop):
        setup_db(domain)

    yield

    from shop.cart import get_cart_repository

    close = getattr(get_cart_repository(), "close", None)
    if close is not None:
        close()
    logger.info("E-book store stopped")


# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="E-book Store API",
    description="Authentication, catalog and shop for digital books",
    lifespan=lifespan,
)

register_exception_handlers(app)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the correct Protean domain context for each request."""
    domain = _resolve_domain(request.url.path)
    if domain is not None:
        with domain.domain_context():
            response = await call_next(request)
        return response
    # No domain match: health check and docs
    return await call_next(request)


install_middleware(app)

# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from authentication.api.routes import router as authentication_router  # noqa: E402
from catalog.api.routes import router as catalog_router  # noqa: E402
from shop.api.routes import router as shop_router  # noqa: E402
from shop.api.routes import webhook_router  # noqa: E402

app.include_router(authentication_router, prefix=API_PREFIX)
app.include_router(catalog_router, prefix=API_PREFIX)
app.include_router(shop_router, prefix=API_PREFIX)
app.include_router(webhook_router, prefix=API_PREFIX)


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------
@app.get(f"{API_PREFIX}/healthcheck")
async def healthcheck():
    return {"status": "OK"}
