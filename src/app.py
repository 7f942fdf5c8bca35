"""Order Management FastAPI application.

Multi-domain web server that processes commands synchronously via HTTP.
Each request is wrapped in the correct domain context based on URL prefix.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

import time
import uuid

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from customers.domain import customers
from logstore.domain import logstore
from orders.directory import set_customer_directory, set_product_catalog
from orders.directory.inprocess_adapter import InProcessCustomerDirectory, InProcessProductCatalog
from orders.domain import orders
from products.domain import products
from shared.config import get_settings
from shared.errors import register_error_handlers
from shared.logging import add_context, clear_context, configure_logging

logger = structlog.get_logger(__name__)

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# PROTEAN_ENV controls which config overlay is applied:
#   - "test"/unset → memory providers, sync event processing
#   - "production" → PostgreSQL + Redis, async processing via the Engine
_DOMAINS = (customers, orders, products, logstore)

for _domain in _DOMAINS:
    _domain.init()

settings = get_settings()
configure_logging("api", version=settings.app_version, log_dir=settings.log_dir)

# Without service URLs the Order service reads its neighbours in-process
if not settings.customer_service_url:
    set_customer_directory(InProcessCustomerDirectory(customers))
if not settings.product_service_url:
    set_product_catalog(InProcessProductCatalog(products))

# ---------------------------------------------------------------------------
# Route-to-domain mapping
# ---------------------------------------------------------------------------
_ROUTE_DOMAIN_MAP = {
    "/api/customers": customers,
    "/api/orders": orders,
    "/api/products": products,
    "/api/logs": logstore,
}


def _resolve_domain(path: str):
    """Return the domain for the given request path, or None."""
    for prefix, domain in _ROUTE_DOMAIN_MAP.items():
        if path.startswith(prefix):
            return domain
    return None


# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Order Management API",
    description="Customer, Order, Product and Logging services",
    version=settings.app_version,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the request's domain context and bind its logging context."""
    request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
    clear_context()
    add_context(request_id=request_id, method=request.method, path=request.url.path)

    started = time.perf_counter()
    domain = _resolve_domain(request.url.path)
    if domain is not None:
        with domain.domain_context():
            response = await call_next(request)
    else:
        # No domain match: health check, docs
        response = await call_next(request)

    response.headers["X-Request-ID"] = request_id
    logger.info(
        "Request completed",
        status_code=response.status_code,
        duration_ms=round((time.perf_counter() - started) * 1000, 2),
    )
    return response


register_error_handlers(app)

# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from customers.api import router as customers_router  # noqa: E402
from logstore.api import router as logs_router  # noqa: E402
from orders.api import router as orders_router  # noqa: E402
from products.api import router as products_router  # noqa: E402

app.include_router(customers_router)
app.include_router(orders_router)
app.include_router(products_router)
app.include_router(logs_router)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(
        content={
            "status": "ok",
            "version": settings.app_version,
            "domains": {domain.name: {"name": domain.name} for domain in _DOMAINS},
        }
    )
