"""ShopStream Ordering FastAPI application.

Web server for the order lifecycle: carts, order placement, status changes,
activity logs, invoices and shipping coverage. Commands are processed
synchronously; each request runs inside the ordering domain context.

Usage:
    uvicorn src.app:app --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
# PROTEAN_ENV controls which config overlay is applied:
#   - "test"       → event_processing = "sync"  (confirmation sent after commit)
#   - "production" → event_processing = "async" (confirmation sent by the Engine)
from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from ordering.domain import ordering  # noqa: E402
from ordering.utils.logging import add_context, clear_context, get_logger

ordering.init()

logger = get_logger(__name__)

_DOMAIN_PREFIXES = ("/orders", "/invoices", "/cart", "/shipping")


# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="ShopStream Ordering API",
    description="Order lifecycle: carts, orders, activity logs, invoices and shipping coverage",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the ordering domain context and bind request-scoped log context."""
    if not request.url.path.startswith(_DOMAIN_PREFIXES):
        # Health check, docs, etc.
        return await call_next(request)

    clear_context()
    add_context(request_id=request.headers.get("X-Request-Id") or uuid4().hex, path=request.url.path)
    with ordering.domain_context():
        response = await call_next(request)
    return response


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from ordering.api import (  # noqa: E402
    cart_router,
    invoice_router,
    order_router,
    register_error_handlers,
    shipping_router,
)

app.include_router(order_router)
app.include_router(invoice_router)
app.include_router(cart_router)
app.include_router(shipping_router)
register_error_handlers(app)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(content={"status": "ok", "domains": {"ordering": {"name": ordering.name}}})
