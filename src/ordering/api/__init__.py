"""Ordering domain API package."""

from ordering.api.errors import register_error_handlers
from ordering.api.routes import cart_router, invoice_router, order_router, shipping_router

__all__ = ["order_router", "invoice_router", "cart_router", "shipping_router", "register_error_handlers"]
