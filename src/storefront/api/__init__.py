"""Storefront HTTP API package."""

from storefront.api.errors import register_error_handlers
from storefront.api.orders import order_router
from storefront.api.products import product_router

__all__ = ["product_router", "order_router", "register_error_handlers"]
