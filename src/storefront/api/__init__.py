"""Storefront HTTP API package."""

from storefront.api.routes import auth_router, order_router

__all__ = ["order_router", "auth_router"]
