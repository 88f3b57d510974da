"""Storefront HTTP API package."""

from storefront.api.routes import (
    auth_router,
    cart_router,
    compatibility_router,
    order_router,
    product_router,
    routers,
    user_router,
)

__all__ = [
    "auth_router",
    "user_router",
    "product_router",
    "compatibility_router",
    "cart_router",
    "order_router",
    "routers",
]
