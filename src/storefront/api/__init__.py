"""Storefront API package."""

from storefront.api.routes import (
    auth_router,
    cart_router,
    catalogue_router,
    order_router,
    product_router,
    review_router,
    wishlist_router,
)

routers = [
    auth_router,
    product_router,
    catalogue_router,
    review_router,
    wishlist_router,
    cart_router,
    order_router,
]

__all__ = ["routers"]
