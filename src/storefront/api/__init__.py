"""Storefront API package."""

from storefront.api.errors import register_error_handlers
from storefront.api.routes import (
    blog_router,
    cart_router,
    game_router,
    order_router,
    review_router,
    user_router,
    wishlist_router,
)

__all__ = [
    "blog_router",
    "cart_router",
    "game_router",
    "order_router",
    "register_error_handlers",
    "review_router",
    "user_router",
    "wishlist_router",
]
