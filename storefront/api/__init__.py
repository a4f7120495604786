"""API layer module.

Contains FastAPI routers and request/response schemas.
"""

from storefront.api.auth import router as auth_router
from storefront.api.categories import router as categories_router
from storefront.api.health import router as health_router
from storefront.api.products import router as products_router
from storefront.api.users import router as users_router

__all__ = [
    "auth_router",
    "categories_router",
    "health_router",
    "products_router",
    "users_router",
]
