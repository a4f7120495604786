"""Application layer module.

Contains application services (use cases) that orchestrate
domain logic and repositories.
"""

from storefront.application.auth_service import AuthResult, AuthService
from storefront.application.category_service import (
    CategoryNode,
    CategoryService,
    build_category_tree,
)
from storefront.application.product_service import ProductService

__all__ = [
    "AuthResult",
    "AuthService",
    "CategoryNode",
    "CategoryService",
    "build_category_tree",
    "ProductService",
]
