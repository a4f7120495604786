"""Catalog persistence.

Repositories for users, categories and products, in-memory and SQL,
plus the query parameter types they share.
"""

from storefront.catalog.memory import (
    InMemoryCategoryRepository,
    InMemoryProductRepository,
    InMemoryUserRepository,
    get_category_repository,
    get_product_repository,
    get_user_repository,
    reset_repositories,
)
from storefront.catalog.queries import PaginatedResult, PaginationParams, ProductFilter

__all__ = [
    # In-memory repositories
    "InMemoryCategoryRepository",
    "InMemoryProductRepository",
    "InMemoryUserRepository",
    "get_category_repository",
    "get_product_repository",
    "get_user_repository",
    "reset_repositories",
    # Queries
    "PaginatedResult",
    "PaginationParams",
    "ProductFilter",
]
