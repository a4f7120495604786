"""Query parameters shared by the product repositories."""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass
class ProductFilter:
    """Filter parameters for product search.

    Attributes:
        category_id: Filter by category ID.
        search: Case-insensitive text search in name, description and slug.
        brand: Case-insensitive brand substring.
        min_price: Minimum base price.
        max_price: Maximum base price.
    """

    category_id: str | None = None
    search: str | None = None
    brand: str | None = None
    min_price: float | None = None
    max_price: float | None = None


@dataclass
class PaginationParams:
    """Pagination parameters.

    Attributes:
        page: Page number (1-indexed).
        page_size: Items per page.
    """

    page: int = 1
    page_size: int = 10

    @property
    def offset(self) -> int:
        """Calculate offset from page number."""
        return (self.page - 1) * self.page_size

    @property
    def limit(self) -> int:
        """Get limit (alias for page_size)."""
        return self.page_size


@dataclass
class PaginatedResult(Generic[T]):
    """Paginated result container.

    Attributes:
        items: List of items.
        total: Total count.
        page: Current page.
        page_size: Items per page.
    """

    items: list[T]
    total: int
    page: int
    page_size: int

    @property
    def total_pages(self) -> int:
        """Calculate total pages."""
        return (self.total + self.page_size - 1) // self.page_size
