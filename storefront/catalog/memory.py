"""In-memory repositories.

Process-local stores used by the ``memory`` storage backend. They expose
the same async methods as the SQL repositories.
"""

from storefront.catalog.queries import PaginatedResult, PaginationParams, ProductFilter
from storefront.domain.entities import Category, Product, User


class InMemoryUserRepository:
    """In-memory repository for users."""

    def __init__(self) -> None:
        self._users: dict[str, User] = {}

    async def save(self, user: User) -> User:
        """Save a user."""
        self._users[user.id] = user
        return user

    async def get(self, user_id: str) -> User | None:
        """Get user by ID."""
        return self._users.get(user_id)

    async def get_by_email(self, email: str) -> User | None:
        """Get user by email."""
        for user in self._users.values():
            if user.email == email:
                return user
        return None


class InMemoryCategoryRepository:
    """In-memory repository for categories."""

    def __init__(self) -> None:
        self._categories: dict[str, Category] = {}

    async def save(self, category: Category) -> Category:
        """Save a category."""
        self._categories[category.id] = category
        return category

    async def get(self, category_id: str) -> Category | None:
        """Get category by ID."""
        return self._categories.get(category_id)

    async def get_by_slug(self, slug: str) -> Category | None:
        """Get category by slug."""
        for category in self._categories.values():
            if category.slug == slug:
                return category
        return None

    async def list_all(self) -> list[Category]:
        """List all categories sorted by name."""
        return sorted(self._categories.values(), key=lambda c: c.name)


class InMemoryProductRepository:
    """In-memory repository for products."""

    def __init__(self) -> None:
        self._products: dict[str, Product] = {}

    async def save(self, product: Product) -> Product:
        """Save a product."""
        self._products[product.id] = product
        return product

    async def get(self, product_id: str) -> Product | None:
        """Get product by ID."""
        return self._products.get(product_id)

    async def get_by_slug(self, slug: str) -> Product | None:
        """Get product by slug."""
        for product in self._products.values():
            if product.slug == slug:
                return product
        return None

    async def delete(self, product_id: str) -> bool:
        """Delete a product.

        Returns:
            True if a product was removed.
        """
        return self._products.pop(product_id, None) is not None

    async def search(
        self,
        filters: ProductFilter,
        pagination: PaginationParams,
    ) -> PaginatedResult[Product]:
        """Find products with filtering and pagination, newest first."""
        # newest insert first so equal timestamps keep that order
        products = list(reversed(self._products.values()))
        products = [p for p in products if _matches(p, filters)]
        products.sort(key=lambda p: p.created_at, reverse=True)

        start = pagination.offset
        end = start + pagination.limit
        return PaginatedResult(
            items=products[start:end],
            total=len(products),
            page=pagination.page,
            page_size=pagination.page_size,
        )


def _contains(haystack: str | None, needle: str) -> bool:
    return haystack is not None and needle.lower() in haystack.lower()


def _matches(product: Product, filters: ProductFilter) -> bool:
    if filters.category_id is not None and product.category_id != filters.category_id:
        return False
    if filters.brand and not _contains(product.brand, filters.brand):
        return False
    if filters.search and not any(
        _contains(text, filters.search)
        for text in (product.name, product.description, product.slug)
    ):
        return False
    if filters.min_price is not None and product.price < filters.min_price:
        return False
    if filters.max_price is not None and product.price > filters.max_price:
        return False
    return True


# Global repository instances
_user_repo: InMemoryUserRepository | None = None
_category_repo: InMemoryCategoryRepository | None = None
_product_repo: InMemoryProductRepository | None = None


def get_user_repository() -> InMemoryUserRepository:
    """Get user repository singleton."""
    global _user_repo
    if _user_repo is None:
        _user_repo = InMemoryUserRepository()
    return _user_repo


def get_category_repository() -> InMemoryCategoryRepository:
    """Get category repository singleton."""
    global _category_repo
    if _category_repo is None:
        _category_repo = InMemoryCategoryRepository()
    return _category_repo


def get_product_repository() -> InMemoryProductRepository:
    """Get product repository singleton."""
    global _product_repo
    if _product_repo is None:
        _product_repo = InMemoryProductRepository()
    return _product_repo


def reset_repositories() -> None:
    """Drop all in-memory data (for testing)."""
    global _user_repo, _category_repo, _product_repo
    _user_repo = None
    _category_repo = None
    _product_repo = None
