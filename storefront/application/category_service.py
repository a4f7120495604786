"""Category application service.

Creates and reads categories and assembles the category tree.
"""

from dataclasses import dataclass, field
from typing import Protocol

import structlog

from storefront.domain.entities import Category
from storefront.domain.exceptions import (
    ConflictError,
    InvalidIdentifierError,
    InvalidInputError,
    NotFoundError,
)
from storefront.domain.value_objects import is_valid_id
from storefront.domain.variants import normalize_string

logger = structlog.get_logger()


class CategoryRepository(Protocol):
    async def save(self, category: Category) -> Category: ...

    async def get(self, category_id: str) -> Category | None: ...

    async def get_by_slug(self, slug: str) -> Category | None: ...

    async def list_all(self) -> list[Category]: ...


@dataclass
class CategoryNode:
    """A category with its subcategories."""

    category: Category
    children: list["CategoryNode"] = field(default_factory=list)


def build_category_tree(categories: list[Category]) -> list[CategoryNode]:
    """Arrange categories into a forest of parent/child nodes.

    Categories whose parent is missing are treated as roots. Siblings keep
    the order of the input list.

    Args:
        categories: Categories to arrange.

    Returns:
        Root nodes.
    """
    nodes = {category.id: CategoryNode(category) for category in categories}
    roots: list[CategoryNode] = []
    for category in categories:
        node = nodes[category.id]
        parent = nodes.get(category.parent_id) if category.parent_id else None
        if parent is None:
            roots.append(node)
        else:
            parent.children.append(node)
    return roots


class CategoryService:
    """Application service for the category hierarchy."""

    def __init__(
        self,
        categories: CategoryRepository,
        request_id: str | None = None,
    ) -> None:
        """Initialize service.

        Args:
            categories: Category repository.
            request_id: Request ID for correlation.
        """
        self.categories = categories
        self.request_id = request_id

    async def create_category(
        self,
        name: str,
        slug: str,
        description: str | None = None,
        parent_id: str | None = None,
    ) -> Category:
        """Create a category or subcategory.

        Args:
            name: Display name.
            slug: URL slug; trimmed and lowercased.
            description: Optional description.
            parent_id: Parent category for a subcategory.

        Returns:
            The created category.

        Raises:
            InvalidInputError: If name or slug is blank.
            ConflictError: If the slug is taken.
            InvalidIdentifierError: If parent_id is malformed.
            NotFoundError: If the parent category does not exist.
        """
        if not name or not name.strip():
            raise InvalidInputError("Category name is required")
        if not slug or not slug.strip():
            raise InvalidInputError("Category slug is required")

        normalized_slug = slug.strip().lower()
        if await self.categories.get_by_slug(normalized_slug) is not None:
            raise ConflictError(
                "Category with this slug already exists",
                details={"slug": normalized_slug},
            )

        if parent_id:
            if not is_valid_id(parent_id):
                raise InvalidIdentifierError("parent category", parent_id)
            if await self.categories.get(parent_id) is None:
                raise NotFoundError("Parent category", parent_id)

        category = Category.create(
            name=name.strip(),
            slug=normalized_slug,
            description=normalize_string(description),
            parent_id=parent_id or None,
        )
        await self.categories.save(category)

        logger.info(
            "Category created",
            category_id=category.id,
            slug=category.slug,
            parent_id=category.parent_id,
            request_id=self.request_id,
        )
        return category

    async def list_categories(self) -> list[Category]:
        """List all categories sorted by name."""
        return await self.categories.list_all()

    async def get_category(self, category_id: str) -> Category:
        """Get a category by ID.

        Raises:
            InvalidIdentifierError: If the id is malformed.
            NotFoundError: If no such category exists.
        """
        if not is_valid_id(category_id):
            raise InvalidIdentifierError("category", category_id)

        category = await self.categories.get(category_id)
        if category is None:
            raise NotFoundError("Category", category_id)
        return category

    async def get_tree(self) -> list[CategoryNode]:
        """Get the category hierarchy, siblings sorted by name."""
        return build_category_tree(await self.categories.list_all())
