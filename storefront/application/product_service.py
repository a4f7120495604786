"""Product application service.

Orchestrates product create/read/update/delete. Variant lists are checked
by the variant validator before any write and stored in normalized form.
"""

from typing import Any, Protocol

import structlog

from storefront.catalog.queries import PaginatedResult, PaginationParams, ProductFilter
from storefront.domain.entities import Category, Product
from storefront.domain.exceptions import (
    ConflictError,
    InvalidIdentifierError,
    InvalidInputError,
    NotFoundError,
)
from storefront.domain.value_objects import is_valid_id
from storefront.domain.variants import (
    VariantLike,
    normalize_string,
    normalize_variants,
    validate_variants,
)

logger = structlog.get_logger()


class ProductRepository(Protocol):
    async def save(self, product: Product) -> Product: ...

    async def get(self, product_id: str) -> Product | None: ...

    async def get_by_slug(self, slug: str) -> Product | None: ...

    async def delete(self, product_id: str) -> bool: ...

    async def search(
        self, filters: ProductFilter, pagination: PaginationParams
    ) -> PaginatedResult[Product]: ...


class CategoryLookup(Protocol):
    async def get(self, category_id: str) -> Category | None: ...


def _check_variants(variants: list[VariantLike] | None) -> None:
    validate_variants(variants).raise_for_error()


class ProductService:
    """Application service for the product catalog.

    Write order for create and update:
    1. Validate variants (when provided)
    2. Check the category reference
    3. Check slug uniqueness
    4. Normalize and persist
    """

    def __init__(
        self,
        products: ProductRepository,
        categories: CategoryLookup,
        request_id: str | None = None,
    ) -> None:
        """Initialize service.

        Args:
            products: Product repository.
            categories: Repository used to resolve category references.
            request_id: Request ID for correlation.
        """
        self.products = products
        self.categories = categories
        self.request_id = request_id

    async def _require_category(self, category_id: str) -> None:
        if not is_valid_id(category_id):
            raise InvalidIdentifierError("category", category_id)
        if await self.categories.get(category_id) is None:
            raise NotFoundError("Category", category_id)

    async def _require_free_slug(self, slug: str) -> None:
        if await self.products.get_by_slug(slug) is not None:
            raise ConflictError(
                "Product with this slug already exists",
                details={"slug": slug},
            )

    async def create_product(
        self,
        name: str,
        slug: str,
        price: float,
        category_id: str,
        description: str | None = None,
        images: list[str] | None = None,
        brand: str | None = None,
        ratings_average: float | None = None,
        ratings_count: int | None = None,
        variants: list[VariantLike] | None = None,
    ) -> Product:
        """Create a product.

        Args:
            name: Product name.
            slug: URL slug; trimmed and lowercased.
            price: Base price.
            category_id: Category the product belongs to.
            description: Optional description.
            images: Image URLs.
            brand: Optional brand.
            ratings_average: Initial average rating.
            ratings_count: Initial rating count.
            variants: Raw variants; validated, then stored normalized.

        Returns:
            The created product.

        Raises:
            InvalidInputError: If name or slug is blank.
            VariantValidationError: If the variants break a variant rule.
            InvalidIdentifierError: If category_id is malformed.
            NotFoundError: If the category does not exist.
            ConflictError: If the slug is taken.
        """
        if not name or not name.strip() or not slug or not slug.strip():
            raise InvalidInputError("Name, slug, price, and categoryId are required")

        if variants is not None:
            _check_variants(variants)

        await self._require_category(category_id)

        normalized_slug = slug.strip().lower()
        await self._require_free_slug(normalized_slug)

        product = Product.create(
            name=name.strip(),
            slug=normalized_slug,
            price=price,
            category_id=category_id,
            description=normalize_string(description),
            images=list(images or []),
            brand=normalize_string(brand),
            ratings_average=ratings_average or 0,
            ratings_count=ratings_count or 0,
            variants=normalize_variants(variants),
        )
        await self.products.save(product)

        logger.info(
            "Product created",
            product_id=product.id,
            slug=product.slug,
            variant_count=len(product.variants),
            request_id=self.request_id,
        )
        return product

    async def get_product(self, product_id: str) -> Product:
        """Get a product by ID.

        Raises:
            InvalidIdentifierError: If the id is malformed.
            NotFoundError: If no such product exists.
        """
        if not is_valid_id(product_id):
            raise InvalidIdentifierError("product", product_id)

        product = await self.products.get(product_id)
        if product is None:
            raise NotFoundError("Product", product_id)
        return product

    async def search_products(
        self,
        filters: ProductFilter,
        pagination: PaginationParams,
    ) -> PaginatedResult[Product]:
        """Search products with filters and pagination.

        Raises:
            InvalidIdentifierError: If the category filter is malformed.
        """
        if filters.category_id is not None:
            filters.category_id = filters.category_id.strip()
            if not is_valid_id(filters.category_id):
                raise InvalidIdentifierError("category", filters.category_id)

        return await self.products.search(filters, pagination)

    async def update_product(self, product_id: str, changes: dict[str, Any]) -> Product:
        """Apply a partial update to a product.

        Only keys present in ``changes`` are touched. A ``variants`` key
        replaces the whole variant list.

        Args:
            product_id: Product to update.
            changes: Field names and new values.

        Returns:
            The updated product.

        Raises:
            InvalidIdentifierError: If an id is malformed.
            InvalidInputError: If name or slug is sent blank.
            NotFoundError: If the product or new category does not exist.
            VariantValidationError: If the new variants break a variant rule.
            ConflictError: If the new slug is taken.
        """
        product = await self.get_product(product_id)

        for field_name, label in (("name", "Product name"), ("slug", "Product slug")):
            if field_name in changes:
                value = changes[field_name]
                if value is None or not value.strip():
                    raise InvalidInputError(f"{label} cannot be empty")

        if "variants" in changes and changes["variants"] is not None:
            _check_variants(changes["variants"])

        category_id = changes.get("category_id")
        if category_id:
            await self._require_category(category_id)

        slug = changes.get("slug")
        if slug and slug != product.slug:
            normalized_slug = slug.strip().lower()
            if normalized_slug != product.slug:
                await self._require_free_slug(normalized_slug)

        updates: dict[str, Any] = {}
        if changes.get("name"):
            updates["name"] = changes["name"].strip()
        if slug:
            updates["slug"] = slug.strip().lower()
        if "description" in changes:
            updates["description"] = normalize_string(changes["description"])
        if changes.get("images") is not None:
            updates["images"] = list(changes["images"])
        if changes.get("price") is not None:
            updates["price"] = changes["price"]
        if category_id:
            updates["category_id"] = category_id
        if "brand" in changes:
            updates["brand"] = normalize_string(changes["brand"])
        if changes.get("ratings_average") is not None:
            updates["ratings_average"] = changes["ratings_average"]
        if changes.get("ratings_count") is not None:
            updates["ratings_count"] = changes["ratings_count"]

        product.update(**updates)
        if "variants" in changes and changes["variants"] is not None:
            product.replace_variants(normalize_variants(changes["variants"]))

        await self.products.save(product)

        logger.info(
            "Product updated",
            product_id=product.id,
            fields=sorted(updates),
            variants_replaced="variants" in changes,
            request_id=self.request_id,
        )
        return product

    async def delete_product(self, product_id: str) -> None:
        """Delete a product.

        Raises:
            InvalidIdentifierError: If the id is malformed.
            NotFoundError: If no such product exists.
        """
        if not is_valid_id(product_id):
            raise InvalidIdentifierError("product", product_id)

        if not await self.products.delete(product_id):
            raise NotFoundError("Product", product_id)

        logger.info("Product deleted", product_id=product_id, request_id=self.request_id)
