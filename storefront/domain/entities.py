"""Domain entities for the storefront.

Entities are domain objects with identity that persists across state changes.
This module contains the aggregates: User, Category and Product.
"""

from dataclasses import dataclass, field
from typing import Any

from storefront.domain.base import AggregateRoot, Entity
from storefront.domain.value_objects import Address, CartEntry, Role, new_id
from storefront.domain.variants import NormalizedVariant


# ============================================================================
# User Aggregate Root
# ============================================================================


@dataclass(kw_only=True, eq=False)
class User(AggregateRoot[str]):
    """A registered customer or administrator.

    Attributes:
        id: User identifier.
        first_name: Given name.
        last_name: Family name.
        email: Login email, unique across users.
        password_hash: Opaque credential produced by the password hasher.
        role: User role.
        phone: Contact phone number.
        addresses: Postal addresses, at least one.
        cart: Products held in the user's cart.
    """

    first_name: str
    last_name: str
    email: str
    password_hash: str = field(repr=False)
    phone: str
    role: Role = Role.USER
    addresses: list[Address] = field(default_factory=list)
    cart: list[CartEntry] = field(default_factory=list)

    @classmethod
    def create(
        cls,
        first_name: str,
        last_name: str,
        email: str,
        password_hash: str,
        phone: str,
        addresses: list[Address],
        role: Role = Role.USER,
    ) -> "User":
        """Create a new user with a generated id."""
        return cls(
            id=new_id(),
            first_name=first_name,
            last_name=last_name,
            email=email,
            password_hash=password_hash,
            phone=phone,
            role=role,
            addresses=list(addresses),
        )

    @property
    def token_claims(self) -> dict[str, Any]:
        """Claims identifying this user in an access token."""
        return {"sub": self.id, "email": self.email, "role": self.role.value}


# ============================================================================
# Category Aggregate Root
# ============================================================================


@dataclass(kw_only=True, eq=False)
class Category(AggregateRoot[str]):
    """A node in the category hierarchy.

    Top-level categories have no parent; subcategories reference the
    category they belong to (e.g., "apple" under "phones").

    Attributes:
        id: Category identifier.
        name: Display name.
        slug: URL slug, unique across categories.
        description: Optional description.
        parent_id: Parent category id, None for top-level categories.
    """

    name: str
    slug: str
    description: str | None = None
    parent_id: str | None = None

    @classmethod
    def create(
        cls,
        name: str,
        slug: str,
        description: str | None = None,
        parent_id: str | None = None,
    ) -> "Category":
        """Create a new category with a generated id."""
        return cls(
            id=new_id(),
            name=name,
            slug=slug,
            description=description,
            parent_id=parent_id,
        )

    @property
    def is_subcategory(self) -> bool:
        """Whether this category has a parent."""
        return self.parent_id is not None


# ============================================================================
# Product Aggregate Root
# ============================================================================


@dataclass(eq=False)
class ProductVariant(Entity[str]):
    """A stored variant of a product.

    Wraps a normalized variant with the id it was assigned when it was
    attached to its product.
    """

    id: str
    variant: NormalizedVariant

    @classmethod
    def from_normalized(cls, variant: NormalizedVariant) -> "ProductVariant":
        return cls(id=new_id(), variant=variant)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {"id": self.id, **self.variant.to_dict()}


@dataclass(kw_only=True, eq=False)
class Product(AggregateRoot[str]):
    """A product in the catalog.

    Products usually belong to a subcategory but may reference any category.

    Attributes:
        id: Product identifier.
        name: Product name.
        slug: URL slug, unique across products.
        price: Base price.
        category_id: Category the product belongs to.
        description: Optional description.
        images: Image URLs.
        brand: Optional brand name.
        variants: Size/color variants, in display order.
        ratings_average: Average rating (0-5).
        ratings_count: Number of ratings.
    """

    name: str
    slug: str
    price: float
    category_id: str
    description: str | None = None
    images: list[str] = field(default_factory=list)
    brand: str | None = None
    variants: list[ProductVariant] = field(default_factory=list)
    ratings_average: float = 0
    ratings_count: int = 0

    @classmethod
    def create(
        cls,
        name: str,
        slug: str,
        price: float,
        category_id: str,
        **attributes: Any,
    ) -> "Product":
        """Create a new product with a generated id.

        Variants passed in ``attributes`` must already be normalized.
        """
        variants = attributes.pop("variants", None) or []
        product = cls(
            id=new_id(),
            name=name,
            slug=slug,
            price=price,
            category_id=category_id,
            **attributes,
        )
        product.replace_variants(variants)
        return product

    def replace_variants(self, variants: list[NormalizedVariant]) -> None:
        """Replace all variants, assigning fresh ids.

        Args:
            variants: Normalized variants in display order.
        """
        self.variants = [ProductVariant.from_normalized(v) for v in variants]
        self._touch()

    def update(self, **changes: Any) -> None:
        """Apply attribute changes and bump updated_at.

        Args:
            **changes: Attribute names and their new values.
        """
        for name, value in changes.items():
            setattr(self, name, value)
        self._touch()

    @property
    def total_stock(self) -> int | float:
        """Sum of stock across all variants."""
        return sum(v.variant.stock for v in self.variants)
