"""SQLAlchemy models for the storefront.

Defines users, categories, products and product_variants tables and the
conversions between rows and domain entities.
"""

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import JSON, Boolean, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from storefront.domain.entities import Category, Product, ProductVariant, User
from storefront.domain.value_objects import Address, CartEntry, Role
from storefront.domain.variants import NormalizedVariant
from storefront.infrastructure.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(value: datetime) -> datetime:
    # SQLite drops tzinfo on the way back
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class UserModel(Base):
    """Registered user row.

    Addresses and cart entries are stored as JSON lists.
    """

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(String(20), nullable=False, default=Role.USER.value)
    phone: Mapped[str] = mapped_column(String(50), nullable=False)
    addresses: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)
    cart: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_utcnow)

    def __repr__(self) -> str:
        """String representation."""
        return f"<UserModel(id={self.id}, email={self.email})>"

    @classmethod
    def from_entity(cls, user: User) -> "UserModel":
        model = cls(id=user.id)
        model.apply(user)
        return model

    def apply(self, user: User) -> None:
        """Copy entity state onto this row."""
        self.first_name = user.first_name
        self.last_name = user.last_name
        self.email = user.email
        self.password_hash = user.password_hash
        self.role = user.role.value
        self.phone = user.phone
        self.addresses = [address.to_dict() for address in user.addresses]
        self.cart = [entry.to_dict() for entry in user.cart]
        self.created_at = user.created_at
        self.updated_at = user.updated_at

    def to_entity(self) -> User:
        """Convert row to domain entity."""
        return User(
            id=self.id,
            first_name=self.first_name,
            last_name=self.last_name,
            email=self.email,
            password_hash=self.password_hash,
            role=Role(self.role),
            phone=self.phone,
            addresses=[Address(**address) for address in self.addresses or []],
            cart=[CartEntry(**entry) for entry in self.cart or []],
            created_at=_as_utc(self.created_at),
            updated_at=_as_utc(self.updated_at),
        )


class CategoryModel(Base):
    """Category row. ``parent_id`` is NULL for top-level categories."""

    __tablename__ = "categories"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    slug: Mapped[str] = mapped_column(String(200), nullable=False, unique=True, index=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    parent_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("categories.id"),
        nullable=True,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_utcnow)

    def __repr__(self) -> str:
        """String representation."""
        return f"<CategoryModel(id={self.id}, slug={self.slug})>"

    @classmethod
    def from_entity(cls, category: Category) -> "CategoryModel":
        model = cls(id=category.id)
        model.apply(category)
        return model

    def apply(self, category: Category) -> None:
        """Copy entity state onto this row."""
        self.name = category.name
        self.slug = category.slug
        self.description = category.description
        self.parent_id = category.parent_id
        self.created_at = category.created_at
        self.updated_at = category.updated_at

    def to_entity(self) -> Category:
        """Convert row to domain entity."""
        return Category(
            id=self.id,
            name=self.name,
            slug=self.slug,
            description=self.description,
            parent_id=self.parent_id,
            created_at=_as_utc(self.created_at),
            updated_at=_as_utc(self.updated_at),
        )


class ProductModel(Base):
    """Product row with its variants as child rows."""

    __tablename__ = "products"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    name: Mapped[str] = mapped_column(String(500), nullable=False)
    slug: Mapped[str] = mapped_column(String(500), nullable=False, unique=True, index=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    images: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    price: Mapped[float] = mapped_column(Float, nullable=False)
    category_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("categories.id"),
        nullable=False,
        index=True,
    )
    brand: Mapped[str | None] = mapped_column(String(100), nullable=True, index=True)
    ratings_average: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    ratings_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_utcnow)

    # Relationships
    variants: Mapped[list["ProductVariantModel"]] = relationship(
        "ProductVariantModel",
        back_populates="product",
        cascade="all, delete-orphan",
        order_by="ProductVariantModel.position",
    )

    def __repr__(self) -> str:
        """String representation."""
        return f"<ProductModel(id={self.id}, slug={self.slug})>"

    @classmethod
    def from_entity(cls, product: Product) -> "ProductModel":
        model = cls(id=product.id)
        model.apply(product)
        return model

    def apply(self, product: Product) -> None:
        """Copy entity state onto this row, replacing variant rows."""
        self.name = product.name
        self.slug = product.slug
        self.description = product.description
        self.images = list(product.images)
        self.price = product.price
        self.category_id = product.category_id
        self.brand = product.brand
        self.ratings_average = product.ratings_average
        self.ratings_count = product.ratings_count
        self.created_at = product.created_at
        self.updated_at = product.updated_at
        existing = {row.id: row for row in self.variants}
        rows = []
        for position, variant in enumerate(product.variants):
            row = existing.get(variant.id)
            if row is None:
                row = ProductVariantModel(id=variant.id)
            row.apply(variant, position)
            rows.append(row)
        self.variants = rows

    def to_entity(self) -> Product:
        """Convert row to domain entity."""
        return Product(
            id=self.id,
            name=self.name,
            slug=self.slug,
            description=self.description,
            images=list(self.images or []),
            price=self.price,
            category_id=self.category_id,
            brand=self.brand,
            variants=[variant.to_entity() for variant in self.variants],
            ratings_average=self.ratings_average,
            ratings_count=self.ratings_count,
            created_at=_as_utc(self.created_at),
            updated_at=_as_utc(self.updated_at),
        )


class ProductVariantModel(Base):
    """Product variant row (a size/color/sku configuration).

    Attributes:
        id: Variant identifier.
        product_id: Parent product ID.
        position: Index of the variant within its product.
        size: Size label.
        color: Color label.
        name: Display name.
        sku: Stock-keeping unit.
        stock: Units on hand.
        price: Price override.
        available: Variant availability.
    """

    __tablename__ = "product_variants"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    product_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("products.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    size: Mapped[str | None] = mapped_column(String(50), nullable=True)
    color: Mapped[str | None] = mapped_column(String(50), nullable=True)
    name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    sku: Mapped[str | None] = mapped_column(String(100), nullable=True)
    stock: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    price: Mapped[float | None] = mapped_column(Float, nullable=True)
    available: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    # Relationships
    product: Mapped["ProductModel"] = relationship("ProductModel", back_populates="variants")

    def __repr__(self) -> str:
        """String representation."""
        return f"<ProductVariantModel(id={self.id}, sku={self.sku})>"

    def apply(self, variant: ProductVariant, position: int) -> None:
        """Copy entity state onto this row."""
        data = variant.variant
        self.position = position
        self.size = data.size
        self.color = data.color
        self.name = data.name
        self.sku = data.sku
        self.stock = data.stock
        self.price = data.price
        self.available = data.available

    def to_entity(self) -> ProductVariant:
        """Convert row to domain entity."""
        stock = self.stock
        if isinstance(stock, float) and stock.is_integer():
            stock = int(stock)
        return ProductVariant(
            id=self.id,
            variant=NormalizedVariant(
                size=self.size,
                color=self.color,
                name=self.name,
                sku=self.sku,
                stock=stock,
                price=self.price,
                available=self.available,
            ),
        )
