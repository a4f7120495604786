"""API schemas for the storefront API.

Pydantic models for request/response validation and serialization.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from storefront.domain.value_objects import Role


# ============================================================================
# Common Schemas
# ============================================================================


class ErrorDetail(BaseModel):
    """Detailed error information."""

    field: str | None = Field(default=None, description="Field that caused the error")
    message: str = Field(..., description="Error message")


class ErrorResponse(BaseModel):
    """Standard error response.

    All API errors follow this format for consistency.
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    details: list[ErrorDetail] | dict[str, Any] = Field(
        default_factory=list, description="Additional error details"
    )
    request_id: str | None = Field(
        default=None, description="Request ID for correlation"
    )


class MessageResponse(BaseModel):
    """Plain acknowledgement."""

    message: str = Field(..., description="Human-readable status message")


# ============================================================================
# User Schemas
# ============================================================================


class AddressSchema(BaseModel):
    """Postal address."""

    street: str
    city: str
    country: str
    postal_code: str


class CartEntrySchema(BaseModel):
    """Product held in a user's cart."""

    product_id: str
    quantity: int


class RegisterRequest(BaseModel):
    """Request to register a new user.

    ``address`` accepts one address object or a list; it is checked by the
    address validator so clients get a specific message per bad entry.
    """

    first_name: str = Field(..., description="Given name")
    last_name: str = Field(..., description="Family name")
    email: str = Field(..., description="Login email")
    password: str = Field(..., description="Plain-text password")
    phone: str = Field(..., description="Contact phone number")
    role: Role | None = Field(default=None, description="User role (defaults to user)")
    address: Any = Field(default=None, description="Address object or list of addresses")


class LoginRequest(BaseModel):
    """Request to log in."""

    email: str
    password: str


class UserSchema(BaseModel):
    """Public view of a user."""

    id: str
    first_name: str
    last_name: str
    email: str
    role: Role
    phone: str
    address: list[AddressSchema] = Field(default_factory=list)
    cart: list[CartEntrySchema] = Field(default_factory=list)


class AuthResponse(BaseModel):
    """Response for register and login."""

    message: str
    token: str = Field(..., description="Bearer access token")
    user: UserSchema


class ProfileSchema(BaseModel):
    """Identity carried by the caller's token."""

    user_id: str
    email: str
    role: str


class ProfileResponse(BaseModel):
    """Response for the profile endpoint."""

    message: str
    user: ProfileSchema


# ============================================================================
# Category Schemas
# ============================================================================


class CategoryCreateRequest(BaseModel):
    """Request to create a category or subcategory."""

    name: str = Field(default="", description="Display name")
    slug: str = Field(default="", description="URL slug (lowercased)")
    description: str | None = Field(default=None, description="Optional description")
    parent_id: str | None = Field(
        default=None, description="Parent category ID for a subcategory"
    )


class CategorySchema(BaseModel):
    """Category representation."""

    id: str
    name: str
    slug: str
    description: str | None = None
    parent: str | None = Field(default=None, description="Parent category ID")
    is_subcategory: bool
    created_at: datetime
    updated_at: datetime


class CategoryResponse(BaseModel):
    """Single category."""

    category: CategorySchema


class CategoryCreatedResponse(CategoryResponse):
    """Response for category creation."""

    message: str


class CategoriesListResponse(BaseModel):
    """All categories."""

    count: int
    categories: list[CategorySchema]


class CategoryTreeNode(CategorySchema):
    """Category with nested subcategories."""

    children: list["CategoryTreeNode"] = Field(default_factory=list)


class CategoryTreeResponse(BaseModel):
    """Category hierarchy."""

    categories: list[CategoryTreeNode]


# ============================================================================
# Product Schemas
# ============================================================================


class VariantPayload(BaseModel):
    """Variant as sent by a client.

    ``stock``, ``price`` and ``available`` are accepted as-is and checked by
    the variant validator. An explicit null counts as a sent value.
    """

    size: str | None = None
    color: str | None = None
    name: str | None = None
    sku: str | None = None
    stock: Any = None
    price: Any = None
    available: Any = None


class ProductCreateRequest(BaseModel):
    """Request to create a product."""

    name: str = Field(..., description="Product name")
    slug: str = Field(..., description="URL slug (lowercased)")
    price: float = Field(..., ge=0, description="Base price")
    category_id: str = Field(..., description="Category ID")
    description: str | None = None
    images: list[str] | None = None
    brand: str | None = None
    ratings_average: float | None = Field(default=None, ge=0, le=5)
    ratings_count: int | None = Field(default=None, ge=0)
    variants: list[VariantPayload] | None = None


class ProductUpdateRequest(BaseModel):
    """Partial product update. Omitted fields are left unchanged."""

    name: str | None = None
    slug: str | None = None
    price: float | None = Field(default=None, ge=0)
    category_id: str | None = None
    description: str | None = None
    images: list[str] | None = None
    brand: str | None = None
    ratings_average: float | None = Field(default=None, ge=0, le=5)
    ratings_count: int | None = Field(default=None, ge=0)
    variants: list[VariantPayload] | None = None


class VariantSchema(BaseModel):
    """Stored variant."""

    id: str
    size: str | None = None
    color: str | None = None
    name: str | None = None
    sku: str | None = None
    stock: int | float
    price: float | None = None
    available: bool


class ProductSchema(BaseModel):
    """Product representation."""

    id: str
    name: str
    slug: str
    description: str | None = None
    images: list[str] = Field(default_factory=list)
    price: float
    category: str = Field(..., description="Category ID")
    brand: str | None = None
    variants: list[VariantSchema] = Field(default_factory=list)
    ratings_average: float
    ratings_count: int
    created_at: datetime
    updated_at: datetime


class ProductResponse(BaseModel):
    """Single product."""

    product: ProductSchema


class ProductMutationResponse(ProductResponse):
    """Response for product create and update."""

    message: str


class PaginationSchema(BaseModel):
    """Pagination info for a product listing."""

    page: int
    page_size: int
    total: int
    total_pages: int


class ProductsListResponse(BaseModel):
    """Paginated product listing."""

    products: list[ProductSchema]
    pagination: PaginationSchema
