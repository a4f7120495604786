"""Domain layer - Entities, value objects, variant rules, exceptions.

This module exports the core domain building blocks:

- **Entities**: Objects with identity (User, Category, Product)
- **Value Objects**: Immutable objects compared by value (Address, CartEntry)
- **Variants**: Normalization and validation of product variants
- **Exceptions**: Domain-specific errors and invariant violations

Example usage:
    from storefront.domain import normalize_variants, validate_variants

    raw = [{"size": " M ", "color": "Red", "stock": 3}]
    validate_variants(raw).raise_for_error()
    variants = normalize_variants(raw)
"""

# Base classes
from storefront.domain.base import AggregateRoot, Entity, ValueObject

# Addresses
from storefront.domain.addresses import AddressValidationResult, validate_addresses

# Entities
from storefront.domain.entities import Category, Product, ProductVariant, User

# Exceptions
from storefront.domain.exceptions import (
    AddressValidationError,
    AuthenticationError,
    ConflictError,
    DomainError,
    InvalidCredentialsError,
    InvalidIdentifierError,
    InvalidInputError,
    InvalidTokenError,
    NotFoundError,
    TokenExpiredError,
    VariantValidationError,
)

# Value Objects
from storefront.domain.value_objects import (
    Address,
    CartEntry,
    Role,
    is_valid_id,
    new_id,
)

# Variants
from storefront.domain.variants import (
    NormalizedVariant,
    VariantInput,
    VariantValidationResult,
    normalize_string,
    normalize_variant,
    normalize_variants,
    validate_variants,
)

__all__ = [
    # Base
    "AggregateRoot",
    "Entity",
    "ValueObject",
    # Entities
    "Category",
    "Product",
    "ProductVariant",
    "User",
    # Value Objects
    "Address",
    "CartEntry",
    "Role",
    "is_valid_id",
    "new_id",
    # Addresses
    "AddressValidationResult",
    "validate_addresses",
    # Variants
    "NormalizedVariant",
    "VariantInput",
    "VariantValidationResult",
    "normalize_string",
    "normalize_variant",
    "normalize_variants",
    "validate_variants",
    # Exceptions
    "AddressValidationError",
    "AuthenticationError",
    "ConflictError",
    "DomainError",
    "InvalidCredentialsError",
    "InvalidIdentifierError",
    "InvalidInputError",
    "InvalidTokenError",
    "NotFoundError",
    "TokenExpiredError",
    "VariantValidationError",
]
