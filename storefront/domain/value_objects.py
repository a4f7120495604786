"""Value Objects for the domain layer.

Value objects are immutable objects that are defined by their attributes
rather than identity.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any
from uuid import UUID, uuid4

from storefront.domain.base import ValueObject


# ============================================================================
# Identifiers
# ============================================================================


def new_id() -> str:
    """Generate a new entity identifier."""
    return str(uuid4())


def is_valid_id(value: Any) -> bool:
    """Check whether a value is a well-formed entity identifier.

    Args:
        value: Candidate identifier.

    Returns:
        True if value is a UUID string.
    """
    if not isinstance(value, str):
        return False
    try:
        UUID(value)
    except ValueError:
        return False
    return True


# ============================================================================
# Users
# ============================================================================


class Role(str, Enum):
    """User roles."""

    USER = "user"
    ADMIN = "admin"


@dataclass(frozen=True)
class Address(ValueObject):
    """Postal address of a user.

    Attributes:
        street: Street and number.
        city: City name.
        country: Country name or code.
        postal_code: Postal/ZIP code.
    """

    street: str
    city: str
    country: str
    postal_code: str

    def to_dict(self) -> dict[str, str]:
        """Convert to dictionary."""
        return {
            "street": self.street,
            "city": self.city,
            "country": self.country,
            "postal_code": self.postal_code,
        }


@dataclass(frozen=True)
class CartEntry(ValueObject):
    """A product reference held in a user's cart.

    Attributes:
        product_id: Referenced product.
        quantity: Number of units.
    """

    product_id: str
    quantity: int = 1

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {"product_id": self.product_id, "quantity": self.quantity}
