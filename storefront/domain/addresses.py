"""Address validation for user registration.

A registration carries either a single address object or a list of them.
Every address needs non-empty ``street``, ``city``, ``country`` and
``postal_code`` strings.
"""

from dataclasses import dataclass, field
from typing import Any

from storefront.domain.exceptions import AddressValidationError
from storefront.domain.value_objects import Address

ADDRESS_FIELDS = ("street", "city", "country", "postal_code")


@dataclass(frozen=True)
class AddressValidationResult:
    """Outcome of validating registration addresses.

    Attributes:
        valid: Whether the addresses were accepted.
        addresses: Parsed addresses, empty on failure.
        reason: Why validation failed, None when valid.
    """

    valid: bool
    addresses: list[Address] = field(default_factory=list)
    reason: str | None = None

    def raise_for_error(self) -> None:
        """Raise AddressValidationError if validation failed."""
        if not self.valid:
            raise AddressValidationError(self.reason or "Invalid address")


def is_valid_address(value: Any) -> bool:
    """Check that value is a mapping with every address field filled in."""
    if not isinstance(value, dict):
        return False
    return all(
        isinstance(value.get(name), str) and value[name].strip() != ""
        for name in ADDRESS_FIELDS
    )


def validate_addresses(value: Any) -> AddressValidationResult:
    """Validate one address or a list of addresses.

    Args:
        value: Address mapping, list of address mappings, or None.

    Returns:
        Result with the parsed addresses or the first failure.
    """
    if not value:
        return AddressValidationResult(
            valid=False, reason="At least one address is required"
        )

    candidates = value if isinstance(value, list) else [value]

    for index, candidate in enumerate(candidates, start=1):
        if not is_valid_address(candidate):
            return AddressValidationResult(
                valid=False,
                reason=(
                    f"Address {index} is invalid. All fields (street, city, "
                    "country, postal_code) are required and must be "
                    "non-empty strings."
                ),
            )

    return AddressValidationResult(
        valid=True,
        addresses=[
            Address(**{name: candidate[name].strip() for name in ADDRESS_FIELDS})
            for candidate in candidates
        ],
    )
