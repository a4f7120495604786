"""Product variant normalization and validation.

Variants arrive as loosely-typed records from request bodies. This module
turns them into ``VariantInput`` records at the boundary, checks them
against the variant rules, and produces the ``NormalizedVariant`` records
that are stored on a product.

Rules, in the order they are checked for each variant:

1. At least one of size, color or sku must be non-empty.
2. A non-empty sku must not repeat across the list.
3. A (size, color) pair must not repeat when both are present.
4. Stock must be a finite, non-negative number.
5. Price, when given, must be a finite, non-negative number.
6. The available flag, when given, must be a boolean.

The first failing rule stops the scan.
"""

import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Union

from storefront.domain.exceptions import VariantValidationError


# ============================================================================
# Records
# ============================================================================


class _Unset:
    """Marker for a field the client did not send."""

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Any = _Unset()


def _text(value: Any) -> str | None:
    if value is None or isinstance(value, str):
        return value
    return str(value)


@dataclass(frozen=True)
class VariantInput:
    """A variant as received from a client.

    Text fields are untrimmed. ``stock``, ``price`` and ``available`` keep
    whatever value was sent so validation can report bad types; they are
    ``UNSET`` when the client left them out, which is not the same as an
    explicit null.
    """

    size: str | None = None
    color: str | None = None
    name: str | None = None
    sku: str | None = None
    stock: Any = UNSET
    price: Any = UNSET
    available: Any = UNSET

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "VariantInput":
        """Build an input record from a decoded JSON object.

        Non-string text fields (e.g. a numeric size) are converted with str().
        """
        return cls(
            size=_text(data.get("size")),
            color=_text(data.get("color")),
            name=_text(data.get("name")),
            sku=_text(data.get("sku")),
            stock=data.get("stock", UNSET),
            price=data.get("price", UNSET),
            available=data.get("available", UNSET),
        )


@dataclass(frozen=True)
class NormalizedVariant:
    """A variant in its canonical stored shape.

    Attributes:
        stock: Units on hand, 0 when none were given.
        available: Whether the variant can be bought, True unless disabled.
        size: Trimmed size, None when blank.
        color: Trimmed color, None when blank.
        name: Trimmed display name, None when blank.
        sku: Trimmed stock-keeping unit, None when blank.
        price: Price override, None to use the product price.
    """

    stock: int | float = 0
    available: bool = True
    size: str | None = None
    color: str | None = None
    name: str | None = None
    sku: str | None = None
    price: int | float | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary, leaving out absent fields."""
        data: dict[str, Any] = {
            "size": self.size,
            "color": self.color,
            "name": self.name,
            "sku": self.sku,
            "stock": self.stock,
            "price": self.price,
            "available": self.available,
        }
        return {key: value for key, value in data.items() if value is not None}


VariantLike = Union[VariantInput, NormalizedVariant, Mapping[str, Any]]


@dataclass(frozen=True)
class VariantValidationResult:
    """Outcome of validating a variant list.

    Attributes:
        valid: Whether every variant passed.
        reason: Why validation failed, None when valid.
    """

    valid: bool
    reason: str | None = None

    @classmethod
    def ok(cls) -> "VariantValidationResult":
        return cls(valid=True)

    @classmethod
    def failure(cls, reason: str) -> "VariantValidationResult":
        return cls(valid=False, reason=reason)

    def raise_for_error(self) -> None:
        """Raise VariantValidationError if validation failed."""
        if not self.valid:
            raise VariantValidationError(self.reason or "Invalid variants")


# ============================================================================
# Normalization
# ============================================================================


def normalize_string(value: str | None) -> str | None:
    """Trim a text field; blank or missing values become None."""
    if not value:
        return None
    return value.strip() or None


def _as_record(variant: VariantLike) -> VariantInput:
    if isinstance(variant, VariantInput):
        return variant
    if isinstance(variant, NormalizedVariant):
        return VariantInput(
            size=variant.size,
            color=variant.color,
            name=variant.name,
            sku=variant.sku,
            stock=variant.stock,
            price=UNSET if variant.price is None else variant.price,
            available=variant.available,
        )
    return VariantInput.from_mapping(variant)


def normalize_variant(variant: VariantLike) -> NormalizedVariant:
    """Normalize a single variant.

    Args:
        variant: Raw input, decoded mapping, or an already normalized variant.

    Returns:
        The variant with trimmed text fields and defaults applied.
    """
    record = _as_record(variant)
    return NormalizedVariant(
        size=normalize_string(record.size),
        color=normalize_string(record.color),
        name=normalize_string(record.name),
        sku=normalize_string(record.sku),
        stock=record.stock or 0,
        price=None if record.price is UNSET else record.price,
        available=(
            True
            if record.available is UNSET or record.available is None
            else record.available
        ),
    )


def normalize_variants(
    variants: Iterable[VariantLike] | None,
) -> list[NormalizedVariant]:
    """Normalize a variant list, preserving order.

    Args:
        variants: Variants to normalize; None is treated as empty.

    Returns:
        Normalized variants.
    """
    if not variants:
        return []
    return [normalize_variant(variant) for variant in variants]


# ============================================================================
# Validation
# ============================================================================


def _is_finite_number(value: Any) -> bool:
    # bool is an int subclass but never a valid quantity
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def _variant_label(
    index: int,
    name: str | None,
    size: str | None,
    color: str | None,
    sku: str | None,
) -> str:
    if name:
        return name
    if size and color:
        return f'size "{size}" color "{color}"'
    if size:
        return f'size "{size}"'
    if color:
        return f'color "{color}"'
    return sku or f"variant {index}"


def validate_variants(
    variants: Iterable[VariantLike] | None,
) -> VariantValidationResult:
    """Validate a variant list against the variant rules.

    Size, color, name and sku are compared in their normalized form;
    stock, price and available are checked as sent.

    Args:
        variants: Variants to validate; None or empty is valid.

    Returns:
        Result holding the first failure found, if any.
    """
    if not variants:
        return VariantValidationResult.ok()

    seen_skus: set[str] = set()
    seen_combos: set[tuple[str, str]] = set()

    for index, variant in enumerate(variants, start=1):
        record = _as_record(variant)
        size = normalize_string(record.size)
        color = normalize_string(record.color)
        sku = normalize_string(record.sku)

        if not size and not color and not sku:
            return VariantValidationResult.failure(
                f"Variant {index} must have at least one of: size, color, or sku"
            )

        if sku:
            if sku in seen_skus:
                return VariantValidationResult.failure(f"Duplicate SKU: {sku}")
            seen_skus.add(sku)

        if size and color:
            if (size, color) in seen_combos:
                return VariantValidationResult.failure(
                    f'Duplicate variant with size "{size}" and color "{color}"'
                )
            seen_combos.add((size, color))

        if not _is_finite_number(record.stock) or record.stock < 0:
            label = _variant_label(
                index, normalize_string(record.name), size, color, sku
            )
            return VariantValidationResult.failure(
                f"Invalid stock value for {label}. "
                "Stock must be a non-negative number"
            )

        if record.price is not UNSET and (
            not _is_finite_number(record.price) or record.price < 0
        ):
            label = _variant_label(
                index, normalize_string(record.name), size, color, sku
            )
            return VariantValidationResult.failure(
                f"Invalid price for {label}. Price must be a non-negative number"
            )

        if record.available is not UNSET and not isinstance(record.available, bool):
            return VariantValidationResult.failure(
                f"Invalid available flag for variant {index}. Must be a boolean"
            )

    return VariantValidationResult.ok()
