"""Tests for variant normalization and validation."""

import math

import pytest

from storefront.domain.exceptions import VariantValidationError
from storefront.domain.variants import (
    NormalizedVariant,
    VariantInput,
    VariantValidationResult,
    normalize_string,
    normalize_variant,
    normalize_variants,
    validate_variants,
)


# ============================================================================
# Normalization
# ============================================================================


class TestNormalizeString:
    """Tests for text field trimming."""

    def test_trims_whitespace(self) -> None:
        """Surrounding whitespace is removed."""
        assert normalize_string("  M  ") == "M"

    def test_blank_becomes_none(self) -> None:
        """Whitespace-only and empty strings are absent."""
        assert normalize_string("   ") is None
        assert normalize_string("") is None
        assert normalize_string(None) is None


class TestNormalizeVariants:
    """Tests for normalize_variants."""

    def test_empty_and_none(self) -> None:
        """No variants normalize to an empty list."""
        assert normalize_variants([]) == []
        assert normalize_variants(None) == []

    def test_trims_and_defaults(self) -> None:
        """Text is trimmed and available defaults to True."""
        result = normalize_variants([{"size": " M ", "color": " Red ", "stock": 0}])

        assert [v.to_dict() for v in result] == [
            {"size": "M", "color": "Red", "stock": 0, "available": True}
        ]

    def test_missing_stock_defaults_to_zero(self) -> None:
        """Absent stock is stored as 0."""
        variant = normalize_variant({"sku": "A"})
        assert variant.stock == 0

    def test_keeps_explicit_unavailable(self) -> None:
        """available=False survives normalization."""
        variant = normalize_variant({"sku": "A", "stock": 1, "available": False})
        assert variant.available is False

    def test_price_passes_through(self) -> None:
        """Price overrides are kept unchanged."""
        variant = normalize_variant({"sku": "A", "stock": 1, "price": 19.99})
        assert variant.price == 19.99

    def test_blank_fields_are_dropped(self) -> None:
        """Blank text fields are absent from the stored shape."""
        variant = normalize_variant(
            VariantInput(size="  ", color="Blue", name=" ", sku="", stock=2)
        )
        assert variant.to_dict() == {"color": "Blue", "stock": 2, "available": True}

    def test_is_idempotent(self) -> None:
        """Normalizing a normalized list changes nothing."""
        raw = [
            {"size": " L ", "color": "Black", "name": " Tee ", "stock": 4, "price": 10},
            {"sku": " SKU-2 ", "stock": 1, "available": False},
        ]
        once = normalize_variants(raw)
        twice = normalize_variants(once)

        assert twice == once

    def test_preserves_order(self) -> None:
        """Output follows input order."""
        result = normalize_variants(
            [{"sku": "C", "stock": 1}, {"sku": "A", "stock": 1}, {"sku": "B", "stock": 1}]
        )
        assert [v.sku for v in result] == ["C", "A", "B"]

    def test_accepts_records(self) -> None:
        """Input records and mappings normalize the same way."""
        from_record = normalize_variant(VariantInput(size=" S ", stock=3))
        from_mapping = normalize_variant({"size": " S ", "stock": 3})

        assert from_record == from_mapping == NormalizedVariant(size="S", stock=3)

    def test_non_string_text_is_coerced(self) -> None:
        """Numeric size or sku values in a mapping are read as text."""
        result = normalize_variant({"size": 5, "sku": 1001, "stock": 1})

        assert result.size == "5"
        assert result.sku == "1001"

    def test_omitted_fields_take_defaults(self) -> None:
        """A record built without stock, price or available gets the defaults."""
        result = normalize_variant(VariantInput(sku="A"))

        assert result == NormalizedVariant(sku="A", stock=0, price=None, available=True)


# ============================================================================
# Validation
# ============================================================================


class TestValidateVariants:
    """Tests for validate_variants."""

    def test_empty_is_valid(self) -> None:
        """No variants is always valid."""
        assert validate_variants([]).valid
        assert validate_variants(None).valid

    def test_valid_variant(self) -> None:
        """A complete variant passes."""
        result = validate_variants(
            [{"sku": "X", "stock": 5, "price": 19.99, "available": True}]
        )
        assert result == VariantValidationResult(valid=True)

    def test_requires_identifying_field(self) -> None:
        """Size, color or sku must be present after trimming."""
        result = validate_variants([{"size": "  ", "color": "", "sku": ""}])

        assert not result.valid
        assert result.reason == "Variant 1 must have at least one of: size, color, or sku"

    def test_index_is_one_based(self) -> None:
        """The failing variant is reported by its position."""
        result = validate_variants([{"sku": "A", "stock": 1}, {"name": "Plain", "stock": 1}])
        assert result.reason == "Variant 2 must have at least one of: size, color, or sku"

    def test_duplicate_sku(self) -> None:
        """The same sku cannot appear twice."""
        result = validate_variants([{"sku": "A", "stock": 1}, {"sku": "A", "stock": 2}])
        assert result.reason == "Duplicate SKU: A"

    def test_duplicate_sku_after_trimming(self) -> None:
        """Skus are compared in trimmed form."""
        result = validate_variants([{"sku": "A", "stock": 1}, {"sku": " A ", "stock": 2}])
        assert result.reason == "Duplicate SKU: A"

    def test_duplicate_size_color(self) -> None:
        """The same size and color pair cannot appear twice."""
        result = validate_variants(
            [
                {"size": "M", "color": "Red", "stock": 1},
                {"size": "M", "color": "Red", "stock": 2},
            ]
        )
        assert result.reason == 'Duplicate variant with size "M" and color "Red"'

    def test_size_only_variants_may_repeat(self) -> None:
        """The pair check applies only when both size and color are set."""
        result = validate_variants(
            [
                {"size": "M", "sku": "A", "stock": 1},
                {"size": "M", "sku": "B", "stock": 1},
            ]
        )
        assert result.valid

    def test_sku_checked_before_pair(self) -> None:
        """A repeated sku is reported ahead of a repeated pair."""
        result = validate_variants(
            [
                {"size": "M", "color": "Red", "sku": "A", "stock": 1},
                {"size": "M", "color": "Red", "sku": "A", "stock": 1},
            ]
        )
        assert result.reason == "Duplicate SKU: A"

    def test_negative_stock(self) -> None:
        """Negative stock is rejected and labelled by size and color."""
        result = validate_variants([{"size": "M", "color": "Red", "stock": -1}])
        assert result.reason == (
            'Invalid stock value for size "M" color "Red". '
            "Stock must be a non-negative number"
        )

    @pytest.mark.parametrize("stock", [None, "5", True, math.nan, math.inf])
    def test_non_numeric_stock(self, stock) -> None:
        """Stock must be a finite number and not a boolean."""
        result = validate_variants([{"sku": "A", "stock": stock}])
        assert result.reason == (
            "Invalid stock value for A. Stock must be a non-negative number"
        )

    @pytest.mark.parametrize(
        "variant,label",
        [
            ({"name": " Tall ", "size": "M", "stock": -1}, "Tall"),
            ({"size": "M", "stock": -1}, 'size "M"'),
            ({"color": "Red", "stock": -1}, 'color "Red"'),
            ({"sku": "SKU-9", "stock": -1}, "SKU-9"),
        ],
    )
    def test_stock_error_labels(self, variant, label) -> None:
        """Labels prefer name, then size/color, then sku."""
        result = validate_variants([variant])
        assert result.reason == (
            f"Invalid stock value for {label}. Stock must be a non-negative number"
        )

    def test_negative_price(self) -> None:
        """A negative price override is rejected."""
        result = validate_variants([{"sku": "A", "stock": 1, "price": -0.01}])
        assert result.reason == "Invalid price for A. Price must be a non-negative number"

    def test_non_numeric_price(self) -> None:
        """Price must be a number when present."""
        result = validate_variants([{"color": "Red", "stock": 1, "price": "9.99"}])
        assert result.reason == (
            'Invalid price for color "Red". Price must be a non-negative number'
        )

    def test_stock_checked_before_price(self) -> None:
        """Bad stock is reported even when price is also bad."""
        result = validate_variants([{"sku": "A", "stock": -1, "price": -1}])
        assert result.reason.startswith("Invalid stock value")

    def test_zero_price_is_valid(self) -> None:
        """Zero is a valid price override."""
        assert validate_variants([{"sku": "A", "stock": 0, "price": 0}]).valid

    def test_available_must_be_boolean(self) -> None:
        """available must be a real boolean when given."""
        result = validate_variants([{"sku": "A", "stock": 1, "available": "yes"}])
        assert result.reason == "Invalid available flag for variant 1. Must be a boolean"

    def test_explicit_null_price(self) -> None:
        """A price sent as null is not the same as no price."""
        result = validate_variants([{"sku": "A", "stock": 1, "price": None}])
        assert result.reason == "Invalid price for A. Price must be a non-negative number"

    def test_explicit_null_available(self) -> None:
        """An available flag sent as null is rejected."""
        result = validate_variants([{"sku": "A", "stock": 1, "available": None}])
        assert result.reason == "Invalid available flag for variant 1. Must be a boolean"

    def test_omitted_price_and_available(self) -> None:
        """Leaving out price and available is valid, for mappings and records."""
        assert validate_variants([{"sku": "A", "stock": 1}]).valid
        assert validate_variants([VariantInput(sku="A", stock=1)]).valid

    def test_null_price_on_record(self) -> None:
        """A record with price=None counts as a sent null."""
        result = validate_variants([VariantInput(sku="A", stock=1, price=None)])
        assert result.reason == "Invalid price for A. Price must be a non-negative number"

    def test_boolean_price(self) -> None:
        """A boolean is not a price."""
        result = validate_variants([{"sku": "A", "stock": 1, "price": True}])
        assert result.reason == "Invalid price for A. Price must be a non-negative number"

    def test_normalized_variants_revalidate(self) -> None:
        """Normalized output passes validation again."""
        normalized = normalize_variants([{"sku": "A", "stock": 2}])
        assert validate_variants(normalized).valid

    def test_non_string_size_is_accepted(self) -> None:
        """A numeric size counts as an identifying field."""
        assert validate_variants([{"size": 5, "stock": 1}]).valid
        result = validate_variants([{"size": 5, "stock": -1}])
        assert result.reason == (
            'Invalid stock value for size "5". Stock must be a non-negative number'
        )

    def test_first_failure_wins(self) -> None:
        """Scanning stops at the first failing variant."""
        result = validate_variants(
            [
                {"sku": "A", "stock": 1},
                {"sku": "B", "stock": -5},
                {"size": "", "color": "", "sku": ""},
            ]
        )
        assert result.reason == "Invalid stock value for B. Stock must be a non-negative number"

    def test_seen_skus_span_whole_list(self) -> None:
        """A sku repeated far apart is still a duplicate."""
        result = validate_variants(
            [
                {"sku": "A", "stock": 1},
                {"sku": "B", "stock": 1},
                {"sku": "C", "stock": 1},
                {"sku": "A", "stock": 1},
            ]
        )
        assert result.reason == "Duplicate SKU: A"


class TestValidationResult:
    """Tests for VariantValidationResult."""

    def test_raise_for_error(self) -> None:
        """A failure converts into VariantValidationError."""
        result = VariantValidationResult.failure("Duplicate SKU: A")

        with pytest.raises(VariantValidationError) as exc_info:
            result.raise_for_error()

        assert exc_info.value.reason == "Duplicate SKU: A"
        assert exc_info.value.status_code == 400
        assert exc_info.value.error_code == "INVALID_VARIANTS"

    def test_ok_does_not_raise(self) -> None:
        """A passing result raises nothing."""
        VariantValidationResult.ok().raise_for_error()
