"""Unit tests for line item pricing

Tests cover:
- Percentage and absolute discounts
- Clamping at zero
- Lenient handling of missing or malformed input
"""

import pytest
from decimal import Decimal

from src.domain.pricing import (
    DiscountUnit,
    compute_discount_amount,
    compute_line_total,
    parse_discount_unit,
    to_decimal,
)


class TestComputeLineTotal:
    """Line total = max(0, quantity * unit_price - discount)"""

    def test_no_discount(self):
        assert compute_line_total(3, Decimal("100")) == Decimal("300")

    def test_percent_discount(self):
        """10% off 2 x 100 gives 180"""
        assert compute_line_total(2, Decimal("100"), Decimal("10"), DiscountUnit.PERCENT) == Decimal("180")

    def test_absolute_discount_is_not_scaled_by_quantity(self):
        """15 EUR off 3 x 50 gives 135, not 105"""
        assert compute_line_total(3, Decimal("50"), Decimal("15"), DiscountUnit.ABSOLUTE) == Decimal("135")

    def test_total_is_clamped_at_zero(self):
        assert compute_line_total(1, Decimal("50"), Decimal("80"), DiscountUnit.ABSOLUTE) == Decimal("0")
        assert compute_line_total(1, Decimal("50"), Decimal("150"), DiscountUnit.PERCENT) == Decimal("0")

    def test_full_percent_discount(self):
        assert compute_line_total(4, Decimal("25"), Decimal("100"), "%") == Decimal("0")

    def test_exact_decimal_arithmetic(self):
        """No float drift: 3 x 0.10 is exactly 0.30"""
        assert compute_line_total(3, Decimal("0.10")) == Decimal("0.30")

    def test_fractional_percent(self):
        assert compute_line_total(1, Decimal("200"), Decimal("12.5"), "%") == Decimal("175")

    @pytest.mark.parametrize("bad_value", [None, "abc", float("nan"), float("inf")])
    def test_invalid_discount_value_counts_as_zero(self, bad_value):
        assert compute_line_total(2, Decimal("10"), bad_value, DiscountUnit.PERCENT) == Decimal("20")

    def test_missing_price_counts_as_zero(self):
        assert compute_line_total(5, None) == Decimal("0")

    def test_unknown_unit_falls_back_to_percent(self):
        assert compute_line_total(1, Decimal("100"), Decimal("10"), "bananas") == Decimal("90")

    def test_textual_units_are_accepted(self):
        assert compute_line_total(1, Decimal("100"), Decimal("10"), "€") == Decimal("90")
        assert compute_line_total(1, Decimal("100"), Decimal("10"), "EUR") == Decimal("90")


class TestDiscountHelpers:

    def test_discount_amount_percent(self):
        assert compute_discount_amount(Decimal("200"), Decimal("10"), "%") == Decimal("20")

    def test_discount_amount_absolute(self):
        assert compute_discount_amount(Decimal("200"), Decimal("10"), "€") == Decimal("10")

    def test_parse_unit_defaults_to_percent(self):
        assert parse_discount_unit(None) == DiscountUnit.PERCENT
        assert parse_discount_unit("") == DiscountUnit.PERCENT

    def test_parse_unit_rejects_unknown(self):
        with pytest.raises(ValueError):
            parse_discount_unit("kg")

    def test_to_decimal(self):
        assert to_decimal("12.50") == Decimal("12.50")
        assert to_decimal(True) == Decimal("0")
        assert to_decimal(7) == Decimal("7")
