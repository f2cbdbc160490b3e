"""Line item pricing

Computes the monetary total of one invoice line from its quantity, unit
price and optional discount. Pure functions only.
"""

from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any

ZERO = Decimal("0")
HUNDRED = Decimal("100")


class DiscountUnit(str, Enum):
    """How a line discount is expressed"""
    PERCENT = "%"    # percentage of the line subtotal
    ABSOLUTE = "€"   # fixed amount off the line subtotal


_UNIT_ALIASES = {
    "%": DiscountUnit.PERCENT,
    "percent": DiscountUnit.PERCENT,
    "pct": DiscountUnit.PERCENT,
    "€": DiscountUnit.ABSOLUTE,
    "eur": DiscountUnit.ABSOLUTE,
    "absolute": DiscountUnit.ABSOLUTE,
    "amount": DiscountUnit.ABSOLUTE,
}


def parse_discount_unit(raw: Any) -> DiscountUnit:
    """
    Resolve a discount unit from its stored or user-supplied form

    Raises:
        ValueError: If the unit is not recognised
    """
    if isinstance(raw, DiscountUnit):
        return raw
    if raw is None or raw == "":
        return DiscountUnit.PERCENT
    unit = _UNIT_ALIASES.get(str(raw).strip().lower())
    if unit is None:
        raise ValueError(f"Unknown discount unit: {raw!r}")
    return unit


def to_decimal(value: Any) -> Decimal:
    """Coerce a numeric input to Decimal; missing, NaN or malformed values become 0"""
    if value is None or isinstance(value, bool):
        return ZERO
    try:
        number = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError):
        return ZERO
    if not number.is_finite():
        return ZERO
    return number


def compute_discount_amount(base: Decimal, discount_value: Any, discount_unit: Any) -> Decimal:
    value = to_decimal(discount_value)
    try:
        unit = parse_discount_unit(discount_unit)
    except ValueError:
        unit = DiscountUnit.PERCENT

    if unit == DiscountUnit.ABSOLUTE:
        # Absolute discounts apply once per line, not per unit
        return value
    return base * value / HUNDRED


def compute_line_total(
    quantity: Any,
    unit_price: Any,
    discount_value: Any = ZERO,
    discount_unit: Any = DiscountUnit.PERCENT,
) -> Decimal:
    """
    Compute a line total

    total = max(0, quantity * unit_price - discount)

    Args:
        quantity: Number of units
        unit_price: Price per unit
        discount_value: Discount value (percentage or amount), defaults to 0
        discount_unit: DiscountUnit or its textual form

    Returns:
        Non-negative Decimal total (not rounded)
    """
    base = to_decimal(quantity) * to_decimal(unit_price)
    total = base - compute_discount_amount(base, discount_value, discount_unit)
    return max(ZERO, total)
