"""Invoice Line Item Value Object

Line items are embedded in an invoice (stored in its JSON ``items`` column)
and have no identity of their own.
"""

from decimal import Decimal
from typing import Iterable, List, Optional
from pydantic import BaseModel, Field, field_validator, model_validator

from src.domain.errors import ValidationFailedError
from src.domain.pricing import DiscountUnit, compute_line_total, parse_discount_unit


class LineItem(BaseModel):
    """
    LineItem - One billable entry of an invoice

    Domain Rules:
    - quantity > 0, unit_price >= 0, discount_value >= 0
    - total is always derived from the other fields (never trusted from input)
    - discount_text must be non-empty whenever discount_value > 0
      (checked by validate_line_items so that the whole write is rejected)
    """

    service_id: Optional[int] = Field(
        default=None,
        description="Catalog service this line originated from (informational)"
    )

    label: str = Field(
        ...,
        description="Free-text description, initially copied from the service"
    )

    quantity: int = Field(
        ...,
        gt=0,
        description="Number of units (must be > 0)"
    )

    unit_price: Decimal = Field(
        ...,
        ge=0,
        description="Price per unit, displayed in EUR"
    )

    discount_value: Decimal = Field(
        default=Decimal("0"),
        ge=0,
        description="Discount value, percentage or amount depending on discount_unit"
    )

    discount_unit: DiscountUnit = Field(
        default=DiscountUnit.PERCENT,
        description="'%' for a percentage of the subtotal, '€' for a fixed amount"
    )

    discount_text: str = Field(
        default="",
        description="Explanation of the discount (required when a discount is set)"
    )

    total: Decimal = Field(
        default=Decimal("0"),
        description="Derived line total"
    )

    @field_validator("discount_unit", mode="before")
    @classmethod
    def parse_unit(cls, v):
        return parse_discount_unit(v)

    @field_validator("discount_value", mode="before")
    @classmethod
    def default_discount(cls, v):
        return Decimal("0") if v is None else v

    @field_validator("discount_text", mode="before")
    @classmethod
    def strip_discount_text(cls, v):
        return (v or "").strip()

    @model_validator(mode="after")
    def derive_total(self):
        self.total = compute_line_total(
            self.quantity, self.unit_price, self.discount_value, self.discount_unit
        )
        return self

    @property
    def has_discount(self) -> bool:
        return self.discount_value > 0

    def to_storage(self) -> dict:
        return self.model_dump(mode="json")


def validate_line_items(items: Iterable[LineItem]) -> List[LineItem]:
    """
    Check the invoice-level item rules

    Raises:
        ValidationFailedError: On an empty list or on the first item that has
            a discount without a description (1-based position in the message)
    """
    items = list(items)
    if not items:
        raise ValidationFailedError("An invoice must contain at least one item")

    for position, item in enumerate(items, start=1):
        if item.has_discount and not item.discount_text:
            raise ValidationFailedError(
                f"Item {position} ('{item.label}') has a discount but no discount description"
            )
    return items


def sum_totals(items: Iterable[LineItem]) -> Decimal:
    return sum((item.total for item in items), Decimal("0"))
