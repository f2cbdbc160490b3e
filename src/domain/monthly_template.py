"""Monthly Template Domain Entity

Recurring invoice skeleton for one client and one calendar month, built from
the invoices sent to that client the month before.
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import JSON
from src.domain.base import BaseModel, IdType
from src.domain.line_item import LineItem


class MonthlyTemplate(BaseModel, table=True):
    """
    MonthlyTemplate - Items to re-bill a client for a given month

    Domain Rules:
    - At most one template per (owner, client, year, month)
    - Template items carry no discount; totals are derived when an invoice
      is created from the template
    """

    __tablename__ = "monthly_templates"
    __table_args__ = (
        Index("ix_monthly_templates_owner_month", "owner_id", "year", "month"),
        Index("ix_monthly_templates_owner_client", "owner_id", "client_id"),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, primary_key=True, autoincrement=True),
    )

    owner_id: str = Field(description="Owning user")
    client_id: int = Field(description="Client to bill")
    year: int = Field(description="Calendar year")
    month: int = Field(description="Calendar month (1-12)")

    items: List[dict] = Field(
        default_factory=list,
        sa_column=Column(JSON, nullable=False),
        description="service_id, label, quantity and unit_price per entry"
    )

    last_invoice_id: Optional[int] = Field(
        default=None,
        description="Last invoice created from this template"
    )

    created_at: datetime = Field(default_factory=datetime.utcnow)

    def to_line_items(self) -> List[LineItem]:
        return [
            LineItem(
                service_id=raw.get("service_id"),
                label=raw["label"],
                quantity=raw["quantity"],
                unit_price=Decimal(str(raw["unit_price"])),
            )
            for raw in self.items
        ]

    @staticmethod
    def items_from(line_items: List[LineItem]) -> List[dict]:
        return [
            {
                "service_id": item.service_id,
                "label": item.label,
                "quantity": item.quantity,
                "unit_price": str(item.unit_price),
            }
            for item in line_items
        ]
