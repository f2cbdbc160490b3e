"""Invoice Domain Entity

Billing document issued by an owner to one of their clients.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import List, Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import JSON, Numeric, String, UniqueConstraint
from src.domain.base import BaseModel, IdType
from src.domain.line_item import LineItem, sum_totals


class InvoiceStatus(str, Enum):
    """Invoice lifecycle states"""
    DRAFT = "draft"
    SENT = "sent"
    PAID = "paid"


class Invoice(BaseModel, table=True):
    """
    Invoice - Billing document aggregate

    Domain Rules:
    - Belongs to exactly one owner; every query is scoped by owner_id
    - invoice_number (YYYYMM##) is unique per owner
    - total_amount is the sum of the item totals, except for imported
      invoices whose total was entered manually
    - items and client_id are only mutable while status is draft
    - Status transitions: draft -> sent <-> paid
    """

    __tablename__ = "invoices"
    __table_args__ = (
        UniqueConstraint("owner_id", "invoice_number", name="uq_invoices_owner_number"),
        Index("ix_invoices_owner_id", "owner_id"),
        Index("ix_invoices_owner_date", "owner_id", "invoice_date"),
        Index("ix_invoices_status", "status"),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, primary_key=True, autoincrement=True),
        description="Unique invoice identifier (auto-increment)"
    )

    owner_id: str = Field(
        description="Issuing user"
    )

    client_id: int = Field(
        description="Billed client"
    )

    invoice_number: str = Field(
        sa_column=Column(String(20), nullable=False),
        description="Invoice number, YYYYMM followed by a two digit sequence"
    )

    invoice_date: datetime = Field(
        description="Invoice issue date"
    )

    due_date: datetime = Field(
        description="Payment due date (defaults to invoice_date + 1 month)"
    )

    status: InvoiceStatus = Field(
        default=InvoiceStatus.DRAFT,
        description="Invoice status (draft, sent, paid)"
    )

    total_amount: Decimal = Field(
        sa_column=Column(Numeric(18, 6), nullable=False),
        description="Invoice total (precision: 18,6)"
    )

    items: List[dict] = Field(
        default_factory=list,
        sa_column=Column(JSON, nullable=False),
        description="Serialized line items"
    )

    generated_document_ref: Optional[str] = Field(
        default=None,
        sa_column=Column(String(255), nullable=True),
        description="Blob handle of the last generated PDF"
    )

    source_document_ref: Optional[str] = Field(
        default=None,
        sa_column=Column(String(255), nullable=True),
        description="Blob handle of the originally uploaded PDF"
    )

    sent_at: Optional[datetime] = Field(
        default=None,
        description="Timestamp when invoice was sent"
    )

    paid_at: Optional[datetime] = Field(
        default=None,
        description="Timestamp when invoice was marked paid"
    )

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Invoice creation timestamp"
    )

    updated_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Last update timestamp"
    )

    @property
    def line_items(self) -> List[LineItem]:
        return [LineItem.model_validate(raw) for raw in (self.items or [])]

    def replace_items(self, items: List[LineItem]) -> None:
        """Store new items and re-derive the total from them"""
        self.items = [item.to_storage() for item in items]
        self.total_amount = sum_totals(items)

    class Config:
        """SQLModel configuration"""
        json_schema_extra = {
            "example": {
                "id": 1,
                "owner_id": "user_42",
                "client_id": 7,
                "invoice_number": "20250501",
                "invoice_date": "2025-05-02T09:00:00Z",
                "due_date": "2025-06-02T09:00:00Z",
                "status": "draft",
                "total_amount": "180.000000",
                "items": [
                    {
                        "service_id": 3,
                        "label": "Développement",
                        "quantity": 2,
                        "unit_price": "100",
                        "discount_value": "10",
                        "discount_unit": "%",
                        "discount_text": "fidélité",
                        "total": "180",
                    }
                ],
                "generated_document_ref": None,
                "source_document_ref": None,
            }
        }
