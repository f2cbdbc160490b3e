"""Request schemas for Invoice API

Pydantic models for validating incoming HTTP requests. The owner is never
part of a body; it comes from the X-Owner-Id header.
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field

from src.domain.invoice import InvoiceStatus
from src.domain.line_item import LineItem


class CreateInvoiceRequestSchema(BaseModel):
    """
    Request schema for creating an invoice

    Used for POST /invoices endpoint.
    """

    client_id: int = Field(..., description="Billed client")

    items: List[LineItem] = Field(
        ...,
        description="Line items; totals are computed server side"
    )

    invoice_date: Optional[datetime] = Field(
        default=None,
        description="Invoice date, defaults to now"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "client_id": 7,
                "items": [
                    {
                        "service_id": 3,
                        "label": "Développement",
                        "quantity": 2,
                        "unit_price": "100.00",
                        "discount_value": "10",
                        "discount_unit": "%",
                        "discount_text": "fidélité",
                    }
                ],
            }
        }


class ImportInvoiceRequestSchema(BaseModel):
    """
    Request schema for registering an uploaded invoice

    Used for POST /invoices/import endpoint.
    """

    client_id: int = Field(..., description="Billed client")
    invoice_number: str = Field(..., min_length=1, description="Number printed on the document")
    invoice_date: datetime = Field(..., description="Date printed on the document")
    total_amount: Decimal = Field(..., ge=0, description="Total printed on the document")
    source_document_ref: str = Field(..., min_length=1, description="Blob handle of the uploaded PDF")
    items: List[LineItem] = Field(default_factory=list)
    due_date: Optional[datetime] = Field(default=None)
    status: InvoiceStatus = Field(default=InvoiceStatus.SENT)


class UpdateInvoiceRequestSchema(BaseModel):
    """
    Request schema for updating a draft invoice

    Used for PATCH /invoices/{invoice_id} endpoint. Omitted fields are kept.
    """

    client_id: Optional[int] = Field(default=None, description="New client")
    items: Optional[List[LineItem]] = Field(default=None, description="Replacement line items")


class SendInvoiceEmailRequestSchema(BaseModel):
    custom_message: Optional[str] = Field(
        default=None,
        max_length=2000,
        description="Optional paragraph inserted after the greeting"
    )
