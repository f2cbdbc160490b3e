"""Data Transfer Objects for Invoicing Use Cases

Pydantic models for command inputs and response outputs.
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field

from src.domain.invoice import Invoice, InvoiceStatus
from src.domain.line_item import LineItem


class CreateInvoiceCommandDTO(BaseModel):
    """
    Command DTO for creating an invoice

    Only owner_id, client_id and items are needed for a regular invoice.
    The optional fields are overrides used by the import path.
    """

    owner_id: str = Field(
        ...,
        description="Issuing user"
    )

    client_id: int = Field(
        ...,
        description="Billed client"
    )

    items: List[LineItem] = Field(
        default_factory=list,
        description="Line items (must not be empty)"
    )

    invoice_number: Optional[str] = Field(
        default=None,
        description="Caller supplied number; generated from invoice_date when omitted"
    )

    invoice_date: Optional[datetime] = Field(
        default=None,
        description="Invoice date, defaults to now"
    )

    due_date: Optional[datetime] = Field(
        default=None,
        description="Due date, defaults to invoice_date + 1 calendar month"
    )

    status: Optional[InvoiceStatus] = Field(
        default=None,
        description="Initial status, defaults to draft"
    )

    total_amount: Optional[Decimal] = Field(
        default=None,
        ge=0,
        description="Manually entered total, trusted as-is instead of summing items"
    )

    source_document_ref: Optional[str] = Field(
        default=None,
        description="Blob handle of an uploaded original document"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "owner_id": "user_42",
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


class ImportInvoiceCommandDTO(BaseModel):
    """
    Command DTO for registering an already issued (uploaded) invoice

    Imported invoices keep their original number and total.
    """

    owner_id: str = Field(..., description="Issuing user")
    client_id: int = Field(..., description="Billed client")
    invoice_number: str = Field(..., min_length=1, description="Number printed on the document")
    invoice_date: datetime = Field(..., description="Date printed on the document")
    items: List[LineItem] = Field(default_factory=list, description="Line items")
    total_amount: Decimal = Field(..., ge=0, description="Total printed on the document")
    source_document_ref: str = Field(..., description="Blob handle of the uploaded PDF")
    due_date: Optional[datetime] = Field(default=None, description="Defaults to invoice_date + 1 month")
    status: InvoiceStatus = Field(
        default=InvoiceStatus.SENT,
        description="Uploaded documents were already issued"
    )


class UpdateInvoiceCommandDTO(BaseModel):
    """
    Command DTO for updating a draft invoice

    Only the supplied fields change. The total is always re-derived.
    """

    invoice_id: int = Field(..., description="Invoice to update")
    owner_id: str = Field(..., description="Caller")
    client_id: Optional[int] = Field(default=None, description="New client, unchanged when omitted")
    items: Optional[List[LineItem]] = Field(default=None, description="New items, unchanged when omitted")


class SendInvoiceEmailCommandDTO(BaseModel):
    invoice_id: int = Field(..., description="Invoice to send")
    owner_id: str = Field(..., description="Caller")
    custom_message: Optional[str] = Field(
        default=None,
        description="Optional paragraph inserted after the greeting"
    )


class InvoiceResponseDTO(BaseModel):
    """
    Response DTO for invoice operations

    Returned by CreateInvoice, UpdateInvoice, TogglePaymentStatus, etc.
    """

    invoice_id: int = Field(..., description="Invoice ID")
    owner_id: str = Field(..., description="Issuing user")
    client_id: int = Field(..., description="Billed client")
    invoice_number: str = Field(..., description="Invoice number (YYYYMM##)")
    invoice_date: datetime = Field(..., description="Invoice date")
    due_date: datetime = Field(..., description="Payment due date")
    status: str = Field(..., description="draft, sent or paid")
    total_amount: Decimal = Field(..., description="Invoice total")
    items: List[LineItem] = Field(default_factory=list, description="Line items")
    generated_document_ref: Optional[str] = Field(default=None)
    source_document_ref: Optional[str] = Field(default=None)
    sent_at: Optional[datetime] = Field(default=None)
    paid_at: Optional[datetime] = Field(default=None)
    created_at: datetime = Field(..., description="Creation timestamp")

    @classmethod
    def from_entity(cls, invoice: Invoice) -> "InvoiceResponseDTO":
        return cls(
            invoice_id=invoice.id,
            owner_id=invoice.owner_id,
            client_id=invoice.client_id,
            invoice_number=invoice.invoice_number,
            invoice_date=invoice.invoice_date,
            due_date=invoice.due_date,
            status=invoice.status.value,
            total_amount=invoice.total_amount,
            items=invoice.line_items,
            generated_document_ref=invoice.generated_document_ref,
            source_document_ref=invoice.source_document_ref,
            sent_at=invoice.sent_at,
            paid_at=invoice.paid_at,
            created_at=invoice.created_at,
        )


class InvoiceDocumentResponseDTO(BaseModel):
    """
    Response DTO for PDF generation

    Returned by GenerateInvoicePdf.
    """

    invoice_id: int = Field(..., description="Invoice ID")
    invoice_number: str = Field(..., description="Invoice number")
    document_ref: str = Field(..., description="Blob handle of the stored PDF")
    document_url: Optional[str] = Field(default=None, description="URL of the stored PDF")
    filename: str = Field(..., description="Suggested file name")
    pdf_base64: str = Field(..., description="PDF document, base64 encoded")
    generated_at: datetime = Field(..., description="Generation timestamp")

    class Config:
        json_schema_extra = {
            "example": {
                "invoice_id": 1,
                "invoice_number": "20250501",
                "document_ref": "invoices/3f2c9d0e.pdf",
                "document_url": "/api/storage/invoices/3f2c9d0e.pdf",
                "filename": "Facture-20250501-ACME.pdf",
                "pdf_base64": "JVBERi0xLjQKJeLjz9...",
                "generated_at": "2025-05-02T12:00:00Z",
            }
        }


class DocumentUrlResponseDTO(BaseModel):
    invoice_id: int = Field(..., description="Invoice ID")
    generated_document_url: Optional[str] = Field(default=None)
    source_document_url: Optional[str] = Field(default=None)


class EmailDeliveryResponseDTO(BaseModel):
    """Response DTO for SendInvoiceEmail"""

    invoice_id: int = Field(..., description="Invoice ID")
    invoice_number: str = Field(..., description="Invoice number")
    recipient: str = Field(..., description="Client email address")
    status: str = Field(..., description="Invoice status after delivery")
    document_ref: str = Field(..., description="Blob handle of the attached PDF")
    sent_at: datetime = Field(..., description="Delivery timestamp")


class MonthlyTemplateResponseDTO(BaseModel):
    template_id: int
    client_id: int
    client_name: Optional[str] = Field(None, description="Set by listings; None when the client is gone")
    year: int
    month: int
    items: List[dict] = Field(default_factory=list)
    last_invoice_id: Optional[int] = None


class CreateMonthlyTemplatesResultDTO(BaseModel):
    """Result of building the templates of a month"""

    year: int
    month: int
    created: List[MonthlyTemplateResponseDTO] = Field(default_factory=list)
    skipped_clients: List[int] = Field(
        default_factory=list,
        description="Clients that already had a template for the month"
    )


class ServicePropagationResultDTO(BaseModel):
    service_id: int
    updated_invoice_ids: List[int] = Field(default_factory=list)


class MonthlyRevenueDTO(BaseModel):
    month_key: str = Field(..., description="YYYY-MM")
    label: str = Field(..., description="French month label, e.g. 'mai 2025'")
    total: Decimal


class RevenueStatisticsDTO(BaseModel):
    monthly: List[MonthlyRevenueDTO] = Field(default_factory=list)
    last_quarter_label: str = Field(..., description="e.g. 'T1 2025'")
    last_quarter_total: Decimal = Field(..., description="Revenue of the previous full quarter")


class MonthlyTemplateListResponseDTO(BaseModel):
    """Templates of one month with their client names"""

    year: int
    month: int
    templates: List[MonthlyTemplateResponseDTO] = Field(default_factory=list)
