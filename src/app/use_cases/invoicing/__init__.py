"""Invoicing use cases"""
from .change_status import MarkInvoiceSent, TogglePaymentStatus
from .create_invoice import CreateInvoice
from .delete_invoice import DeleteInvoice
from .duplicate_invoice import DuplicateInvoice
from .generate_invoice_pdf import GenerateInvoicePdf
from .get_document_url import GetDocumentUrl
from .get_invoices import GetInvoice, ListInvoices
from .import_invoice import ImportInvoice
from .monthly_templates import CreateInvoiceFromTemplate, CreateMonthlyTemplates, ListMonthlyTemplates
from .numbering import InvoiceNumbering
from .propagate_service_update import PropagateServiceUpdate
from .revenue_statistics import GetRevenueStatistics
from .send_invoice_email import SendInvoiceEmail
from .update_invoice import UpdateInvoice

__all__ = [
    "CreateInvoice",
    "ImportInvoice",
    "UpdateInvoice",
    "DeleteInvoice",
    "TogglePaymentStatus",
    "MarkInvoiceSent",
    "GetInvoice",
    "ListInvoices",
    "GenerateInvoicePdf",
    "GetDocumentUrl",
    "SendInvoiceEmail",
    "DuplicateInvoice",
    "CreateMonthlyTemplates",
    "CreateInvoiceFromTemplate",
    "ListMonthlyTemplates",
    "PropagateServiceUpdate",
    "GetRevenueStatistics",
    "InvoiceNumbering",
]
