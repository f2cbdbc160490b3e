"""Invoice status lifecycle

    draft --(mark sent)--> sent <--(toggle)--> paid

Drafts are the only editable and deletable invoices. An invoice never goes
back to draft.
"""

from datetime import datetime
from typing import Optional

from src.domain.errors import InvalidTransitionError, ValidationFailedError
from src.domain.invoice import Invoice, InvoiceStatus


def ensure_editable(invoice: Invoice) -> None:
    if invoice.status != InvoiceStatus.DRAFT:
        raise ValidationFailedError(
            f"Invoice {invoice.invoice_number} is {invoice.status.value}; "
            f"client and items can only be changed on drafts"
        )


def ensure_deletable(invoice: Invoice) -> None:
    if invoice.status != InvoiceStatus.DRAFT:
        raise ValidationFailedError(
            f"Invoice {invoice.invoice_number} is {invoice.status.value}; only drafts can be deleted"
        )


def toggle_payment_status(invoice: Invoice, now: Optional[datetime] = None) -> InvoiceStatus:
    """
    Flip a sent invoice to paid, or a paid invoice back to sent

    Raises:
        InvalidTransitionError: For any other status
    """
    now = now or datetime.utcnow()
    if invoice.status == InvoiceStatus.SENT:
        invoice.status = InvoiceStatus.PAID
        invoice.paid_at = now
    elif invoice.status == InvoiceStatus.PAID:
        invoice.status = InvoiceStatus.SENT
        invoice.paid_at = None
    else:
        raise InvalidTransitionError(
            f"Cannot toggle payment status of a {invoice.status.value} invoice"
        )
    return invoice.status


def mark_sent(invoice: Invoice, now: Optional[datetime] = None) -> bool:
    """
    Move a draft to sent

    Returns:
        True if the status changed. Sent and paid invoices are left untouched.
    """
    if invoice.status != InvoiceStatus.DRAFT:
        return False
    invoice.status = InvoiceStatus.SENT
    invoice.sent_at = now or datetime.utcnow()
    return True
