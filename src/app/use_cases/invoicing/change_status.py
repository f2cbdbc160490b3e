"""Invoice status use cases

TogglePaymentStatus flips sent <-> paid. MarkInvoiceSent moves a draft to
sent once it has been delivered.
"""

import logging
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.invoice_repository import InvoiceRepository
from src.domain.errors import InvoicingError
from src.domain.invoice_lifecycle import mark_sent, toggle_payment_status
from .common import domain_error, load_owned_invoice, not_found_error, unauthenticated_error
from .dtos import InvoiceResponseDTO

logger = logging.getLogger(__name__)


class TogglePaymentStatus:
    """
    Use Case: Mark a sent invoice paid, or correct a paid invoice back to sent

    Business Rules:
    1. Invoice must exist and belong to the caller
    2. Only sent and paid invoices can be toggled
    """

    def __init__(self, uow: UnitOfWork, invoice_repo: InvoiceRepository):
        self.uow = uow
        self.invoice_repo = invoice_repo

    async def execute(self, invoice_id: int, owner_id: str) -> Result[InvoiceResponseDTO]:
        try:
            if not owner_id:
                return Return.err(unauthenticated_error())

            invoice = await load_owned_invoice(self.invoice_repo, invoice_id, owner_id)
            if invoice is None:
                return Return.err(not_found_error("Invoice", invoice_id))

            new_status = toggle_payment_status(invoice)
            updated_invoice = await self.invoice_repo.update(invoice)
            await self.uow.commit()

            logger.info(f"Invoice {invoice.invoice_number} is now {new_status.value}")
            return Return.ok(InvoiceResponseDTO.from_entity(updated_invoice))

        except InvoicingError as e:
            await self.uow.rollback()
            return Return.err(domain_error(e))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="TOGGLE_STATUS_FAILED",
                    message="Failed to change invoice status",
                    reason=str(e),
                )
            )


class MarkInvoiceSent:
    """
    Use Case: Record that a draft invoice was delivered

    Sent and paid invoices are returned unchanged.
    """

    def __init__(self, uow: UnitOfWork, invoice_repo: InvoiceRepository):
        self.uow = uow
        self.invoice_repo = invoice_repo

    async def execute(self, invoice_id: int, owner_id: str) -> Result[InvoiceResponseDTO]:
        try:
            if not owner_id:
                return Return.err(unauthenticated_error())

            invoice = await load_owned_invoice(self.invoice_repo, invoice_id, owner_id)
            if invoice is None:
                return Return.err(not_found_error("Invoice", invoice_id))

            if mark_sent(invoice):
                invoice = await self.invoice_repo.update(invoice)
                await self.uow.commit()
                logger.info(f"Invoice {invoice.invoice_number} marked as sent")

            return Return.ok(InvoiceResponseDTO.from_entity(invoice))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="MARK_SENT_FAILED",
                    message="Failed to mark invoice as sent",
                    reason=str(e),
                )
            )
