"""DeleteInvoice Use Case

Deletes a draft invoice and releases its generated document.
"""

import logging
from libs.result import Result, Return, Error
from src.app.services.blob_storage import BlobStorage
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.invoice_repository import InvoiceRepository
from src.domain.errors import InvoicingError
from src.domain.invoice_lifecycle import ensure_deletable
from .common import domain_error, load_owned_invoice, not_found_error, unauthenticated_error

logger = logging.getLogger(__name__)


class DeleteInvoice:
    """
    Use Case: Delete a draft invoice

    Business Rules:
    1. Invoice must exist and belong to the caller
    2. Only drafts can be deleted (sent and paid invoices are legal records)
    3. The generated PDF blob is deleted once the row is gone; a storage
       failure at that point is logged and does not fail the deletion
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        blob_storage: BlobStorage,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.blob_storage = blob_storage

    async def execute(self, invoice_id: int, owner_id: str) -> Result[None]:
        try:
            if not owner_id:
                return Return.err(unauthenticated_error())

            invoice = await load_owned_invoice(self.invoice_repo, invoice_id, owner_id)
            if invoice is None:
                return Return.err(not_found_error("Invoice", invoice_id))

            ensure_deletable(invoice)

            document_ref = invoice.generated_document_ref
            await self.invoice_repo.delete(invoice)
            await self.uow.commit()

            logger.info(f"Invoice {invoice.invoice_number} deleted by owner {owner_id}")
            if document_ref:
                await self._release(document_ref)
            return Return.ok(None)

        except InvoicingError as e:
            await self.uow.rollback()
            return Return.err(domain_error(e))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="DELETE_INVOICE_FAILED",
                    message="Failed to delete invoice",
                    reason=str(e),
                )
            )

    async def _release(self, document_ref: str) -> None:
        try:
            await self.blob_storage.delete(document_ref)
        except Exception as e:
            logger.warning(f"Invoice deleted but its document blob {document_ref} was kept: {e}")
