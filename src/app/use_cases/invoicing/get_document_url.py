"""GetDocumentUrl Use Case"""

from libs.result import Result, Return, Error
from src.app.services.blob_storage import BlobStorage
from src.app.repositories.invoice_repository import InvoiceRepository
from .common import load_owned_invoice, not_found_error, unauthenticated_error
from .dtos import DocumentUrlResponseDTO


class GetDocumentUrl:
    """
    Use Case: Resolve URLs of the generated and uploaded documents of an invoice

    A document that was never produced resolves to None.
    """

    def __init__(self, invoice_repo: InvoiceRepository, blob_storage: BlobStorage):
        self.invoice_repo = invoice_repo
        self.blob_storage = blob_storage

    async def execute(self, invoice_id: int, owner_id: str) -> Result[DocumentUrlResponseDTO]:
        if not owner_id:
            return Return.err(unauthenticated_error())
        try:
            invoice = await load_owned_invoice(self.invoice_repo, invoice_id, owner_id)
            if invoice is None:
                return Return.err(not_found_error("Invoice", invoice_id))

            generated_url = None
            if invoice.generated_document_ref:
                generated_url = await self.blob_storage.get_url(invoice.generated_document_ref)
            source_url = None
            if invoice.source_document_ref:
                source_url = await self.blob_storage.get_url(invoice.source_document_ref)

            return Return.ok(
                DocumentUrlResponseDTO(
                    invoice_id=invoice.id,
                    generated_document_url=generated_url,
                    source_document_url=source_url,
                )
            )
        except Exception as e:
            return Return.err(
                Error(
                    code="GET_DOCUMENT_URL_FAILED",
                    message="Failed to resolve document URL",
                    reason=str(e),
                )
            )
