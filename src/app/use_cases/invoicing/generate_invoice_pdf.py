"""GenerateInvoicePdf Use Case

Renders an invoice, stores the PDF and records its blob handle.
"""

import base64
import logging
from datetime import datetime
from libs.result import Result, Return, Error
from src.app.services.blob_storage import BlobStorage
from src.app.services.pdf_service import DocumentGenerationError, PdfService
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.client_repository import ClientRepository
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.issuer_profile_repository import IssuerProfileRepository
from .common import (
    ErrorCode,
    load_owned_client,
    load_owned_invoice,
    not_found_error,
    unauthenticated_error,
)
from .documents import document_filename, render_invoice_pdf
from .dtos import InvoiceDocumentResponseDTO

logger = logging.getLogger(__name__)


class GenerateInvoicePdf:
    """
    Use Case: Generate the PDF of an invoice

    Business Rules:
    1. Invoice must exist and belong to the caller
    2. The caller's issuer profile is required
    3. A missing client is rendered with placeholder text
    4. The new document replaces the previously generated one

    Flow:
    1. Load invoice, issuer profile and client
    2. Render PDF
    3. Store blob and record its handle
    4. Commit transaction, then delete the replaced blob
    5. Return the document
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        client_repo: ClientRepository,
        issuer_profile_repo: IssuerProfileRepository,
        pdf_service: PdfService,
        blob_storage: BlobStorage,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.client_repo = client_repo
        self.issuer_profile_repo = issuer_profile_repo
        self.pdf_service = pdf_service
        self.blob_storage = blob_storage

    async def execute(self, invoice_id: int, owner_id: str) -> Result[InvoiceDocumentResponseDTO]:
        stored_handle = None
        committed = False
        try:
            if not owner_id:
                return Return.err(unauthenticated_error())

            # Step 1: Load everything the layout needs
            invoice = await load_owned_invoice(self.invoice_repo, invoice_id, owner_id)
            if invoice is None:
                return Return.err(not_found_error("Invoice", invoice_id))

            issuer = await self.issuer_profile_repo.get_by_owner(owner_id)
            if issuer is None:
                return Return.err(not_found_error("IssuerProfile", owner_id))

            client = await load_owned_client(self.client_repo, invoice.client_id, owner_id)
            if client is None:
                logger.warning(f"Client {invoice.client_id} of invoice {invoice.invoice_number} not found")

            # Step 2: Render
            pdf_bytes = await render_invoice_pdf(self.pdf_service, invoice, client, issuer)

            # Step 3: Store and record
            stored_handle = await self.blob_storage.store(pdf_bytes, content_type="application/pdf")
            document_url = await self.blob_storage.get_url(stored_handle)
            previous_handle = invoice.generated_document_ref
            generated_at = datetime.utcnow()
            invoice.generated_document_ref = stored_handle
            invoice.updated_at = generated_at
            await self.invoice_repo.update(invoice)

            # Step 4: Commit, then release the replaced document
            await self.uow.commit()
            committed = True
            if previous_handle and previous_handle != stored_handle:
                await self._release(previous_handle)

            logger.info(f"PDF generated for invoice {invoice.invoice_number} ({len(pdf_bytes)} bytes)")

            # Step 5: Build response
            return Return.ok(
                InvoiceDocumentResponseDTO(
                    invoice_id=invoice.id,
                    invoice_number=invoice.invoice_number,
                    document_ref=stored_handle,
                    document_url=document_url,
                    filename=document_filename(invoice, client),
                    pdf_base64=base64.b64encode(pdf_bytes).decode("ascii"),
                    generated_at=generated_at,
                )
            )

        except DocumentGenerationError as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code=ErrorCode.DOCUMENT_GENERATION_FAILED,
                    message="Failed to render invoice PDF",
                    reason=str(e),
                )
            )

        except Exception as e:
            await self.uow.rollback()
            # Once committed the invoice references stored_handle
            if stored_handle and not committed:
                await self._release(stored_handle)
            return Return.err(
                Error(
                    code="GENERATE_PDF_FAILED",
                    message="Failed to generate invoice PDF",
                    reason=str(e),
                )
            )

    async def _release(self, handle: str) -> None:
        try:
            await self.blob_storage.delete(handle)
        except Exception as e:
            logger.warning(f"Could not delete document blob {handle}: {e}")
