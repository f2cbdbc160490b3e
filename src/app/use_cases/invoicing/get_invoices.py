"""Invoice query use cases"""

from typing import List, Optional
from libs.result import Result, Return, Error
from src.app.repositories.invoice_repository import InvoiceRepository
from src.domain.invoice import InvoiceStatus
from .common import load_owned_invoice, not_found_error, unauthenticated_error
from .dtos import InvoiceResponseDTO


class GetInvoice:

    def __init__(self, invoice_repo: InvoiceRepository):
        self.invoice_repo = invoice_repo

    async def execute(self, invoice_id: int, owner_id: str) -> Result[InvoiceResponseDTO]:
        if not owner_id:
            return Return.err(unauthenticated_error())
        try:
            invoice = await load_owned_invoice(self.invoice_repo, invoice_id, owner_id)
        except Exception as e:
            return Return.err(Error(code="GET_INVOICE_FAILED", message="Failed to load invoice", reason=str(e)))
        if invoice is None:
            return Return.err(not_found_error("Invoice", invoice_id))
        return Return.ok(InvoiceResponseDTO.from_entity(invoice))


class ListInvoices:
    """Owner's invoices, most recent first, optionally filtered"""

    def __init__(self, invoice_repo: InvoiceRepository):
        self.invoice_repo = invoice_repo

    async def execute(
        self,
        owner_id: str,
        status: Optional[InvoiceStatus] = None,
        client_id: Optional[int] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> Result[List[InvoiceResponseDTO]]:
        if not owner_id:
            return Return.err(unauthenticated_error())
        try:
            invoices = await self.invoice_repo.list_by_owner(
                owner_id, status=status, client_id=client_id, limit=limit, offset=offset
            )
        except Exception as e:
            return Return.err(Error(code="LIST_INVOICES_FAILED", message="Failed to list invoices", reason=str(e)))
        return Return.ok([InvoiceResponseDTO.from_entity(invoice) for invoice in invoices])
