"""DuplicateInvoice Use Case"""

from libs.result import Result, Return
from src.app.repositories.invoice_repository import InvoiceRepository
from .common import load_owned_invoice, not_found_error, unauthenticated_error
from .create_invoice import CreateInvoice
from .dtos import CreateInvoiceCommandDTO, InvoiceResponseDTO


class DuplicateInvoice:
    """
    Use Case: Start a new draft from an existing invoice

    Client and items are copied; number, dates and status are fresh.
    """

    def __init__(self, invoice_repo: InvoiceRepository, create_invoice: CreateInvoice):
        self.invoice_repo = invoice_repo
        self.create_invoice = create_invoice

    async def execute(self, invoice_id: int, owner_id: str) -> Result[InvoiceResponseDTO]:
        if not owner_id:
            return Return.err(unauthenticated_error())

        source = await load_owned_invoice(self.invoice_repo, invoice_id, owner_id)
        if source is None:
            return Return.err(not_found_error("Invoice", invoice_id))

        return await self.create_invoice.execute(
            CreateInvoiceCommandDTO(
                owner_id=owner_id,
                client_id=source.client_id,
                items=source.line_items,
            )
        )
