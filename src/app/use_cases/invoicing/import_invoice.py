"""ImportInvoice Use Case

Registers an invoice that was issued outside the application (uploaded PDF).
"""

from libs.result import Result
from .create_invoice import CreateInvoice
from .dtos import CreateInvoiceCommandDTO, ImportInvoiceCommandDTO, InvoiceResponseDTO


class ImportInvoice:
    """
    Use Case: Import an already issued invoice

    Business Rules:
    1. The printed number is kept and must not already exist for the owner
    2. The printed total is trusted as-is (items are informational)
    3. The uploaded document is linked as source document
    4. Status defaults to sent since the paperwork was already issued
    """

    def __init__(self, create_invoice: CreateInvoice):
        self.create_invoice = create_invoice

    async def execute(self, command: ImportInvoiceCommandDTO) -> Result[InvoiceResponseDTO]:
        return await self.create_invoice.execute(
            CreateInvoiceCommandDTO(
                owner_id=command.owner_id,
                client_id=command.client_id,
                items=command.items,
                invoice_number=command.invoice_number,
                invoice_date=command.invoice_date,
                due_date=command.due_date,
                status=command.status,
                total_amount=command.total_amount,
                source_document_ref=command.source_document_ref,
            )
        )
