"""UpdateInvoice Use Case

Changes the client and/or items of a draft invoice.
"""

import logging
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.client_repository import ClientRepository
from src.app.repositories.invoice_repository import InvoiceRepository
from src.domain.errors import InvoicingError
from src.domain.invoice_lifecycle import ensure_editable
from src.domain.line_item import validate_line_items
from .common import (
    domain_error,
    load_owned_client,
    load_owned_invoice,
    not_found_error,
    unauthenticated_error,
)
from .dtos import InvoiceResponseDTO, UpdateInvoiceCommandDTO

logger = logging.getLogger(__name__)


class UpdateInvoice:
    """
    Use Case: Update a draft invoice

    Business Rules:
    1. Invoice must exist and belong to the caller
    2. Client and items can only change while the invoice is a draft
    3. Only supplied fields change
    4. total_amount is re-derived from the resulting items on every change
       (a manual import total does not survive an update)
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        client_repo: ClientRepository,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.client_repo = client_repo

    async def execute(self, command: UpdateInvoiceCommandDTO) -> Result[InvoiceResponseDTO]:
        try:
            if not command.owner_id:
                return Return.err(unauthenticated_error())

            invoice = await load_owned_invoice(self.invoice_repo, command.invoice_id, command.owner_id)
            if invoice is None:
                return Return.err(not_found_error("Invoice", command.invoice_id))

            changes_content = command.client_id is not None or command.items is not None
            if changes_content:
                ensure_editable(invoice)

            if command.client_id is not None and command.client_id != invoice.client_id:
                client = await load_owned_client(self.client_repo, command.client_id, command.owner_id)
                if client is None:
                    return Return.err(not_found_error("Client", command.client_id))
                invoice.client_id = client.id

            if changes_content:
                items = validate_line_items(
                    command.items if command.items is not None else invoice.line_items
                )
                invoice.replace_items(items)

            updated_invoice = await self.invoice_repo.update(invoice)
            await self.uow.commit()

            logger.info(f"Invoice {updated_invoice.invoice_number} updated by owner {command.owner_id}")
            return Return.ok(InvoiceResponseDTO.from_entity(updated_invoice))

        except InvoicingError as e:
            await self.uow.rollback()
            return Return.err(domain_error(e))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="UPDATE_INVOICE_FAILED",
                    message="Failed to update invoice",
                    reason=str(e),
                )
            )
