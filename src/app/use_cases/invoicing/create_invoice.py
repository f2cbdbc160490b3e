"""CreateInvoice Use Case

Builds and persists a complete invoice: validated line items, derived
total, generated number and due date.
"""

import logging
from datetime import datetime
from dateutil.relativedelta import relativedelta
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.client_repository import ClientRepository
from src.app.repositories.invoice_repository import InvoiceRepository
from src.domain.errors import DuplicateInvoiceNumberError, InvoicingError
from src.domain.invoice import Invoice, InvoiceStatus
from src.domain.line_item import sum_totals, validate_line_items
from .common import (
    ErrorCode,
    domain_error,
    load_owned_client,
    not_found_error,
    unauthenticated_error,
)
from .dtos import CreateInvoiceCommandDTO, InvoiceResponseDTO
from .numbering import InvoiceNumbering

logger = logging.getLogger(__name__)


def default_due_date(invoice_date: datetime) -> datetime:
    """One calendar month after the invoice date (clamped to the month end)"""
    return invoice_date + relativedelta(months=1)


class CreateInvoice:
    """
    Use Case: Create an invoice

    Business Rules:
    1. Items must be non-empty and every discounted item needs a description
    2. The client must exist and belong to the owner
    3. total_amount = sum of item totals, unless a manual total is supplied
    4. Number is generated as YYYYMM## unless supplied (then it must be unused)
    5. due_date defaults to invoice_date + 1 month, status defaults to draft
    6. Nothing is written when any rule fails

    Flow:
    1. Validate owner and items
    2. Load client
    3. Resolve dates and total
    4. Insert with a number, retrying on a number collision
    5. Commit transaction
    6. Return response
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        client_repo: ClientRepository,
        max_number_retries: int = 3,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.client_repo = client_repo
        self.numbering = InvoiceNumbering(invoice_repo)
        self.max_number_retries = max(1, max_number_retries)

    async def execute(self, command: CreateInvoiceCommandDTO) -> Result[InvoiceResponseDTO]:
        """
        Execute invoice creation

        Args:
            command: CreateInvoiceCommandDTO with owner, client, items and overrides

        Returns:
            Result[InvoiceResponseDTO]: Success with invoice details or error
        """
        try:
            # Step 1: Validate owner and items before touching the store
            if not command.owner_id:
                return Return.err(unauthenticated_error())

            items = validate_line_items(command.items)

            # Step 2: Client must be one of the owner's clients
            client = await load_owned_client(self.client_repo, command.client_id, command.owner_id)
            if client is None:
                return Return.err(not_found_error("Client", command.client_id))

            # Step 3: Resolve dates and total
            invoice_date = command.invoice_date or datetime.utcnow()
            due_date = command.due_date or default_due_date(invoice_date)
            if command.total_amount is not None:
                total_amount = command.total_amount
            else:
                total_amount = sum_totals(items)

            def build(invoice_number: str) -> Invoice:
                return Invoice(
                    owner_id=command.owner_id,
                    client_id=command.client_id,
                    invoice_number=invoice_number,
                    invoice_date=invoice_date,
                    due_date=due_date,
                    status=command.status or InvoiceStatus.DRAFT,
                    total_amount=total_amount,
                    items=[item.to_storage() for item in items],
                    source_document_ref=command.source_document_ref,
                    sent_at=invoice_date if command.status in (InvoiceStatus.SENT, InvoiceStatus.PAID) else None,
                )

            # Step 4: Insert
            if command.invoice_number:
                await self.numbering.ensure_unique(command.owner_id, command.invoice_number)
                created_invoice = await self.invoice_repo.create(build(command.invoice_number))
            else:
                created_invoice = await self._create_with_generated_number(
                    command.owner_id, invoice_date, build
                )

            # Step 5: Commit transaction
            await self.uow.commit()

            logger.info(
                f"Invoice {created_invoice.invoice_number} created for owner {command.owner_id} "
                f"(total {created_invoice.total_amount}, status {created_invoice.status.value})"
            )

            # Step 6: Build response
            return Return.ok(InvoiceResponseDTO.from_entity(created_invoice))

        except InvoicingError as e:
            await self.uow.rollback()
            return Return.err(domain_error(e))

        except Exception as e:
            await self.uow.rollback()
            logger.exception("Invoice creation failed")
            return Return.err(
                Error(
                    code="CREATE_INVOICE_FAILED",
                    message="Failed to create invoice",
                    reason=str(e),
                )
            )

    async def _create_with_generated_number(self, owner_id, invoice_date, build) -> Invoice:
        last_error = None
        for attempt in range(1, self.max_number_retries + 1):
            invoice_number = await self.numbering.next_number(owner_id, invoice_date)
            try:
                return await self.invoice_repo.create(build(invoice_number))
            except DuplicateInvoiceNumberError as e:
                last_error = e
                logger.warning(
                    f"Invoice number {invoice_number} taken concurrently for owner {owner_id} "
                    f"(attempt {attempt}/{self.max_number_retries})"
                )
        raise last_error
