"""Shared helpers of the invoicing use cases"""

from typing import Optional
from libs.result import Error
from src.app.repositories.client_repository import ClientRepository
from src.app.repositories.invoice_repository import InvoiceRepository
from src.domain.client import Client
from src.domain.errors import InvoicingError
from src.domain.invoice import Invoice


class ErrorCode:
    NOT_FOUND = "NOT_FOUND"
    UNAUTHENTICATED = "UNAUTHENTICATED"
    VALIDATION_FAILED = "VALIDATION_FAILED"
    DUPLICATE_INVOICE_NUMBER = "DUPLICATE_INVOICE_NUMBER"
    INVOICE_NUMBER_EXHAUSTED = "INVOICE_NUMBER_EXHAUSTED"
    INVALID_TRANSITION = "INVALID_TRANSITION"
    EMAIL_DELIVERY_FAILED = "EMAIL_DELIVERY_FAILED"
    DOCUMENT_GENERATION_FAILED = "DOCUMENT_GENERATION_FAILED"


def unauthenticated_error() -> Error:
    return Error(
        code=ErrorCode.UNAUTHENTICATED,
        message="No owner could be resolved for this request",
        reason="Missing owner identity",
    )


def not_found_error(entity: str, identifier) -> Error:
    return Error(
        code=ErrorCode.NOT_FOUND,
        message=f"{entity} with ID {identifier} not found",
        reason=f"{entity} does not exist or belongs to another owner",
    )


def domain_error(exc: InvoicingError) -> Error:
    return Error(code=exc.code, message=exc.message, reason=type(exc).__name__)


async def load_owned_invoice(
    invoice_repo: InvoiceRepository, invoice_id: int, owner_id: str
) -> Optional[Invoice]:
    """Invoice by ID, or None if it is missing or owned by someone else"""
    invoice = await invoice_repo.get_by_id(invoice_id)
    if invoice is None or invoice.owner_id != owner_id:
        return None
    return invoice


async def load_owned_client(
    client_repo: ClientRepository, client_id: int, owner_id: str
) -> Optional[Client]:
    client = await client_repo.get_by_id(client_id)
    if client is None or client.owner_id != owner_id:
        return None
    return client
