"""Invoice API Routes

FastAPI routes for invoice operations: creation, import, editing, status
changes, PDF documents and email delivery.
"""

import base64
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import Response
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.api.error import ClientError
from src.api.schemas.invoice_request import (
    CreateInvoiceRequestSchema,
    ImportInvoiceRequestSchema,
    SendInvoiceEmailRequestSchema,
    UpdateInvoiceRequestSchema,
)
from src.app.services.blob_storage import BlobStorage
from src.app.services.email_transport import EmailTransport
from src.app.services.pdf_service import PdfService
from src.app.use_cases.invoicing.change_status import MarkInvoiceSent, TogglePaymentStatus
from src.app.use_cases.invoicing.create_invoice import CreateInvoice
from src.app.use_cases.invoicing.delete_invoice import DeleteInvoice
from src.app.use_cases.invoicing.dtos import (
    CreateInvoiceCommandDTO,
    DocumentUrlResponseDTO,
    EmailDeliveryResponseDTO,
    ImportInvoiceCommandDTO,
    InvoiceDocumentResponseDTO,
    InvoiceResponseDTO,
    SendInvoiceEmailCommandDTO,
    UpdateInvoiceCommandDTO,
)
from src.app.use_cases.invoicing.duplicate_invoice import DuplicateInvoice
from src.app.use_cases.invoicing.generate_invoice_pdf import GenerateInvoicePdf
from src.app.use_cases.invoicing.get_document_url import GetDocumentUrl
from src.app.use_cases.invoicing.get_invoices import GetInvoice, ListInvoices
from src.app.use_cases.invoicing.import_invoice import ImportInvoice
from src.app.use_cases.invoicing.send_invoice_email import SendInvoiceEmail
from src.app.use_cases.invoicing.update_invoice import UpdateInvoice
from src.adapter.repositories.client_repository import SqlAlchemyClientRepository
from src.adapter.repositories.invoice_repository import SqlAlchemyInvoiceRepository
from src.adapter.repositories.issuer_profile_repository import SqlAlchemyIssuerProfileRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import (
    get_blob_storage,
    get_email_transport,
    get_owner_id,
    get_pdf_service,
    get_session,
)
from src.domain.invoice import InvoiceStatus

router = APIRouter(prefix="/invoices", tags=["Invoices"])

NOT_FOUND_RESPONSE = {
    "description": "Invoice not found",
    "content": {
        "application/json": {
            "example": {
                "error": {
                    "code": "NOT_FOUND",
                    "message": "Invoice with ID 123 not found"
                }
            }
        }
    }
}


def build_create_invoice(session: AsyncSession) -> CreateInvoice:
    return CreateInvoice(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyClientRepository(session),
        max_number_retries=ApplicationConfig.INVOICE_NUMBER_MAX_RETRIES,
    )


def build_generate_pdf(
    session: AsyncSession, pdf_service: PdfService, blob_storage: BlobStorage
) -> GenerateInvoicePdf:
    return GenerateInvoicePdf(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyClientRepository(session),
        SqlAlchemyIssuerProfileRepository(session),
        pdf_service,
        blob_storage,
    )


def unwrap(result):
    if result.is_err():
        raise ClientError.from_error(result.error)
    return result.value


@router.post(
    "",
    response_model=InvoiceResponseDTO,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {
            "description": "Validation error",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "VALIDATION_FAILED",
                            "message": "Item 1 ('Développement') has a discount but no discount description"
                        }
                    }
                }
            }
        },
        404: {"description": "Client not found"},
    }
)
async def create_invoice(
    request: CreateInvoiceRequestSchema,
    owner_id: str = Depends(get_owner_id),
    session: AsyncSession = Depends(get_session),
):
    """
    Create a draft invoice.

    Line totals and the invoice total are computed from the items; the number
    (YYYYMM##) is generated from the invoice date and the due date is one
    month later.

    **Returns:**
    - 201: Invoice created
    - 400: Empty items or discount without description
    - 404: Client not found
    """
    use_case = build_create_invoice(session)
    result = await use_case.execute(
        CreateInvoiceCommandDTO(
            owner_id=owner_id,
            client_id=request.client_id,
            items=request.items,
            invoice_date=request.invoice_date,
        )
    )
    return unwrap(result)


@router.post(
    "/import",
    response_model=InvoiceResponseDTO,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"description": "Invoice number already used"}},
)
async def import_invoice(
    request: ImportInvoiceRequestSchema,
    owner_id: str = Depends(get_owner_id),
    session: AsyncSession = Depends(get_session),
):
    """
    Register an invoice issued outside the service (uploaded PDF).

    The number and total printed on the document are kept as-is.
    """
    use_case = ImportInvoice(build_create_invoice(session))
    result = await use_case.execute(
        ImportInvoiceCommandDTO(owner_id=owner_id, **request.model_dump())
    )
    return unwrap(result)


@router.get("", response_model=List[InvoiceResponseDTO])
async def list_invoices(
    status_filter: Optional[InvoiceStatus] = Query(default=None, alias="status"),
    client_id: Optional[int] = Query(default=None),
    limit: int = Query(default=50, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    owner_id: str = Depends(get_owner_id),
    session: AsyncSession = Depends(get_session),
):
    use_case = ListInvoices(SqlAlchemyInvoiceRepository(session))
    result = await use_case.execute(
        owner_id, status=status_filter, client_id=client_id, limit=limit, offset=offset
    )
    return unwrap(result)


@router.get(
    "/{invoice_id}",
    response_model=InvoiceResponseDTO,
    responses={404: NOT_FOUND_RESPONSE},
)
async def get_invoice(
    invoice_id: int,
    owner_id: str = Depends(get_owner_id),
    session: AsyncSession = Depends(get_session),
):
    use_case = GetInvoice(SqlAlchemyInvoiceRepository(session))
    return unwrap(await use_case.execute(invoice_id, owner_id))


@router.patch(
    "/{invoice_id}",
    response_model=InvoiceResponseDTO,
    responses={404: NOT_FOUND_RESPONSE},
)
async def update_invoice(
    invoice_id: int,
    request: UpdateInvoiceRequestSchema,
    owner_id: str = Depends(get_owner_id),
    session: AsyncSession = Depends(get_session),
):
    """
    Update the client and/or items of a draft invoice.

    **Returns:**
    - 200: Invoice updated, total re-derived from the items
    - 400: Invoice is no longer a draft, or invalid items
    - 404: Invoice or client not found
    """
    use_case = UpdateInvoice(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyClientRepository(session),
    )
    result = await use_case.execute(
        UpdateInvoiceCommandDTO(
            invoice_id=invoice_id,
            owner_id=owner_id,
            client_id=request.client_id,
            items=request.items,
        )
    )
    return unwrap(result)


@router.delete(
    "/{invoice_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: NOT_FOUND_RESPONSE},
)
async def delete_invoice(
    invoice_id: int,
    owner_id: str = Depends(get_owner_id),
    session: AsyncSession = Depends(get_session),
    blob_storage: BlobStorage = Depends(get_blob_storage),
):
    """Delete a draft invoice and its generated PDF."""
    use_case = DeleteInvoice(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyInvoiceRepository(session),
        blob_storage,
    )
    unwrap(await use_case.execute(invoice_id, owner_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{invoice_id}/toggle-payment",
    response_model=InvoiceResponseDTO,
    responses={
        404: NOT_FOUND_RESPONSE,
        409: {
            "description": "Invoice is still a draft",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "INVALID_TRANSITION",
                            "message": "Only sent or paid invoices can change payment status (current: draft)"
                        }
                    }
                }
            }
        },
    }
)
async def toggle_payment_status(
    invoice_id: int,
    owner_id: str = Depends(get_owner_id),
    session: AsyncSession = Depends(get_session),
):
    """Mark a sent invoice as paid, or a paid invoice back to sent."""
    use_case = TogglePaymentStatus(SqlAlchemyUnitOfWork(session), SqlAlchemyInvoiceRepository(session))
    return unwrap(await use_case.execute(invoice_id, owner_id))


@router.post(
    "/{invoice_id}/pdf",
    response_model=InvoiceDocumentResponseDTO,
    responses={404: NOT_FOUND_RESPONSE},
)
async def generate_invoice_pdf(
    invoice_id: int,
    owner_id: str = Depends(get_owner_id),
    session: AsyncSession = Depends(get_session),
    pdf_service: PdfService = Depends(get_pdf_service),
    blob_storage: BlobStorage = Depends(get_blob_storage),
):
    """
    Generate and store the invoice PDF.

    The response carries the document base64 encoded together with its URL.
    """
    use_case = build_generate_pdf(session, pdf_service, blob_storage)
    return unwrap(await use_case.execute(invoice_id, owner_id))


@router.get(
    "/{invoice_id}/pdf",
    responses={
        200: {
            "content": {"application/pdf": {}},
            "description": "PDF document"
        },
        404: NOT_FOUND_RESPONSE,
    }
)
async def download_invoice_pdf(
    invoice_id: int,
    owner_id: str = Depends(get_owner_id),
    session: AsyncSession = Depends(get_session),
    pdf_service: PdfService = Depends(get_pdf_service),
    blob_storage: BlobStorage = Depends(get_blob_storage),
):
    """Generate the invoice PDF and return it as a file download."""
    use_case = build_generate_pdf(session, pdf_service, blob_storage)
    document = unwrap(await use_case.execute(invoice_id, owner_id))

    return Response(
        content=base64.b64decode(document.pdf_base64),
        media_type="application/pdf",
        headers={
            "Content-Disposition": f"attachment; filename={document.filename}"
        }
    )


@router.get(
    "/{invoice_id}/document-url",
    response_model=DocumentUrlResponseDTO,
    responses={404: NOT_FOUND_RESPONSE},
)
async def get_document_url(
    invoice_id: int,
    owner_id: str = Depends(get_owner_id),
    session: AsyncSession = Depends(get_session),
    blob_storage: BlobStorage = Depends(get_blob_storage),
):
    use_case = GetDocumentUrl(SqlAlchemyInvoiceRepository(session), blob_storage)
    return unwrap(await use_case.execute(invoice_id, owner_id))


@router.post(
    "/{invoice_id}/send",
    response_model=EmailDeliveryResponseDTO,
    responses={
        404: NOT_FOUND_RESPONSE,
        502: {
            "description": "Email transport failure",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "EMAIL_DELIVERY_FAILED",
                            "message": "Failed to send invoice email"
                        }
                    }
                }
            }
        },
    }
)
async def send_invoice_email(
    invoice_id: int,
    request: SendInvoiceEmailRequestSchema,
    owner_id: str = Depends(get_owner_id),
    session: AsyncSession = Depends(get_session),
    pdf_service: PdfService = Depends(get_pdf_service),
    blob_storage: BlobStorage = Depends(get_blob_storage),
    email_transport: EmailTransport = Depends(get_email_transport),
):
    """
    Email the invoice PDF to the client (blind copy to the issuer).

    The invoice moves from draft to sent once the message is accepted.
    """
    invoice_repo = SqlAlchemyInvoiceRepository(session)
    use_case = SendInvoiceEmail(
        invoice_repo,
        SqlAlchemyClientRepository(session),
        SqlAlchemyIssuerProfileRepository(session),
        build_generate_pdf(session, pdf_service, blob_storage),
        MarkInvoiceSent(SqlAlchemyUnitOfWork(session), invoice_repo),
        email_transport,
        from_email=ApplicationConfig.SMTP_FROM_EMAIL,
    )
    result = await use_case.execute(
        SendInvoiceEmailCommandDTO(
            invoice_id=invoice_id,
            owner_id=owner_id,
            custom_message=request.custom_message,
        )
    )
    return unwrap(result)


@router.post(
    "/{invoice_id}/duplicate",
    response_model=InvoiceResponseDTO,
    status_code=status.HTTP_201_CREATED,
    responses={404: NOT_FOUND_RESPONSE},
)
async def duplicate_invoice(
    invoice_id: int,
    owner_id: str = Depends(get_owner_id),
    session: AsyncSession = Depends(get_session),
):
    """Copy client and items of an invoice into a new draft."""
    use_case = DuplicateInvoice(SqlAlchemyInvoiceRepository(session), build_create_invoice(session))
    return unwrap(await use_case.execute(invoice_id, owner_id))
