"""SendInvoiceEmail Use Case

Emails the freshly generated PDF of an invoice to its client, then marks
the invoice as sent.
"""

import base64
import logging
from datetime import datetime
from typing import Optional
from libs.result import Result, Return, Error
from src.app.services.email_transport import (
    EmailAttachment,
    EmailDeliveryError,
    EmailTransport,
    OutgoingEmail,
)
from src.app.repositories.client_repository import ClientRepository
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.issuer_profile_repository import IssuerProfileRepository
from src.domain.client import Client
from src.domain.formatting import format_currency, month_name
from src.domain.invoice import Invoice
from src.domain.issuer_profile import IssuerProfile
from .change_status import MarkInvoiceSent
from .common import (
    ErrorCode,
    load_owned_client,
    load_owned_invoice,
    not_found_error,
    unauthenticated_error,
)
from .dtos import EmailDeliveryResponseDTO, SendInvoiceEmailCommandDTO
from .generate_invoice_pdf import GenerateInvoicePdf

logger = logging.getLogger(__name__)

GREETING = "Bonjour"


def email_subject(invoice: Invoice) -> str:
    return f"Facture n°{invoice.invoice_number}"


def email_body(
    invoice: Invoice,
    client: Client,
    issuer: IssuerProfile,
    custom_message: Optional[str] = None,
) -> str:
    lines = [f"{GREETING} {client.contact_name},"]
    if custom_message and custom_message.strip():
        lines += ["", custom_message.strip()]
    lines += [
        "",
        f"Voici la facture n°{invoice.invoice_number} du mois de {month_name(invoice.invoice_date)} "
        f"d'un montant de {format_currency(invoice.total_amount)}.",
        "",
        "En te souhaitant une excellente journée,",
        "",
        issuer.first_name,
    ]
    return "\n".join(lines)


class SendInvoiceEmail:
    """
    Use Case: Send an invoice to its client by email

    Business Rules:
    1. Invoice, issuer profile and client must exist and belong to the caller
    2. The PDF is regenerated so the attachment matches the current data
    3. The issuer gets a blind copy
    4. The invoice is marked sent only after the transport accepted the message

    Flow:
    1. Load invoice, issuer profile and client
    2. Generate and store the PDF
    3. Send email
    4. Mark invoice as sent
    """

    def __init__(
        self,
        invoice_repo: InvoiceRepository,
        client_repo: ClientRepository,
        issuer_profile_repo: IssuerProfileRepository,
        generate_pdf: GenerateInvoicePdf,
        mark_sent: MarkInvoiceSent,
        email_transport: EmailTransport,
        from_email: str,
    ):
        self.invoice_repo = invoice_repo
        self.client_repo = client_repo
        self.issuer_profile_repo = issuer_profile_repo
        self.generate_pdf = generate_pdf
        self.mark_sent = mark_sent
        self.email_transport = email_transport
        self.from_email = from_email

    async def execute(self, command: SendInvoiceEmailCommandDTO) -> Result[EmailDeliveryResponseDTO]:
        if not command.owner_id:
            return Return.err(unauthenticated_error())

        try:
            # Step 1: Everything the message needs must exist
            invoice = await load_owned_invoice(self.invoice_repo, command.invoice_id, command.owner_id)
            if invoice is None:
                return Return.err(not_found_error("Invoice", command.invoice_id))

            issuer = await self.issuer_profile_repo.get_by_owner(command.owner_id)
            if issuer is None:
                return Return.err(not_found_error("IssuerProfile", command.owner_id))

            client = await load_owned_client(self.client_repo, invoice.client_id, command.owner_id)
            if client is None:
                return Return.err(not_found_error("Client", invoice.client_id))

            # Step 2: Generate the attachment
            document_result = await self.generate_pdf.execute(command.invoice_id, command.owner_id)
            if document_result.is_err():
                return Return.err(document_result.error)
            document = document_result.value

            # Step 3: Send
            message = OutgoingEmail(
                from_address=f'"{issuer.name}" <{self.from_email}>',
                to=client.email,
                bcc=issuer.email or None,
                subject=email_subject(invoice),
                body=email_body(invoice, client, issuer, command.custom_message),
                attachments=[
                    EmailAttachment(
                        filename=document.filename,
                        content=base64.b64decode(document.pdf_base64),
                        mime_type="application/pdf",
                    )
                ],
            )
            await self.email_transport.send(message)
            logger.info(f"Invoice {invoice.invoice_number} emailed to {client.email}")

        except EmailDeliveryError as e:
            logger.error(f"Email delivery failed for invoice {command.invoice_id}: {e}")
            return Return.err(
                Error(
                    code=ErrorCode.EMAIL_DELIVERY_FAILED,
                    message="Failed to send invoice email",
                    reason=str(e),
                )
            )

        except Exception as e:
            return Return.err(
                Error(
                    code="SEND_INVOICE_EMAIL_FAILED",
                    message="Failed to send invoice email",
                    reason=str(e),
                )
            )

        # Step 4: Delivery succeeded, record it
        sent_result = await self.mark_sent.execute(command.invoice_id, command.owner_id)
        if sent_result.is_err():
            return Return.err(sent_result.error)

        return Return.ok(
            EmailDeliveryResponseDTO(
                invoice_id=invoice.id,
                invoice_number=invoice.invoice_number,
                recipient=client.email,
                status=sent_result.value.status,
                document_ref=document.document_ref,
                sent_at=datetime.utcnow(),
            )
        )
