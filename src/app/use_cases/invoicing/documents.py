"""Helpers shared by the use cases that produce invoice documents"""

import asyncio
import logging
import re
from typing import Optional
from src.app.services.pdf_service import DocumentGenerationError, PdfService
from src.domain.client import Client
from src.domain.invoice import Invoice
from src.domain.issuer_profile import IssuerProfile

logger = logging.getLogger(__name__)

_UNSAFE_FILENAME_CHARS = re.compile(r"[^a-zA-Z0-9]")


def document_filename(invoice: Invoice, client: Optional[Client]) -> str:
    """Facture-<number>-<client name, non alphanumerics replaced by '-'>.pdf"""
    if client is None or not client.name:
        return f"Facture-{invoice.invoice_number}.pdf"
    return f"Facture-{invoice.invoice_number}-{_UNSAFE_FILENAME_CHARS.sub('-', client.name)}.pdf"


async def render_invoice_pdf(
    pdf_service: PdfService,
    invoice: Invoice,
    client: Optional[Client],
    issuer: IssuerProfile,
) -> bytes:
    """
    Render off the event loop

    Raises:
        DocumentGenerationError: If the renderer failed
    """
    try:
        return await asyncio.to_thread(pdf_service.render_invoice, invoice, client, issuer)
    except Exception as e:
        logger.exception(f"Rendering invoice {invoice.invoice_number} failed")
        raise DocumentGenerationError(str(e)) from e
