"""PDF Generation Service Interface

Defines the contract for rendering invoice documents.
"""

from abc import ABC, abstractmethod
from typing import Optional
from src.domain.client import Client
from src.domain.invoice import Invoice
from src.domain.issuer_profile import IssuerProfile


class PdfService(ABC):
    """
    Service interface for invoice PDF rendering

    Rendering is pure: the same invoice, client and issuer always produce the
    same bytes, and nothing is stored or sent by the renderer.
    """

    @abstractmethod
    def render_invoice(
        self,
        invoice: Invoice,
        client: Optional[Client],
        issuer: IssuerProfile,
    ) -> bytes:
        """
        Render an invoice as a PDF document

        Args:
            invoice: Invoice with its line items
            client: Billed client, None renders placeholder text
            issuer: Profile of the invoice owner

        Returns:
            PDF document as bytes
        """
        pass


class DocumentGenerationError(Exception):
    """Rendering failed for an invoice that had all required data"""
