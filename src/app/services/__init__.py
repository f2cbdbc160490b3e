from .unit_of_work import UnitOfWork
from .pdf_service import DocumentGenerationError, PdfService
from .blob_storage import BlobStorage
from .email_transport import (
    EmailAttachment,
    EmailDeliveryError,
    EmailTransport,
    OutgoingEmail,
)

__all__ = [
    "UnitOfWork",
    "PdfService",
    "DocumentGenerationError",
    "BlobStorage",
    "EmailAttachment",
    "EmailDeliveryError",
    "EmailTransport",
    "OutgoingEmail",
]
