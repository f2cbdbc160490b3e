from .unit_of_work import SqlAlchemyUnitOfWork
from .pdf_service import ReportLabPdfService
from .blob_storage import LocalBlobStorage, S3BlobStorage, create_blob_storage
from .email_transport import (
    LoggingEmailTransport,
    UnconfiguredEmailTransport,
    SmtpEmailTransport,
    create_email_transport,
)

__all__ = [
    "SqlAlchemyUnitOfWork",
    "ReportLabPdfService",
    "LocalBlobStorage",
    "S3BlobStorage",
    "create_blob_storage",
    "LoggingEmailTransport",
    "UnconfiguredEmailTransport",
    "SmtpEmailTransport",
    "create_email_transport",
]
