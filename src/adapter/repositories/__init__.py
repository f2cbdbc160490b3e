from .invoice_repository import SqlAlchemyInvoiceRepository
from .client_repository import SqlAlchemyClientRepository
from .service_repository import SqlAlchemyServiceRepository
from .issuer_profile_repository import SqlAlchemyIssuerProfileRepository
from .monthly_template_repository import SqlAlchemyMonthlyTemplateRepository

__all__ = [
    "SqlAlchemyInvoiceRepository",
    "SqlAlchemyClientRepository",
    "SqlAlchemyServiceRepository",
    "SqlAlchemyIssuerProfileRepository",
    "SqlAlchemyMonthlyTemplateRepository",
]
