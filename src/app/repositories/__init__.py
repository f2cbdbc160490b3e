from .invoice_repository import InvoiceRepository
from .client_repository import ClientRepository
from .service_repository import ServiceRepository
from .issuer_profile_repository import IssuerProfileRepository
from .monthly_template_repository import MonthlyTemplateRepository

__all__ = [
    "InvoiceRepository",
    "ClientRepository",
    "ServiceRepository",
    "IssuerProfileRepository",
    "MonthlyTemplateRepository",
]
