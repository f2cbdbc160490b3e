from .base import BaseModel, generate_uuid
from .pricing import DiscountUnit, compute_line_total
from .line_item import LineItem
from .invoice import Invoice, InvoiceStatus
from .client import Client
from .service import Service
from .issuer_profile import IssuerProfile
from .monthly_template import MonthlyTemplate

__all__ = [
    "BaseModel",
    "generate_uuid",
    "DiscountUnit",
    "compute_line_total",
    "LineItem",
    "Invoice",
    "InvoiceStatus",
    "Client",
    "Service",
    "IssuerProfile",
    "MonthlyTemplate",
]
