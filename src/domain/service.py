"""Service Domain Entity

Catalog entry an owner bills for. Line items copy its label and price.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from sqlmodel import Field, Column
from sqlalchemy import Numeric, String
from src.domain.base import BaseModel, IdType


class Service(BaseModel, table=True):
    __tablename__ = "services"

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, primary_key=True, autoincrement=True),
    )

    owner_id: str = Field(index=True, description="Owning user")

    label: str = Field(sa_column=Column(String(255), nullable=False))

    default_price: Decimal = Field(
        sa_column=Column(Numeric(18, 6), nullable=False),
        description="Unit price copied into new line items"
    )

    is_global: bool = Field(
        default=False,
        description="If true, label/price changes are pushed to draft invoices"
    )

    created_at: datetime = Field(default_factory=datetime.utcnow)
