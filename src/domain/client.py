"""Client Domain Entity

Billed customer of an owner. Managed outside the invoicing core and
consumed read-only by it.
"""

from datetime import datetime
from typing import Optional
from sqlmodel import Field, Column
from sqlalchemy import String, Text
from src.domain.base import BaseModel, IdType


class Client(BaseModel, table=True):
    __tablename__ = "clients"

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, primary_key=True, autoincrement=True),
    )

    owner_id: str = Field(index=True, description="Owning user")

    name: str = Field(sa_column=Column(String(255), nullable=False))

    contact_name: str = Field(
        default="",
        sa_column=Column(String(255), nullable=False),
        description="Contact person, used to personalise emails"
    )

    address: str = Field(
        default="",
        sa_column=Column(Text, nullable=False),
        description="Postal address, one logical line per newline"
    )

    email: str = Field(default="", sa_column=Column(String(255), nullable=False))

    legal_form: Optional[str] = Field(
        default=None,
        sa_column=Column(String(50), nullable=True),
        description="e.g. SARL, EURL, Micro-entrepreneur"
    )

    status: str = Field(default="active", description="active or inactive")

    created_at: datetime = Field(default_factory=datetime.utcnow)
