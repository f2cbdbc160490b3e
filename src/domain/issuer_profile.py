"""Issuer Profile Domain Entity

Identity and banking details of the freelancer printed on every invoice.
One profile per owner.
"""

from typing import Optional
from sqlmodel import Field, Column
from sqlalchemy import String, Text
from src.domain.base import BaseModel, IdType


class IssuerProfile(BaseModel, table=True):
    __tablename__ = "issuer_profiles"

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, primary_key=True, autoincrement=True),
    )

    owner_id: str = Field(index=True, unique=True, description="Owning user (one profile each)")

    name: str = Field(sa_column=Column(String(255), nullable=False))
    email: str = Field(sa_column=Column(String(255), nullable=False))
    address: str = Field(default="", sa_column=Column(Text, nullable=False))

    freelance_id: str = Field(
        default="",
        sa_column=Column(String(50), nullable=False),
        description="Tax identifier (SIRET)"
    )

    iban: str = Field(default="", sa_column=Column(String(64), nullable=False))
    bic: str = Field(default="", sa_column=Column(String(32), nullable=False))
    bank: str = Field(default="", sa_column=Column(String(255), nullable=False))

    @property
    def first_name(self) -> str:
        return self.name.split(" ")[0] if self.name else ""
