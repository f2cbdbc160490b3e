"""SQLAlchemy Invoice Repository Implementation

Implements invoice persistence using SQLAlchemy async session.
"""

from typing import Optional, List
from datetime import datetime
from sqlalchemy.exc import IntegrityError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.invoice_repository import InvoiceRepository
from src.domain.errors import DuplicateInvoiceNumberError
from src.domain.invoice import Invoice, InvoiceStatus


class SqlAlchemyInvoiceRepository(InvoiceRepository):
    """
    SQLAlchemy implementation of InvoiceRepository

    Uses async session for database operations.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, invoice: Invoice) -> Invoice:
        """
        Create a new invoice

        The insert runs in a savepoint so that a number collision leaves the
        surrounding transaction usable for a retry.

        Args:
            invoice: Invoice entity to persist

        Returns:
            Created Invoice with generated ID

        Raises:
            DuplicateInvoiceNumberError: If the owner already uses invoice_number
        """
        try:
            async with self.session.begin_nested():
                self.session.add(invoice)
                await self.session.flush()
        except IntegrityError as e:
            raise DuplicateInvoiceNumberError(invoice.owner_id, invoice.invoice_number) from e
        await self.session.refresh(invoice)
        return invoice

    async def get_by_id(self, invoice_id: int) -> Optional[Invoice]:
        """
        Retrieve invoice by ID

        Args:
            invoice_id: Invoice ID

        Returns:
            Invoice if found, None otherwise
        """
        statement = select(Invoice).where(Invoice.id == invoice_id)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def get_by_number(self, owner_id: str, invoice_number: str) -> Optional[Invoice]:
        statement = (
            select(Invoice)
            .where(Invoice.owner_id == owner_id)
            .where(Invoice.invoice_number == invoice_number)
        )
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def list_numbers_with_prefix(self, owner_id: str, prefix: str) -> List[str]:
        statement = (
            select(Invoice.invoice_number)
            .where(Invoice.owner_id == owner_id)
            .where(Invoice.invoice_number.like(f"{prefix}%"))
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def list_by_owner(
        self,
        owner_id: str,
        status: Optional[InvoiceStatus] = None,
        client_id: Optional[int] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> List[Invoice]:
        """
        Retrieve an owner's invoices, most recent invoice date first

        Args:
            owner_id: Owner identifier
            status: Optional filter by status
            client_id: Optional filter by client
            limit: Maximum number of invoices to return (None = all)
            offset: Offset for pagination

        Returns:
            List of invoices
        """
        statement = select(Invoice).where(Invoice.owner_id == owner_id)

        if status:
            statement = statement.where(Invoice.status == status)
        if client_id is not None:
            statement = statement.where(Invoice.client_id == client_id)

        statement = statement.order_by(Invoice.invoice_date.desc(), Invoice.id.desc())
        if limit is not None:
            statement = statement.limit(limit)
        statement = statement.offset(offset)

        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def list_in_period(
        self,
        owner_id: str,
        start: datetime,
        end: datetime,
        status: Optional[InvoiceStatus] = None,
    ) -> List[Invoice]:
        statement = (
            select(Invoice)
            .where(Invoice.owner_id == owner_id)
            .where(Invoice.invoice_date >= start)
            .where(Invoice.invoice_date <= end)
        )
        if status:
            statement = statement.where(Invoice.status == status)
        statement = statement.order_by(Invoice.invoice_date, Invoice.id)

        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def update(self, invoice: Invoice) -> Invoice:
        """
        Update an existing invoice

        Args:
            invoice: Invoice entity with updated values

        Returns:
            Updated Invoice
        """
        invoice.updated_at = datetime.utcnow()
        self.session.add(invoice)
        await self.session.flush()
        await self.session.refresh(invoice)
        return invoice

    async def delete(self, invoice: Invoice) -> None:
        await self.session.delete(invoice)
        await self.session.flush()
