"""Invoice Repository Interface

Defines the contract for invoice persistence operations.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional, List
from src.domain.invoice import Invoice, InvoiceStatus


class InvoiceRepository(ABC):
    """
    Repository interface for Invoice persistence

    Every lookup that can return another owner's invoice is re-checked by the
    use case against the caller's owner_id.
    """

    @abstractmethod
    async def create(self, invoice: Invoice) -> Invoice:
        """
        Create a new invoice

        Args:
            invoice: Invoice entity to persist

        Returns:
            Created Invoice with generated ID

        Raises:
            DuplicateInvoiceNumberError: If the owner already uses invoice_number
        """
        pass

    @abstractmethod
    async def get_by_id(self, invoice_id: int) -> Optional[Invoice]:
        """
        Retrieve invoice by ID

        Args:
            invoice_id: Invoice ID

        Returns:
            Invoice if found, None otherwise
        """
        pass

    @abstractmethod
    async def get_by_number(self, owner_id: str, invoice_number: str) -> Optional[Invoice]:
        """
        Retrieve an owner's invoice by its number

        Args:
            owner_id: Owner identifier
            invoice_number: Invoice number

        Returns:
            Invoice if found, None otherwise
        """
        pass

    @abstractmethod
    async def list_numbers_with_prefix(self, owner_id: str, prefix: str) -> List[str]:
        """
        List the owner's invoice numbers starting with prefix

        Args:
            owner_id: Owner identifier
            prefix: Number prefix (YYYYMM)

        Returns:
            Matching invoice numbers
        """
        pass

    @abstractmethod
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
        pass

    @abstractmethod
    async def list_in_period(
        self,
        owner_id: str,
        start: datetime,
        end: datetime,
        status: Optional[InvoiceStatus] = None,
    ) -> List[Invoice]:
        """
        Retrieve an owner's invoices dated within [start, end]

        Args:
            owner_id: Owner identifier
            start: Inclusive lower bound of invoice_date
            end: Inclusive upper bound of invoice_date
            status: Optional filter by status

        Returns:
            List of invoices ordered by invoice date
        """
        pass

    @abstractmethod
    async def update(self, invoice: Invoice) -> Invoice:
        """
        Update an existing invoice

        Args:
            invoice: Invoice entity with updated values

        Returns:
            Updated Invoice
        """
        pass

    @abstractmethod
    async def delete(self, invoice: Invoice) -> None:
        """
        Delete an invoice

        Args:
            invoice: Invoice entity to delete
        """
        pass
