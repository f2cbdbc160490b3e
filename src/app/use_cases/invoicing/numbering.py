"""Invoice Numbering Service

Store-backed wrapper around the pure numbering rules.
"""

import logging
from datetime import date, datetime
from typing import Union
from src.app.repositories.invoice_repository import InvoiceRepository
from src.domain.errors import DuplicateInvoiceNumberError
from src.domain.invoice_number import next_invoice_number, number_prefix

logger = logging.getLogger(__name__)


class InvoiceNumbering:
    """
    Generates YYYYMM## numbers per owner and month

    The generated number is not reserved. Two concurrent callers can get the
    same number; the (owner_id, invoice_number) unique constraint turns the
    second insert into DuplicateInvoiceNumberError and CreateInvoice retries.
    """

    def __init__(self, invoice_repo: InvoiceRepository):
        self.invoice_repo = invoice_repo

    async def next_number(self, owner_id: str, reference_date: Union[date, datetime]) -> str:
        """
        Next free number for the month of reference_date

        Raises:
            InvoiceNumberExhaustedError: If the month sequence is full
        """
        prefix = number_prefix(reference_date)
        existing = await self.invoice_repo.list_numbers_with_prefix(owner_id, prefix)
        number = next_invoice_number(existing, reference_date)
        logger.debug(f"Next invoice number for owner {owner_id}: {number}")
        return number

    async def ensure_unique(self, owner_id: str, invoice_number: str) -> None:
        """
        Reject a caller supplied number already used by the owner

        Raises:
            DuplicateInvoiceNumberError: If the number exists
        """
        existing = await self.invoice_repo.get_by_number(owner_id, invoice_number)
        if existing is not None:
            raise DuplicateInvoiceNumberError(owner_id, invoice_number)
