"""Unit tests for InvoiceNumbering"""

import pytest
from datetime import date
from unittest.mock import AsyncMock, MagicMock

from src.app.use_cases.invoicing.numbering import InvoiceNumbering
from src.domain.errors import DuplicateInvoiceNumberError


@pytest.fixture
def numbering_repo():
    repo = MagicMock()
    repo.list_numbers_with_prefix = AsyncMock(return_value=["20250501", "20250503"])
    repo.get_by_number = AsyncMock(return_value=None)
    return repo


@pytest.mark.asyncio
class TestInvoiceNumbering:

    async def test_next_number_skips_to_highest_plus_one(self, numbering_repo):
        numbering = InvoiceNumbering(numbering_repo)

        number = await numbering.next_number("user_42", date(2025, 5, 20))

        assert number == "20250504"
        numbering_repo.list_numbers_with_prefix.assert_called_once_with("user_42", "202505")

    async def test_concurrent_callers_get_the_same_number(self, numbering_repo):
        """
        Given: Two requests read the numbers before either inserts
        When: Both ask for the next number
        Then: Both get 20250504; the unique constraint decides the winner
        """
        # Arrange
        numbering = InvoiceNumbering(numbering_repo)

        # Act
        first = await numbering.next_number("user_42", date(2025, 5, 1))
        second = await numbering.next_number("user_42", date(2025, 5, 31))

        # Assert
        assert first == second == "20250504"

    async def test_first_number_of_month(self, numbering_repo):
        numbering_repo.list_numbers_with_prefix = AsyncMock(return_value=[])

        number = await InvoiceNumbering(numbering_repo).next_number("user_42", date(2025, 1, 3))

        assert number == "20250101"

    async def test_ensure_unique_rejects_existing_number(self, numbering_repo):
        numbering_repo.get_by_number = AsyncMock(return_value=MagicMock())

        with pytest.raises(DuplicateInvoiceNumberError) as exc_info:
            await InvoiceNumbering(numbering_repo).ensure_unique("user_42", "20250501")

        assert exc_info.value.invoice_number == "20250501"

    async def test_ensure_unique_accepts_free_number(self, numbering_repo):
        await InvoiceNumbering(numbering_repo).ensure_unique("user_42", "20250502")

        numbering_repo.get_by_number.assert_called_once_with("user_42", "20250502")
