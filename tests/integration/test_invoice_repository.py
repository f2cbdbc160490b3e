"""Integration tests for the SQLAlchemy repositories on SQLite"""

import pytest
from datetime import datetime
from decimal import Decimal

from src.adapter.repositories.invoice_repository import SqlAlchemyInvoiceRepository
from src.adapter.repositories.monthly_template_repository import SqlAlchemyMonthlyTemplateRepository
from src.domain.errors import DuplicateInvoiceNumberError
from src.domain.invoice import Invoice, InvoiceStatus
from src.domain.line_item import LineItem
from src.domain.monthly_template import MonthlyTemplate


def build_invoice(number, owner_id="user_42", invoice_date=datetime(2025, 5, 2), status=InvoiceStatus.DRAFT, client_id=1):
    invoice = Invoice(
        owner_id=owner_id,
        client_id=client_id,
        invoice_number=number,
        invoice_date=invoice_date,
        due_date=invoice_date,
        status=status,
        total_amount=Decimal("0"),
    )
    invoice.replace_items([LineItem(label="Audit", quantity=1, unit_price=Decimal("75.50"))])
    return invoice


class TestInvoiceRepository:

    @pytest.mark.asyncio
    async def test_create_and_read_back_items(self, db_session):
        repo = SqlAlchemyInvoiceRepository(db_session)

        created = await repo.create(build_invoice("20250501"))
        await db_session.commit()

        loaded = await repo.get_by_id(created.id)
        assert loaded.invoice_number == "20250501"
        assert loaded.total_amount == Decimal("75.5")
        assert loaded.line_items[0].label == "Audit"
        assert loaded.line_items[0].total == Decimal("75.50")

    @pytest.mark.asyncio
    async def test_duplicate_number_keeps_session_usable(self, db_session):
        """
        Given: Invoice 20250501 exists for the owner
        When: A second invoice with the same number is inserted
        Then: DuplicateInvoiceNumberError is raised and the next insert still works
        """
        # Arrange
        repo = SqlAlchemyInvoiceRepository(db_session)
        await repo.create(build_invoice("20250501"))

        # Act
        with pytest.raises(DuplicateInvoiceNumberError):
            await repo.create(build_invoice("20250501"))
        await repo.create(build_invoice("20250502"))
        await db_session.commit()

        # Assert
        numbers = await repo.list_numbers_with_prefix("user_42", "202505")
        assert sorted(numbers) == ["20250501", "20250502"]

    @pytest.mark.asyncio
    async def test_same_number_for_different_owners(self, db_session):
        repo = SqlAlchemyInvoiceRepository(db_session)

        await repo.create(build_invoice("20250501", owner_id="user_42"))
        await repo.create(build_invoice("20250501", owner_id="user_43"))
        await db_session.commit()

        assert await repo.list_numbers_with_prefix("user_43", "202505") == ["20250501"]

    @pytest.mark.asyncio
    async def test_list_by_owner_filters_and_order(self, db_session):
        repo = SqlAlchemyInvoiceRepository(db_session)
        await repo.create(build_invoice("20250301", invoice_date=datetime(2025, 3, 1), status=InvoiceStatus.PAID))
        await repo.create(build_invoice("20250501", invoice_date=datetime(2025, 5, 1)))
        await repo.create(build_invoice("20250401", invoice_date=datetime(2025, 4, 1), status=InvoiceStatus.SENT, client_id=2))
        await repo.create(build_invoice("20250402", owner_id="user_43", invoice_date=datetime(2025, 4, 2)))
        await db_session.commit()

        everything = await repo.list_by_owner("user_42")
        drafts = await repo.list_by_owner("user_42", status=InvoiceStatus.DRAFT)
        of_client = await repo.list_by_owner("user_42", client_id=2)
        page = await repo.list_by_owner("user_42", limit=1, offset=1)

        assert [i.invoice_number for i in everything] == ["20250501", "20250401", "20250301"]
        assert [i.invoice_number for i in drafts] == ["20250501"]
        assert [i.invoice_number for i in of_client] == ["20250401"]
        assert [i.invoice_number for i in page] == ["20250401"]

    @pytest.mark.asyncio
    async def test_list_in_period(self, db_session):
        repo = SqlAlchemyInvoiceRepository(db_session)
        await repo.create(build_invoice("20250331", invoice_date=datetime(2025, 3, 31, 23, 0), status=InvoiceStatus.SENT))
        await repo.create(build_invoice("20250401", invoice_date=datetime(2025, 4, 1), status=InvoiceStatus.SENT))
        await repo.create(build_invoice("20250402", invoice_date=datetime(2025, 4, 30, 18, 0)))
        await db_session.commit()

        sent = await repo.list_in_period(
            "user_42", datetime(2025, 4, 1), datetime(2025, 4, 30, 23, 59, 59), status=InvoiceStatus.SENT
        )

        assert [i.invoice_number for i in sent] == ["20250401"]

    @pytest.mark.asyncio
    async def test_delete(self, db_session):
        repo = SqlAlchemyInvoiceRepository(db_session)
        invoice = await repo.create(build_invoice("20250501"))
        await db_session.commit()

        await repo.delete(invoice)
        await db_session.commit()

        assert await repo.get_by_id(invoice.id) is None


class TestMonthlyTemplateRepository:

    @pytest.mark.asyncio
    async def test_list_for_month(self, db_session):
        repo = SqlAlchemyMonthlyTemplateRepository(db_session)
        await repo.create(MonthlyTemplate(owner_id="user_42", client_id=1, year=2025, month=5, items=[]))
        await repo.create(MonthlyTemplate(owner_id="user_42", client_id=2, year=2025, month=4, items=[]))
        await db_session.commit()

        templates = await repo.list_for_month("user_42", 2025, 5)

        assert [t.client_id for t in templates] == [1]
