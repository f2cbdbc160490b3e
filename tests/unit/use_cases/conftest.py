import pytest
from datetime import datetime
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from src.domain.client import Client
from src.domain.invoice import Invoice, InvoiceStatus
from src.domain.issuer_profile import IssuerProfile
from src.domain.line_item import LineItem

OWNER_ID = "user_42"


@pytest.fixture
def owner_id():
    return OWNER_ID


@pytest.fixture
def sample_items():
    """2 x 100 with 10% off (180) and 1 x 50 (50)"""
    return [
        LineItem(
            service_id=3,
            label="Développement",
            quantity=2,
            unit_price=Decimal("100"),
            discount_value=Decimal("10"),
            discount_unit="%",
            discount_text="fidélité",
        ),
        LineItem(service_id=4, label="Support", quantity=1, unit_price=Decimal("50")),
    ]


@pytest.fixture
def make_invoice(sample_items):
    """Factory for persisted-looking invoices"""

    def factory(
        invoice_id=1,
        owner_id=OWNER_ID,
        status=InvoiceStatus.DRAFT,
        items=None,
        client_id=7,
        invoice_number="20250501",
        invoice_date=datetime(2025, 5, 2),
        **overrides,
    ):
        invoice = Invoice(
            id=invoice_id,
            owner_id=owner_id,
            client_id=client_id,
            invoice_number=invoice_number,
            invoice_date=invoice_date,
            due_date=datetime(2025, 6, 2),
            status=status,
            total_amount=Decimal("0"),
            items=[],
            created_at=datetime(2025, 5, 2),
            updated_at=datetime(2025, 5, 2),
            **overrides,
        )
        invoice.replace_items(items if items is not None else sample_items)
        return invoice

    return factory


@pytest.fixture
def sample_client():
    return Client(
        id=7,
        owner_id=OWNER_ID,
        name="ACME SAS",
        contact_name="Jean",
        address="10 avenue de la République\n69001 Lyon",
        email="compta@acme.example",
        legal_form="SAS",
    )


@pytest.fixture
def sample_issuer():
    return IssuerProfile(
        id=1,
        owner_id=OWNER_ID,
        name="Marie Curie",
        email="marie@example.com",
        address="1 rue des Lilas\n75001 Paris",
        freelance_id="12345678900011",
        iban="FR7630006000011234567890189",
        bic="AGRIFRPP",
        bank="Crédit Agricole",
    )


@pytest.fixture
def mock_invoice_repo():
    """Mock invoice repository; update echoes the invoice back"""
    repo = MagicMock()
    repo.update = AsyncMock(side_effect=lambda invoice: invoice)
    repo.delete = AsyncMock()
    return repo


@pytest.fixture
def mock_client_repo(sample_client):
    repo = MagicMock()
    repo.get_by_id = AsyncMock(return_value=sample_client)
    return repo


@pytest.fixture
def mock_issuer_profile_repo(sample_issuer):
    repo = MagicMock()
    repo.get_by_owner = AsyncMock(return_value=sample_issuer)
    return repo


@pytest.fixture
def mock_blob_storage():
    storage = MagicMock()
    storage.store = AsyncMock(return_value="invoices/new.pdf")
    storage.get_url = AsyncMock(return_value="/api/storage/invoices/new.pdf")
    storage.delete = AsyncMock()
    return storage
