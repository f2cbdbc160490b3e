"""Unit tests for the ReportLab invoice renderer

Tests cover:
- Valid, deterministic PDF output
- Placeholder text for a missing client
- Descriptions with discount text, truncation and discount column
- Pagination of long item tables
"""

import pytest
from datetime import datetime
from decimal import Decimal

from src.adapter.services import pdf_service as pdf_module
from src.adapter.services.pdf_service import ReportLabPdfService
from src.domain.client import Client
from src.domain.invoice import Invoice, InvoiceStatus
from src.domain.issuer_profile import IssuerProfile
from src.domain.line_item import LineItem


def make_items(count: int):
    return [
        LineItem(
            service_id=1,
            label=f"Prestation {n}",
            quantity=1,
            unit_price=Decimal("100"),
        )
        for n in range(1, count + 1)
    ]


def make_invoice(items) -> Invoice:
    invoice = Invoice(
        id=1,
        owner_id="user_1",
        client_id=7,
        invoice_number="20250501",
        invoice_date=datetime(2025, 5, 2),
        due_date=datetime(2025, 6, 2),
        status=InvoiceStatus.DRAFT,
        total_amount=Decimal("0"),
        items=[],
        created_at=datetime(2025, 5, 2),
        updated_at=datetime(2025, 5, 2),
    )
    invoice.replace_items(items)
    return invoice


@pytest.fixture
def issuer():
    return IssuerProfile(
        id=1,
        owner_id="user_1",
        name="Marie Curie",
        email="marie@example.com",
        address="1 rue des Lilas\n75001 Paris",
        freelance_id="12345678900011",
        iban="FR7630006000011234567890189",
        bic="AGRIFRPP",
        bank="Crédit Agricole",
    )


@pytest.fixture
def client():
    return Client(
        id=7,
        owner_id="user_1",
        name="ACME SAS",
        contact_name="Jean",
        address="10 avenue de la République\n69001 Lyon",
        email="compta@acme.example",
        legal_form="SAS",
    )


@pytest.fixture
def renderer():
    return ReportLabPdfService(address_line_chars=45, description_max_chars=42)


@pytest.fixture
def drawn(monkeypatch):
    """Record every string drawn and every page break"""
    record = {"texts": [], "pages": 1}
    original_text = pdf_module._Page.text
    original_new_page = pdf_module._Page.new_page

    def text(self, x, y, value, size=10, bold=False):
        record["texts"].append(value)
        return original_text(self, x, y, value, size=size, bold=bold)

    def new_page(self):
        record["pages"] += 1
        return original_new_page(self)

    monkeypatch.setattr(pdf_module._Page, "text", text)
    monkeypatch.setattr(pdf_module._Page, "new_page", new_page)
    return record


class TestRenderInvoice:

    def test_output_is_a_pdf(self, renderer, issuer, client):
        pdf_bytes = renderer.render_invoice(make_invoice(make_items(2)), client, issuer)

        assert pdf_bytes.startswith(b"%PDF")
        assert pdf_bytes.rstrip().endswith(b"%%EOF")

    def test_rendering_is_deterministic(self, renderer, issuer, client):
        """Same data gives byte-identical documents"""
        first = renderer.render_invoice(make_invoice(make_items(3)), client, issuer)
        second = renderer.render_invoice(make_invoice(make_items(3)), client, issuer)

        assert first == second

    def test_header_and_fixed_texts(self, renderer, issuer, client, drawn):
        renderer.render_invoice(make_invoice(make_items(1)), client, issuer)

        texts = drawn["texts"]
        assert "Marie Curie" in texts
        assert "N° SIRET: 12345678900011" in texts
        assert "Facturer à:" in texts
        assert "ACME SAS" in texts
        assert "Forme juridique: SAS" in texts
        assert "Facture N°20250501" in texts
        assert "Date de facturation: 02/05/2025" in texts
        assert "Date de règlement: 02/06/2025" in texts
        assert "Total HT: 100,00 €" in texts
        assert "TVA non applicable, art. 293 B du CGI" in texts
        assert "IBAN: FR7630006000011234567890189" in texts
        assert "Banque: Crédit Agricole" in texts

    def test_missing_client_uses_placeholders(self, renderer, issuer, drawn):
        pdf_bytes = renderer.render_invoice(make_invoice(make_items(1)), None, issuer)

        assert pdf_bytes.startswith(b"%PDF")
        assert "client inconnu" in drawn["texts"]
        assert "adresse inconnue" in drawn["texts"]

    def test_discount_columns(self, renderer, issuer, client, drawn):
        items = [
            LineItem(
                label="Développement",
                quantity=2,
                unit_price=Decimal("100"),
                discount_value=Decimal("10"),
                discount_unit="%",
                discount_text="fidélité",
            ),
            LineItem(label="Support", quantity=1, unit_price=Decimal("50")),
        ]
        renderer.render_invoice(make_invoice(items), client, issuer)

        texts = drawn["texts"]
        assert "Développement (fidélité)" in texts
        assert "10%" in texts
        assert "-" in texts
        assert "180,00 €" in texts
        assert "Total HT: 230,00 €" in texts

    def test_long_description_is_truncated(self, renderer, issuer, client, drawn):
        items = [LineItem(label="x" * 80, quantity=1, unit_price=Decimal("1"))]
        renderer.render_invoice(make_invoice(items), client, issuer)

        assert "x" * 42 in drawn["texts"]
        assert "x" * 43 not in drawn["texts"]

    def test_long_address_is_wrapped(self, renderer, issuer, client, drawn):
        client.address = "Zone artisanale des Grands Champs, bâtiment B, entrée 4, porte gauche"
        renderer.render_invoice(make_invoice(make_items(1)), client, issuer)

        wrapped = [t for t in drawn["texts"] if "bâtiment" in t or "Zone artisanale" in t]
        assert wrapped
        assert all(len(t) <= 45 for t in wrapped)

    def test_single_item_fits_on_one_page(self, renderer, issuer, client, drawn):
        renderer.render_invoice(make_invoice(make_items(1)), client, issuer)

        assert drawn["pages"] == 1

    def test_many_items_continue_on_new_pages(self, renderer, issuer, client, drawn):
        pdf_bytes = renderer.render_invoice(make_invoice(make_items(60)), client, issuer)

        assert pdf_bytes.startswith(b"%PDF")
        assert drawn["pages"] >= 3
        # The table header is repeated on every page holding rows
        assert drawn["texts"].count("Description") >= 3
        assert "Prestation 60" in drawn["texts"]
        assert "Total HT: 6 000,00 €" in drawn["texts"]
