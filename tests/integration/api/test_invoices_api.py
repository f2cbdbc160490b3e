"""Integration tests for Invoice API endpoints"""

import base64
import pytest
from datetime import datetime
from decimal import Decimal
from dateutil.relativedelta import relativedelta
from httpx import AsyncClient

OWNER_HEADERS = {"X-Owner-Id": "user_42"}


def invoice_payload(client_id, **overrides):
    payload = {
        "client_id": client_id,
        "invoice_date": "2025-05-02T09:00:00",
        "items": [
            {
                "label": "Développement",
                "quantity": 2,
                "unit_price": "100.00",
                "discount_value": "10",
                "discount_unit": "%",
                "discount_text": "fidélité",
            },
            {"label": "Support", "quantity": 1, "unit_price": "50"},
        ],
    }
    payload.update(overrides)
    return payload


async def create_invoice(client: AsyncClient, client_id, **overrides):
    response = await client.post("/api/invoices", json=invoice_payload(client_id, **overrides), headers=OWNER_HEADERS)
    assert response.status_code == 201
    return response.json()


class TestInvoiceAPIIntegration:
    """Integration test suite for Invoice API endpoints"""

    @pytest.mark.asyncio
    async def test_create_invoice_success(self, client: AsyncClient, seeded):
        """POST /invoices computes totals, number and due date"""
        # Act
        response = await client.post(
            "/api/invoices", json=invoice_payload(seeded["client"].id), headers=OWNER_HEADERS
        )

        # Assert
        assert response.status_code == 201
        data = response.json()
        assert data["invoice_number"] == "20250501"
        assert data["status"] == "draft"
        assert Decimal(data["total_amount"]) == Decimal("230")
        assert data["due_date"].startswith("2025-06-02")
        assert [Decimal(item["total"]) for item in data["items"]] == [Decimal("180"), Decimal("50")]

    @pytest.mark.asyncio
    async def test_create_invoice_without_owner(self, client: AsyncClient, seeded):
        response = await client.post("/api/invoices", json=invoice_payload(seeded["client"].id))

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "UNAUTHENTICATED"

    @pytest.mark.asyncio
    async def test_create_invoice_discount_without_text(self, client: AsyncClient, seeded):
        payload = invoice_payload(
            seeded["client"].id,
            items=[{"label": "Audit", "quantity": 1, "unit_price": "10", "discount_value": "5"}],
        )

        response = await client.post("/api/invoices", json=payload, headers=OWNER_HEADERS)
        listing = await client.get("/api/invoices", headers=OWNER_HEADERS)

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_FAILED"
        assert listing.json() == []

    @pytest.mark.asyncio
    async def test_create_invoice_malformed_body(self, client: AsyncClient, seeded):
        payload = invoice_payload(
            seeded["client"].id,
            items=[{"label": "Audit", "quantity": 0, "unit_price": "10"}],
        )

        response = await client.post("/api/invoices", json=payload, headers=OWNER_HEADERS)

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_FAILED"

    @pytest.mark.asyncio
    async def test_create_invoice_unknown_client(self, client: AsyncClient, seeded):
        response = await client.post("/api/invoices", json=invoice_payload(999), headers=OWNER_HEADERS)

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_other_owner_cannot_read(self, client: AsyncClient, seeded):
        created = await create_invoice(client, seeded["client"].id)

        response = await client.get(
            f"/api/invoices/{created['invoice_id']}", headers={"X-Owner-Id": "user_43"}
        )

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_sequential_numbers(self, client: AsyncClient, seeded):
        first = await create_invoice(client, seeded["client"].id)
        second = await create_invoice(client, seeded["client"].id)

        assert (first["invoice_number"], second["invoice_number"]) == ("20250501", "20250502")

    @pytest.mark.asyncio
    async def test_import_invoice(self, client: AsyncClient, seeded):
        payload = {
            "client_id": seeded["client"].id,
            "invoice_number": "20240307",
            "invoice_date": "2024-03-15T00:00:00",
            "total_amount": "1234.56",
            "source_document_ref": "invoices/uploaded.pdf",
            "items": [{"label": "Mission", "quantity": 1, "unit_price": "1000"}],
        }

        response = await client.post("/api/invoices/import", json=payload, headers=OWNER_HEADERS)
        duplicate = await client.post("/api/invoices/import", json=payload, headers=OWNER_HEADERS)

        assert response.status_code == 201
        assert response.json()["status"] == "sent"
        assert Decimal(response.json()["total_amount"]) == Decimal("1234.56")
        assert duplicate.status_code == 409
        assert duplicate.json()["error"]["code"] == "DUPLICATE_INVOICE_NUMBER"

    @pytest.mark.asyncio
    async def test_update_draft(self, client: AsyncClient, seeded):
        created = await create_invoice(client, seeded["client"].id)

        response = await client.patch(
            f"/api/invoices/{created['invoice_id']}",
            json={"items": [{"label": "Support", "quantity": 3, "unit_price": "50"}]},
            headers=OWNER_HEADERS,
        )

        assert response.status_code == 200
        assert Decimal(response.json()["total_amount"]) == Decimal("150")

    @pytest.mark.asyncio
    async def test_toggle_draft_is_conflict(self, client: AsyncClient, seeded):
        created = await create_invoice(client, seeded["client"].id)

        response = await client.post(
            f"/api/invoices/{created['invoice_id']}/toggle-payment", headers=OWNER_HEADERS
        )

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "INVALID_TRANSITION"

    @pytest.mark.asyncio
    async def test_send_then_toggle_then_delete_refused(self, client: AsyncClient, seeded, email_transport):
        created = await create_invoice(client, seeded["client"].id)
        invoice_url = f"/api/invoices/{created['invoice_id']}"

        sent = await client.post(f"{invoice_url}/send", json={"custom_message": "Merci !"}, headers=OWNER_HEADERS)
        paid = await client.post(f"{invoice_url}/toggle-payment", headers=OWNER_HEADERS)
        deleted = await client.delete(invoice_url, headers=OWNER_HEADERS)

        assert sent.status_code == 200
        assert sent.json()["status"] == "sent"
        assert sent.json()["recipient"] == "compta@acme.example"
        assert "Merci !" in email_transport.send.call_args.args[0].body
        assert paid.json()["status"] == "paid"
        assert deleted.status_code == 400

    @pytest.mark.asyncio
    async def test_delete_draft(self, client: AsyncClient, seeded):
        created = await create_invoice(client, seeded["client"].id)
        invoice_url = f"/api/invoices/{created['invoice_id']}"

        deleted = await client.delete(invoice_url, headers=OWNER_HEADERS)
        missing = await client.get(invoice_url, headers=OWNER_HEADERS)

        assert deleted.status_code == 204
        assert missing.status_code == 404

    @pytest.mark.asyncio
    async def test_generate_and_download_pdf(self, client: AsyncClient, seeded):
        created = await create_invoice(client, seeded["client"].id)
        invoice_url = f"/api/invoices/{created['invoice_id']}"

        generated = await client.post(f"{invoice_url}/pdf", headers=OWNER_HEADERS)
        urls = await client.get(f"{invoice_url}/document-url", headers=OWNER_HEADERS)
        download = await client.get(f"{invoice_url}/pdf", headers=OWNER_HEADERS)

        assert generated.status_code == 200
        assert base64.b64decode(generated.json()["pdf_base64"]).startswith(b"%PDF")
        assert generated.json()["filename"] == "Facture-20250501-ACME-SAS.pdf"
        assert urls.json()["generated_document_url"].startswith("/api/storage/invoices/")
        assert download.status_code == 200
        assert download.headers["content-type"] == "application/pdf"
        assert "Facture-20250501-ACME-SAS.pdf" in download.headers["content-disposition"]
        assert download.content.startswith(b"%PDF")

    @pytest.mark.asyncio
    async def test_duplicate_invoice(self, client: AsyncClient, seeded):
        created = await create_invoice(client, seeded["client"].id)

        response = await client.post(
            f"/api/invoices/{created['invoice_id']}/duplicate", headers=OWNER_HEADERS
        )

        assert response.status_code == 201
        assert response.json()["invoice_id"] != created["invoice_id"]
        assert Decimal(response.json()["total_amount"]) == Decimal("230")

    @pytest.mark.asyncio
    async def test_list_filters_by_status(self, client: AsyncClient, seeded):
        await create_invoice(client, seeded["client"].id)

        drafts = await client.get("/api/invoices", params={"status": "draft"}, headers=OWNER_HEADERS)
        paid = await client.get("/api/invoices", params={"status": "paid"}, headers=OWNER_HEADERS)

        assert len(drafts.json()) == 1
        assert paid.json() == []

    @pytest.mark.asyncio
    async def test_statistics_and_propagation_routes(self, client: AsyncClient, seeded):
        service_id = seeded["service"].id
        await create_invoice(
            client,
            seeded["client"].id,
            items=[{"service_id": service_id, "label": "Ancien libellé", "quantity": 1, "unit_price": "80"}],
        )

        stats = await client.get("/api/invoices/statistics", headers=OWNER_HEADERS)
        propagated = await client.post(f"/api/services/{service_id}/propagate", headers=OWNER_HEADERS)

        assert stats.status_code == 200
        assert stats.json()["monthly"][0]["label"] == "mai 2025"
        assert propagated.status_code == 200
        assert len(propagated.json()["updated_invoice_ids"]) == 1

    @pytest.mark.asyncio
    async def test_monthly_templates_can_be_listed_and_used(self, client: AsyncClient, seeded, email_transport):
        last_month = (datetime.utcnow() - relativedelta(months=1)).replace(day=5, hour=9, minute=0, second=0, microsecond=0)
        created = await create_invoice(client, seeded["client"].id, invoice_date=last_month.isoformat())
        await client.post(f"/api/invoices/{created['invoice_id']}/send", json={}, headers=OWNER_HEADERS)

        built = await client.post("/api/invoices/templates", headers=OWNER_HEADERS)
        listed = await client.get("/api/invoices/templates", headers=OWNER_HEADERS)
        template_id = listed.json()["templates"][0]["template_id"]
        invoice = await client.post(f"/api/invoices/templates/{template_id}/invoices", headers=OWNER_HEADERS)

        assert built.status_code == 201
        assert listed.status_code == 200
        assert template_id == built.json()["created"][0]["template_id"]
        assert listed.json()["templates"][0]["client_name"] == "ACME SAS"
        assert invoice.status_code == 201
        assert invoice.json()["status"] == "draft"

    @pytest.mark.asyncio
    async def test_health(self, client: AsyncClient):
        response = await client.get("/health")

        assert response.json() == {"status": "ok"}
