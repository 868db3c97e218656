"""Tests for the invoice endpoints."""

from uuid import uuid4

import pytest

from clients.email_client import EmailGatewayError
from core.models import InvoiceListing, InvoiceStatus


INVOICE_FORM = {
    "customer": {
        "full_name": "Marcia Campbell",
        "trn": "123-456-789",
        "address": "12 Hope Road, Kingston 10",
        "phone": "876-555-0142",
        "email": "marcia@example.com",
    },
    "vehicles": [
        {"make": "Toyota", "model": "Corolla", "year": "2022", "vin": "V1", "price": "1,000,000"},
        {"make": "Honda", "model": "Fit", "year": "2019", "vin": "V2", "price": "500000"},
    ],
}


class TestCreateInvoice:

    def test_created(self, client, invoice_service, invoice, customer):
        invoice_service.create.return_value = (invoice, customer)

        response = client.post("/api/invoices", json=INVOICE_FORM)

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["invoice"]["invoice_number"] == invoice.invoice_number
        assert data["customer"]["email"] == customer.email
        submitted = invoice_service.create.call_args.args[0]
        assert [v.vin for v in submitted.vehicles] == ["V1", "V2"]

    def test_no_vehicles_is_422(self, client, invoice_service):
        response = client.post("/api/invoices", json={**INVOICE_FORM, "vehicles": []})

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"
        invoice_service.create.assert_not_called()

    @pytest.mark.parametrize("price", ["1e30", "123456789012345678901234567890"])
    def test_oversized_price_is_422(self, client, invoice_service, price):
        vehicles = [{**INVOICE_FORM["vehicles"][0], "price": price}]

        response = client.post("/api/invoices", json={**INVOICE_FORM, "vehicles": vehicles})

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"
        invoice_service.create.assert_not_called()

    def test_missing_customer_field_is_422(self, client):
        customer = {k: v for k, v in INVOICE_FORM["customer"].items() if k != "phone"}

        response = client.post("/api/invoices", json={**INVOICE_FORM, "customer": customer})

        assert response.status_code == 422

    def test_database_failure_is_generic_500(self, client, invoice_service):
        invoice_service.create.side_effect = RuntimeError("connection reset by peer")

        response = client.post("/api/invoices", json=INVOICE_FORM)

        assert response.status_code == 500
        assert response.json()["error"]["message"] == "An internal error occurred"


class TestReadInvoices:

    def test_list(self, client, invoice_service, invoice):
        listing = InvoiceListing(**invoice.model_dump(), customer_name="Marcia Campbell")
        invoice_service.list_recent.return_value = [listing]

        response = client.get("/api/invoices?limit=10")

        assert response.status_code == 200
        [row] = response.json()["data"]
        assert row["invoice_number"] == invoice.invoice_number
        assert row["customer_name"] == "Marcia Campbell"
        invoice_service.list_recent.assert_called_once_with(10, search=None)

    def test_list_search_passed_through(self, client, invoice_service):
        invoice_service.list_recent.return_value = []

        response = client.get("/api/invoices", params={"search": "campbell"})

        assert response.status_code == 200
        invoice_service.list_recent.assert_called_once_with(50, search="campbell")

    def test_overlong_search_is_422(self, client, invoice_service):
        response = client.get("/api/invoices", params={"search": "x" * 101})

        assert response.status_code == 422
        invoice_service.list_recent.assert_not_called()

    def test_get_with_customer(self, client, invoice):
        response = client.get(f"/api/invoices/{invoice.id}")

        data = response.json()["data"]
        assert data["invoice"]["total_cents"] == 172_500_000
        assert data["customer"]["full_name"] == "Marcia Campbell"

    def test_not_found(self, client, invoice_service):
        invoice_service.get_by_id.return_value = None

        response = client.get(f"/api/invoices/{uuid4()}")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "NOT_FOUND"


class TestUpdateStatus:

    def test_mark_paid(self, client, invoice_service, invoice):
        invoice_service.update_status.return_value = invoice.model_copy(update={"status": InvoiceStatus.PAID})

        response = client.post(f"/api/invoices/{invoice.id}/status", json={"status": "Paid"})

        assert response.status_code == 200
        assert response.json()["data"]["status"] == "Paid"
        invoice_service.update_status.assert_called_once_with(invoice.id, InvoiceStatus.PAID)

    def test_invalid_transition_is_400(self, client, invoice_service, invoice):
        invoice_service.update_status.side_effect = ValueError("Invoice INV-1 is already Paid")

        response = client.post(f"/api/invoices/{invoice.id}/status", json={"status": "Cancelled"})

        assert response.status_code == 400

    def test_unknown_status_is_422(self, client, invoice):
        response = client.post(f"/api/invoices/{invoice.id}/status", json={"status": "Refunded"})

        assert response.status_code == 422


class TestStoredDocument:

    @pytest.mark.parametrize("fmt,media_type,ext", [
        ("pdf", "application/pdf", "pdf"),
        ("text", "text/plain; charset=utf-8", "txt"),
    ])
    def test_download(self, client, invoice, fmt, media_type, ext):
        response = client.get(f"/api/invoices/{invoice.id}/document?format={fmt}")

        assert response.status_code == 200
        assert response.headers["content-type"] == media_type
        assert response.headers["content-disposition"] == f'inline; filename="{invoice.invoice_number}.{ext}"'


class TestEmailInvoice:

    def test_renders_pdf_and_sends(self, client, mail_service, invoice, customer):
        response = client.post(f"/api/invoices/{invoice.id}/email")

        assert response.status_code == 200
        assert response.json()["data"] == {
            "message_id": "msg-002",
            "filename": f"{invoice.invoice_number}.pdf",
            "recipient": customer.email,
        }
        _, _, document = mail_service.send_invoice.call_args.args
        assert document.content.startswith(b"%PDF")

    def test_dispatch_failure_is_502(self, client, mail_service, invoice):
        mail_service.send_invoice.side_effect = EmailGatewayError("Gateway error: quota")

        response = client.post(f"/api/invoices/{invoice.id}/email")

        assert response.status_code == 502
        assert response.json()["error"]["code"] == "MAIL_DISPATCH_FAILED"
