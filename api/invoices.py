"""Invoice endpoints: create, read, status changes, documents and email."""

from uuid import UUID

from fastapi import APIRouter, Query, Request

from api.base import success_response
from api.documents import document_response
from core.models import InvoiceCreate, InvoiceStatusUpdate
from core.services.document_service import DocumentFormat


def create_invoices_router(services: dict) -> APIRouter:
    router = APIRouter()

    invoice_svc = services["invoice"]
    customer_svc = services["customer"]
    document_svc = services["document"]
    mail_svc = services["mail"]

    def _load(invoice_id: UUID):
        invoice = invoice_svc.get_by_id(invoice_id)
        if invoice is None:
            raise ValueError(f"Invoice {invoice_id} not found")
        customer = customer_svc.get_by_id(invoice.customer_id)
        if customer is None:
            raise ValueError(f"Customer for invoice {invoice.invoice_number} not found")
        return invoice, customer

    @router.post("/invoices", status_code=201)
    async def create_invoice(request: Request, body: InvoiceCreate):
        invoice, customer = invoice_svc.create(body)
        return success_response({
            "invoice": invoice.model_dump(mode="json"),
            "customer": customer.model_dump(mode="json"),
        }, request.state.request_id).model_dump(mode="json")

    @router.get("/invoices")
    async def list_invoices(
        request: Request,
        limit: int = Query(50, ge=1, le=500),
        search: str | None = Query(None, max_length=100),
    ):
        invoices = invoice_svc.list_recent(limit, search=search)
        return success_response(
            [i.model_dump(mode="json") for i in invoices], request.state.request_id
        ).model_dump(mode="json")

    @router.get("/invoices/{invoice_id}")
    async def get_invoice(request: Request, invoice_id: UUID):
        invoice, customer = _load(invoice_id)
        return success_response({
            "invoice": invoice.model_dump(mode="json"),
            "customer": customer.model_dump(mode="json"),
        }, request.state.request_id).model_dump(mode="json")

    @router.post("/invoices/{invoice_id}/status")
    async def update_status(request: Request, invoice_id: UUID, body: InvoiceStatusUpdate):
        invoice = invoice_svc.update_status(invoice_id, body.status)
        return success_response(
            invoice.model_dump(mode="json"), request.state.request_id
        ).model_dump(mode="json")

    @router.get("/invoices/{invoice_id}/document")
    def get_document(
        invoice_id: UUID,
        format: DocumentFormat = Query(DocumentFormat.PDF),
        enrich: bool = Query(True),
    ):
        invoice, customer = _load(invoice_id)
        return document_response(document_svc.render(invoice, customer, fmt=format, enrich=enrich))

    @router.post("/invoices/{invoice_id}/email")
    def email_invoice(request: Request, invoice_id: UUID):
        invoice, customer = _load(invoice_id)
        # Render first; a dispatch failure leaves the document valid
        document = document_svc.render(invoice, customer, fmt=DocumentFormat.PDF)
        message_id = mail_svc.send_invoice(invoice, customer, document)
        return success_response({
            "message_id": message_id,
            "filename": document.filename,
            "recipient": customer.email,
        }, request.state.request_id).model_dump(mode="json")

    return router
