"""POST /api/documents — render an invoice the client already holds."""

from fastapi import APIRouter, Response
from pydantic import BaseModel

from core.models import Customer, Invoice
from core.services.document_service import DocumentFormat, RenderedDocument


class DocumentRequest(BaseModel):
    invoice: Invoice
    customer: Customer
    format: DocumentFormat = DocumentFormat.PDF
    enrich: bool = True


def document_response(document: RenderedDocument) -> Response:
    """Binary response for a rendered invoice, displayed inline by browsers."""
    return Response(
        content=document.content,
        media_type=document.media_type,
        headers={"Content-Disposition": f'inline; filename="{document.filename}"'},
    )


def create_documents_router(services: dict) -> APIRouter:
    router = APIRouter()

    document_svc = services["document"]

    @router.post("/documents")
    def render_document(body: DocumentRequest):
        document = document_svc.render(
            body.invoice,
            body.customer,
            fmt=body.format,
            enrich=body.enrich,
        )
        return document_response(document)

    return router
