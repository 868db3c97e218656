"""
Document service: compose an invoice and encode it as PDF or plain text.

Either a complete document comes back or DocumentRenderError is raised.
"""

import logging
from dataclasses import dataclass
from enum import Enum

from core.composer import compose_document
from core.config import DealerConfig
from core.document import InvoiceDocument
from core.enrichment import EnrichmentService
from core.exceptions import DocumentRenderError
from core.models import Customer, Invoice
from core.rendering import render_pdf, render_text

logger = logging.getLogger(__name__)


class DocumentFormat(str, Enum):
    """Supported output encodings."""

    PDF = "pdf"
    TEXT = "text"


_MEDIA_TYPES = {
    DocumentFormat.PDF: "application/pdf",
    DocumentFormat.TEXT: "text/plain; charset=utf-8",
}

_EXTENSIONS = {
    DocumentFormat.PDF: "pdf",
    DocumentFormat.TEXT: "txt",
}


@dataclass(frozen=True)
class RenderedDocument:
    """Encoded invoice ready to download or attach."""

    content: bytes
    filename: str
    media_type: str


class DocumentService:
    """Builds invoice documents, optionally with an enrichment note."""

    def __init__(self, enrichment: EnrichmentService, config: DealerConfig | None = None):
        self.enrichment = enrichment
        self.config = config or DealerConfig()

    def compose(self, invoice: Invoice, customer: Customer, enrich: bool = True) -> InvoiceDocument:
        """Compose the document tree. Never fails because of enrichment."""
        note = self.enrichment.describe_sale(invoice, customer) if enrich else None
        return compose_document(invoice, customer, enrichment=note, config=self.config)

    def _encode(self, document: InvoiceDocument, fmt: DocumentFormat) -> bytes:
        if fmt == DocumentFormat.PDF:
            return render_pdf(document)
        return render_text(document).encode("utf-8")

    def render(
        self,
        invoice: Invoice,
        customer: Customer,
        fmt: DocumentFormat = DocumentFormat.PDF,
        enrich: bool = True,
    ) -> RenderedDocument:
        """
        Compose and encode an invoice document.

        Args:
            invoice: Finalized invoice
            customer: Its customer
            fmt: Output encoding
            enrich: Whether to request the optional LLM note

        Returns:
            RenderedDocument named after the invoice number

        Raises:
            DocumentRenderError: If encoding fails or produces no output
        """
        fmt = DocumentFormat(fmt)
        document = self.compose(invoice, customer, enrich=enrich)

        try:
            content = self._encode(document, fmt)
        except Exception as e:
            logger.exception("Rendering %s for invoice %s failed", fmt.value, invoice.invoice_number)
            raise DocumentRenderError(invoice.invoice_number, str(e)) from e

        if not content:
            logger.error("Renderer produced empty %s for invoice %s", fmt.value, invoice.invoice_number)
            raise DocumentRenderError(invoice.invoice_number, "renderer produced no output")

        return RenderedDocument(
            content=content,
            filename=f"{invoice.invoice_number}.{_EXTENSIONS[fmt]}",
            media_type=_MEDIA_TYPES[fmt],
        )
