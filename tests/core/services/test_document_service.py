"""Tests for DocumentService - formats, filenames and render failures."""

from unittest.mock import Mock, patch

import pytest

from core.enrichment import EnrichmentService
from core.exceptions import DocumentRenderError
from core.services.document_service import DocumentFormat, DocumentService


@pytest.fixture
def enrichment():
    mock = Mock(spec=EnrichmentService)
    mock.describe_sale.return_value = None
    return mock


@pytest.fixture
def service(enrichment):
    return DocumentService(enrichment)


class TestRender:

    def test_pdf(self, service, invoice, customer):
        document = service.render(invoice, customer)

        assert document.content.startswith(b"%PDF")
        assert document.filename == "INV-20261019-1A2B3C4D.pdf"
        assert document.media_type == "application/pdf"

    def test_text(self, service, invoice, customer):
        document = service.render(invoice, customer, fmt="text")

        assert document.filename == "INV-20261019-1A2B3C4D.txt"
        assert document.media_type.startswith("text/plain")
        assert "TOTAL DUE: JMD 1,725,000.00" in document.content.decode("utf-8")

    def test_unknown_format(self, service, invoice, customer):
        with pytest.raises(ValueError):
            service.render(invoice, customer, fmt="docx")

    def test_enrichment_note_included(self, service, enrichment, invoice, customer):
        enrichment.describe_sale.return_value = "Two reliable vehicles for the family."

        document = service.render(invoice, customer, fmt=DocumentFormat.TEXT)

        assert "Two reliable vehicles for the family." in document.content.decode("utf-8")

    def test_enrich_false_skips_llm(self, service, enrichment, invoice, customer):
        service.render(invoice, customer, fmt=DocumentFormat.TEXT, enrich=False)

        enrichment.describe_sale.assert_not_called()


class TestRenderFailures:

    def test_renderer_exception_becomes_render_error(self, service, invoice, customer):
        with patch("core.services.document_service.render_pdf", side_effect=RuntimeError("font missing")):
            with pytest.raises(DocumentRenderError) as exc_info:
                service.render(invoice, customer)

        assert exc_info.value.invoice_number == invoice.invoice_number
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    def test_empty_output_is_an_error(self, service, invoice, customer):
        with patch("core.services.document_service.render_pdf", return_value=b""):
            with pytest.raises(DocumentRenderError, match="no output"):
                service.render(invoice, customer)
