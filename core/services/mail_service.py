"""
Mail service: free-form dispatch and emailing an invoice to its customer.

Dispatch is attempted once. A failure here never affects a document that has
already been generated.
"""

import logging

from clients.email_client import EmailAttachment, EmailGatewayClient
from core.config import DealerConfig
from core.models import Customer, Invoice
from core.services.document_service import RenderedDocument
from core.totals import format_currency

logger = logging.getLogger(__name__)


class MailService:
    """Service for outgoing email."""

    def __init__(self, email_client: EmailGatewayClient, config: DealerConfig | None = None):
        self.email_client = email_client
        self.config = config or DealerConfig()

    def send(
        self,
        to: list[str],
        subject: str,
        body: str,
        html: str | None = None,
        attachment: EmailAttachment | None = None,
    ) -> str:
        """
        Send an email.

        Returns:
            Transport message id

        Raises:
            EmailGatewayError: On gateway failure
        """
        return self.email_client.send_email(to, subject, body, html=html, attachment=attachment)

    def _invoice_body(self, invoice: Invoice, customer: Customer) -> str:
        return (
            f"Dear {customer.full_name},\n\n"
            f"Please find attached invoice {invoice.invoice_number} "
            f"for {format_currency(invoice.total_cents)}.\n\n"
            f"{self.config.thank_you_line}\n"
            f"{self.config.contact_note}\n"
        )

    def send_invoice(self, invoice: Invoice, customer: Customer, document: RenderedDocument) -> str:
        """
        Email a rendered invoice to its customer.

        Returns:
            Transport message id

        Raises:
            EmailGatewayError: On gateway failure
        """
        attachment = EmailAttachment(
            content=document.content,
            filename=document.filename,
            content_type=document.media_type,
        )
        message_id = self.send(
            [customer.email],
            self.config.invoice_email_subject,
            self._invoice_body(invoice, customer),
            attachment=attachment,
        )
        logger.info("Invoice %s emailed to customer (message_id=%s)", invoice.invoice_number, message_id)
        return message_id
