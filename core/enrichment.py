"""
Optional LLM-written sale note for invoice documents.

Best effort: every failure is logged and turned into None so a document is
always produced, with or without the note.
"""

import json
import logging

from clients.llm_client import LLMClient
from core.config import DealerConfig
from core.models import Customer, Invoice
from core.totals import format_currency
from utils.timezone import format_long_date

logger = logging.getLogger(__name__)

_SYSTEM_PROMPT = (
    "You are a professional invoice assistant for {company}, a vehicle dealership. "
    "Write a concise, professional description of the vehicle sale in two or three "
    "sentences of plain prose. No greeting, no sign-off, no markdown, no prices "
    "other than those given."
)


class EnrichmentService:
    """Generates the optional note paragraph for invoice documents."""

    def __init__(self, llm: LLMClient | None, config: DealerConfig | None = None):
        self.llm = llm
        self.config = config or DealerConfig()

    def _sale_summary(self, invoice: Invoice, customer: Customer) -> dict:
        vehicles = "; ".join(
            f"{v.year} {v.make} {v.model}, color: {v.color or 'n/a'}, "
            f"price: {format_currency(v.price_cents)}"
            for v in invoice.vehicles
        )
        return {
            "customer": customer.full_name,
            "vehicles": vehicles,
            "total": format_currency(invoice.total_cents),
            "date": format_long_date(invoice.created_at, self.config.display_timezone),
        }

    def describe_sale(self, invoice: Invoice, customer: Customer) -> str | None:
        """
        Ask the LLM for a short description of the sale.

        Returns:
            The stripped paragraph, or None if enrichment is disabled, no
            client is configured, the reply is empty, or anything fails.
        """
        if self.llm is None or not self.config.enrichment_enabled:
            return None

        summary = self._sale_summary(invoice, customer)
        messages = [
            {"role": "system", "content": _SYSTEM_PROMPT.format(company=self.config.company_name)},
            {"role": "user", "content": f"Describe this vehicle sale: {json.dumps(summary)}"},
        ]

        try:
            response = self.llm.generate(messages)
        except Exception:
            logger.warning(
                "Enrichment failed for invoice %s, continuing without note",
                invoice.invoice_number,
                exc_info=True,
            )
            return None

        text = response.content.strip()
        if not text:
            logger.info("Enrichment returned empty text for invoice %s", invoice.invoice_number)
            return None
        return text
