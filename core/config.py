"""Dealership configuration for documents and customer email."""

from pydantic import BaseModel, Field


class DealerConfig(BaseModel):
    """
    Dealership details printed on every invoice.

    Currency and tax rate are fixed (see core.totals); only presentation
    lives here.
    """

    company_name: str = Field(
        default="SteelWheel Auto",
        description="Name printed in the document title and footer",
        min_length=1,
    )
    display_timezone: str = Field(
        default="America/Jamaica",
        description="IANA timezone used for the issue date on documents",
    )
    contact_note: str = Field(
        default="For any inquiries, please contact us.",
        description="Static contact line in the document footer",
    )
    invoice_email_subject: str = Field(
        default="Your Invoice from SteelWheel Auto",
        description="Subject line when emailing an invoice to the customer",
    )
    enrichment_enabled: bool = Field(
        default=True,
        description="Whether to request an LLM-written sale note for documents",
    )

    @property
    def thank_you_line(self) -> str:
        return f"Thank you for choosing {self.company_name}."
