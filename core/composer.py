"""
Invoice document composer.

Maps a stored invoice and its customer onto the document tree. Pure: no I/O,
and the optional enrichment paragraph only ever adds the note block.
"""

from core.config import DealerConfig
from core.document import (
    CustomerBlock,
    FooterBlock,
    InvoiceDocument,
    NoteBlock,
    SummaryBlock,
    SummaryLine,
    TitleBlock,
    VehicleTable,
)
from core.models import Customer, Invoice, Vehicle
from core.totals import format_currency, format_rate
from utils.timezone import format_long_date

VEHICLE_COLUMNS = ("Make", "Model", "Year", "VIN", "Color", "Mileage", "Price")


def _vehicle_row(vehicle: Vehicle) -> tuple[str, ...]:
    return (
        vehicle.make,
        vehicle.model,
        vehicle.year,
        vehicle.vin,
        vehicle.color,
        vehicle.mileage,
        format_currency(vehicle.price_cents),
    )


def compose_document(
    invoice: Invoice,
    customer: Customer,
    enrichment: str | None = None,
    config: DealerConfig | None = None,
) -> InvoiceDocument:
    """
    Compose the document tree for an invoice.

    Args:
        invoice: Finalized invoice (totals already computed)
        customer: The invoice's customer, printed verbatim
        enrichment: Optional prose paragraph; blank strings are ignored
        config: Dealer presentation settings (defaults if None)

    Returns:
        InvoiceDocument with blocks in print order
    """
    config = config or DealerConfig()

    title = TitleBlock(
        company_name=config.company_name,
        invoice_number=invoice.invoice_number,
        issue_date=format_long_date(invoice.created_at, config.display_timezone),
        status=invoice.status.value,
    )

    customer_block = CustomerBlock(
        name=customer.full_name,
        tax_id=customer.tax_registration_number,
        address=customer.address,
        phone=customer.phone,
        email=customer.email,
    )

    table = VehicleTable(
        columns=VEHICLE_COLUMNS,
        rows=tuple(_vehicle_row(v) for v in invoice.vehicles),
    )

    summary = SummaryBlock(lines=(
        SummaryLine("Subtotal", format_currency(invoice.subtotal_cents)),
        SummaryLine(
            f"GCT ({format_rate(invoice.tax_rate_bps)})",
            format_currency(invoice.tax_amount_cents),
        ),
        SummaryLine("Total Due", format_currency(invoice.total_cents), emphasized=True),
    ))

    note = None
    if enrichment is not None and enrichment.strip():
        note = NoteBlock(text=enrichment.strip())

    footer = FooterBlock(lines=(config.thank_you_line, config.contact_note))

    return InvoiceDocument(
        title=title,
        customer=customer_block,
        vehicles=table,
        summary=summary,
        footer=footer,
        note=note,
    )
