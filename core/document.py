"""
Encoding-agnostic invoice document tree.

The composer fills these blocks with display-ready strings. Renderers only
lay them out: they never format numbers or dates themselves, which keeps the
PDF and plain-text outputs in agreement.
"""

from collections.abc import Iterator
from dataclasses import dataclass


@dataclass(frozen=True)
class TitleBlock:
    company_name: str
    invoice_number: str
    issue_date: str
    status: str

    def fields(self) -> tuple[tuple[str, str], ...]:
        return (
            ("Invoice Number", self.invoice_number),
            ("Date", self.issue_date),
            ("Status", self.status),
        )


@dataclass(frozen=True)
class CustomerBlock:
    name: str
    tax_id: str
    address: str
    phone: str
    email: str

    heading: str = "Customer Information"

    def fields(self) -> tuple[tuple[str, str], ...]:
        return (
            ("Name", self.name),
            ("TRN", self.tax_id),
            ("Address", self.address),
            ("Phone", self.phone),
            ("Email", self.email),
        )


@dataclass(frozen=True)
class VehicleTable:
    """One row per vehicle, cells in column order."""

    columns: tuple[str, ...]
    rows: tuple[tuple[str, ...], ...]

    heading: str = "Vehicle Information"


@dataclass(frozen=True)
class SummaryLine:
    label: str
    value: str
    emphasized: bool = False


@dataclass(frozen=True)
class SummaryBlock:
    lines: tuple[SummaryLine, ...]

    heading: str = "Summary"


@dataclass(frozen=True)
class NoteBlock:
    text: str

    heading: str = "Note"


@dataclass(frozen=True)
class FooterBlock:
    lines: tuple[str, ...]


Block = TitleBlock | CustomerBlock | VehicleTable | SummaryBlock | NoteBlock | FooterBlock


@dataclass(frozen=True)
class InvoiceDocument:
    """A composed invoice, ready for any renderer."""

    title: TitleBlock
    customer: CustomerBlock
    vehicles: VehicleTable
    summary: SummaryBlock
    footer: FooterBlock
    note: NoteBlock | None = None

    def blocks(self) -> Iterator[Block]:
        """Blocks in print order. The note is skipped when absent."""
        yield self.title
        yield self.customer
        yield self.vehicles
        yield self.summary
        if self.note is not None:
            yield self.note
        yield self.footer
