"""Plain-text invoice rendering, used for downloads and email bodies."""

import textwrap

from core.document import (
    CustomerBlock,
    FooterBlock,
    InvoiceDocument,
    NoteBlock,
    SummaryBlock,
    TitleBlock,
    VehicleTable,
)

WIDTH = 55
RULE = "=" * WIDTH
THIN_RULE = "-" * WIDTH


def _section(heading: str) -> list[str]:
    return [THIN_RULE, heading.upper(), THIN_RULE]


def _title(block: TitleBlock) -> list[str]:
    banner = f"{block.company_name.upper()} INVOICE".center(WIDTH).rstrip()
    lines = [RULE, banner, RULE, ""]
    lines += [f"{label.upper()}: {value}" for label, value in block.fields()]
    lines.append("")
    return lines


def _customer(block: CustomerBlock) -> list[str]:
    lines = _section(block.heading)
    lines += [f"{label}: {value}" for label, value in block.fields()]
    lines.append("")
    return lines


def _vehicles(table: VehicleTable) -> list[str]:
    lines = _section(table.heading)
    for number, row in enumerate(table.rows, start=1):
        lines.append(f"Vehicle #{number}:")
        lines += [f"  {column}: {cell}" for column, cell in zip(table.columns, row)]
        lines.append("")
    return lines


def _summary(block: SummaryBlock) -> list[str]:
    lines = _section(block.heading)
    for line in block.lines:
        if line.emphasized:
            lines += ["", f"{line.label.upper()}: {line.value}"]
        else:
            lines.append(f"{line.label}: {line.value}")
    lines.append("")
    return lines


def _note(block: NoteBlock) -> list[str]:
    lines = _section(block.heading)
    for paragraph in block.text.splitlines():
        lines += textwrap.wrap(paragraph, WIDTH) or [""]
    lines.append("")
    return lines


def _footer(block: FooterBlock) -> list[str]:
    return [RULE, *block.lines, RULE]


_RENDERERS = {
    TitleBlock: _title,
    CustomerBlock: _customer,
    VehicleTable: _vehicles,
    SummaryBlock: _summary,
    NoteBlock: _note,
    FooterBlock: _footer,
}


def render_text(document: InvoiceDocument) -> str:
    """Render the document as a banner-delimited plain-text invoice."""
    lines: list[str] = []
    for block in document.blocks():
        lines += _RENDERERS[type(block)](block)
    return "\n".join(lines) + "\n"
