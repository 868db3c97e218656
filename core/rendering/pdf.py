"""
PDF invoice rendering (fpdf2).

A4 pages with automatic page breaks. The vehicle table repeats its heading
row on every page, so long invoices are never truncated.
"""

import logging

from fpdf import FPDF

from core.document import (
    CustomerBlock,
    FooterBlock,
    InvoiceDocument,
    NoteBlock,
    SummaryBlock,
    TitleBlock,
    VehicleTable,
)

logger = logging.getLogger(__name__)

FONT = "Helvetica"

NAVY = (10, 17, 40)
SECTION_FILL = (240, 240, 240)
ACCENT = (58, 176, 255)
MUTED = (120, 120, 120)

# Relative widths for Make, Model, Year, VIN, Color, Mileage, Price
VEHICLE_COL_WIDTHS = (24, 24, 12, 42, 20, 22, 36)
VEHICLE_ALIGN = ("LEFT", "LEFT", "CENTER", "LEFT", "LEFT", "RIGHT", "RIGHT")

# Core PDF fonts only cover Latin-1; typographic punctuation maps to ASCII.
_PUNCTUATION = str.maketrans({
    "\u2018": "'", "\u2019": "'", "\u201c": '"', "\u201d": '"',
    "\u2013": "-", "\u2014": "-", "\u2026": "...", "\u2022": "*",
    "\u00a0": " ",
})


def _latin1(text: str) -> str:
    return text.translate(_PUNCTUATION).encode("latin-1", "replace").decode("latin-1")


def _section_heading(pdf: FPDF, heading: str) -> None:
    pdf.set_fill_color(*SECTION_FILL)
    pdf.set_text_color(*ACCENT)
    pdf.set_font(FONT, "B", 11)
    pdf.cell(0, 7, f"  {_latin1(heading)}", new_x="LMARGIN", new_y="NEXT", fill=True)
    pdf.set_text_color(0, 0, 0)


def _title(pdf: FPDF, block: TitleBlock) -> None:
    pdf.set_fill_color(*NAVY)
    pdf.set_text_color(255, 255, 255)
    pdf.set_font(FONT, "B", 22)
    pdf.cell(0, 14, _latin1(block.company_name), new_x="LMARGIN", new_y="NEXT", align="C", fill=True)

    pdf.set_font(FONT, "", 10)
    pdf.cell(95, 7, f"  Invoice #: {_latin1(block.invoice_number)}", fill=True)
    pdf.cell(0, 7, f"Date: {_latin1(block.issue_date)}  ", new_x="LMARGIN", new_y="NEXT", align="R", fill=True)
    pdf.cell(0, 7, f"  Status: {_latin1(block.status)}", new_x="LMARGIN", new_y="NEXT", fill=True)

    pdf.set_text_color(0, 0, 0)
    pdf.ln(6)


def _customer(pdf: FPDF, block: CustomerBlock) -> None:
    _section_heading(pdf, block.heading)
    pdf.set_font(FONT, "", 10)
    for label, value in block.fields():
        pdf.multi_cell(0, 6, f"  {label}: {_latin1(value)}", new_x="LMARGIN", new_y="NEXT")
    pdf.ln(4)


def _vehicles(pdf: FPDF, table: VehicleTable) -> None:
    _section_heading(pdf, table.heading)
    pdf.ln(2)
    pdf.set_font(FONT, "", 8)
    with pdf.table(
        col_widths=VEHICLE_COL_WIDTHS,
        text_align=VEHICLE_ALIGN,
        line_height=6,
        first_row_as_headings=True,
    ) as pdf_table:
        heading = pdf_table.row()
        for column in table.columns:
            heading.cell(_latin1(column))
        for row in table.rows:
            pdf_row = pdf_table.row()
            for cell in row:
                pdf_row.cell(_latin1(cell))
    pdf.ln(4)


def _summary(pdf: FPDF, block: SummaryBlock) -> None:
    _section_heading(pdf, block.heading)
    for line in block.lines:
        if line.emphasized:
            pdf.set_draw_color(*SECTION_FILL)
            pdf.line(pdf.l_margin + 100, pdf.get_y() + 1, pdf.w - pdf.r_margin, pdf.get_y() + 1)
            pdf.ln(2)
            pdf.set_font(FONT, "B", 13)
            height = 9
        else:
            pdf.set_font(FONT, "", 10)
            height = 6
        pdf.cell(120, height, f"  {_latin1(line.label)}:")
        pdf.cell(0, height, _latin1(line.value), new_x="LMARGIN", new_y="NEXT", align="R")
    pdf.ln(4)


def _note(pdf: FPDF, block: NoteBlock) -> None:
    _section_heading(pdf, block.heading)
    pdf.set_font(FONT, "I", 10)
    pdf.multi_cell(0, 5, _latin1(block.text), new_x="LMARGIN", new_y="NEXT")
    pdf.ln(4)


def _footer(pdf: FPDF, block: FooterBlock) -> None:
    pdf.ln(8)
    pdf.set_font(FONT, "I", 9)
    pdf.set_text_color(*MUTED)
    for line in block.lines:
        pdf.cell(0, 5, _latin1(line), new_x="LMARGIN", new_y="NEXT", align="C")
    pdf.set_text_color(0, 0, 0)


_RENDERERS = {
    TitleBlock: _title,
    CustomerBlock: _customer,
    VehicleTable: _vehicles,
    SummaryBlock: _summary,
    NoteBlock: _note,
    FooterBlock: _footer,
}


def render_pdf(document: InvoiceDocument, compress: bool = True) -> bytes:
    """Render the document as PDF bytes. Uncompressed output keeps page text searchable."""
    pdf = FPDF(format="A4")
    pdf.set_compression(compress)
    pdf.set_auto_page_break(auto=True, margin=15)
    pdf.set_title(_latin1(f"Invoice {document.title.invoice_number}"))
    pdf.set_author(_latin1(document.title.company_name))
    pdf.add_page()

    for block in document.blocks():
        _RENDERERS[type(block)](pdf, block)

    content = bytes(pdf.output())
    logger.debug(
        "Rendered PDF for %s: %d pages, %d bytes",
        document.title.invoice_number, pdf.page_no(), len(content),
    )
    return content
