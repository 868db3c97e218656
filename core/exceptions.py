"""Typed exceptions for invoice operations."""


class DocumentRenderError(Exception):
    """
    Rendering an invoice document failed.

    Raised instead of returning partial or empty output. The original error,
    when there is one, is chained as __cause__.
    """

    def __init__(self, invoice_number: str, reason: str):
        self.invoice_number = invoice_number
        self.reason = reason
        super().__init__(f"Could not render invoice {invoice_number}: {reason}")


class InvoiceNumberExhaustedError(Exception):
    """Every generated invoice number collided with an existing one."""
