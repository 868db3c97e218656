"""Core domain models."""

from core.models.vehicle import Vehicle, add_vehicle, replace_vehicle, remove_vehicle
from core.models.customer import Customer, CustomerCreate
from core.models.invoice import Invoice, InvoiceCreate, InvoiceListing, InvoiceStatus, InvoiceStatusUpdate

__all__ = [
    # Vehicle
    "Vehicle", "add_vehicle", "replace_vehicle", "remove_vehicle",
    # Customer
    "Customer", "CustomerCreate",
    # Invoice
    "Invoice", "InvoiceCreate", "InvoiceListing", "InvoiceStatus", "InvoiceStatusUpdate",
]
