"""Invoice domain models.

All amounts are stored in cents (integer) to avoid floating point issues.
JMD 10.00 = 1000 cents. Tax rate is basis points (10000 = 100%).
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from uuid import UUID

from pydantic import AwareDatetime, BaseModel, Field, model_validator

from core.models.customer import CustomerCreate
from core.models.vehicle import Vehicle
from core.totals import compute_totals

# INV-YYYYMMDD-XXXXXXXX, uppercase hex suffix
INVOICE_NUMBER_PATTERN = r"^INV-\d{8}-[0-9A-F]{8}$"


class InvoiceStatus(str, Enum):
    """Invoice lifecycle status."""

    PENDING = "Pending"
    PAID = "Paid"
    CANCELLED = "Cancelled"


class InvoiceCreate(BaseModel):
    """Form submission: a new customer and the vehicles sold to them."""

    customer: CustomerCreate
    vehicles: tuple[Vehicle, ...] = Field(..., min_length=1)


class InvoiceStatusUpdate(BaseModel):
    """Operator action on an existing invoice."""

    status: InvoiceStatus


class Invoice(BaseModel):
    """Full invoice entity as stored. Line items and totals never change."""

    id: UUID | None = None
    invoice_number: str = Field(..., pattern=INVOICE_NUMBER_PATTERN)
    customer_id: UUID | None = None
    vehicles: tuple[Vehicle, ...] = Field(..., min_length=1)
    subtotal_cents: int = Field(..., ge=0)
    tax_rate_bps: int = Field(..., ge=0)
    tax_amount_cents: int = Field(..., ge=0)
    total_cents: int = Field(..., ge=0)
    status: InvoiceStatus = InvoiceStatus.PENDING
    created_at: AwareDatetime
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}

    @model_validator(mode="after")
    def _totals_match_vehicles(self) -> "Invoice":
        """Stored amounts must be exactly what the vehicles and rate produce."""
        expected = compute_totals(self.vehicles, self.tax_rate_bps)
        actual = (self.subtotal_cents, self.tax_amount_cents, self.total_cents)
        if actual != (expected.subtotal_cents, expected.tax_cents, expected.total_cents):
            raise ValueError(
                f"Invoice totals {actual} do not match its vehicles "
                f"({expected.subtotal_cents}, {expected.tax_cents}, {expected.total_cents})"
            )
        return self

    @property
    def subtotal(self) -> Decimal:
        return Decimal(self.subtotal_cents).scaleb(-2)

    @property
    def tax_amount(self) -> Decimal:
        return Decimal(self.tax_amount_cents).scaleb(-2)

    @property
    def total(self) -> Decimal:
        return Decimal(self.total_cents).scaleb(-2)

    @property
    def is_pending(self) -> bool:
        """Whether the operator can still mark it paid or cancelled."""
        return self.status == InvoiceStatus.PENDING


class InvoiceListing(Invoice):
    """An invoice row in the past-invoices list, with its customer's name."""

    customer_name: str | None = None
