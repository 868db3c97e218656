"""
Invoice totals: subtotal, GCT and total.

Arithmetic is done in integer cents. Prices are quantized to cents once, on
the way in; tax is rounded half-up to the cent; the total is the plain sum of
the two, so it can never disagree with the lines above it.
"""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any

logger = logging.getLogger(__name__)

# General Consumption Tax, basis points: 1500 = 15%
GCT_RATE_BPS = 1500

CURRENCY_LABEL = "JMD"

_CENT = Decimal("0.01")

# Largest single price accepted; keeps cent sums well inside BIGINT
MAX_PRICE = Decimal("999999999999.99")


@dataclass(frozen=True)
class InvoiceTotals:
    """Result of a totals computation. Amounts in cents."""

    subtotal_cents: int
    tax_cents: int
    total_cents: int
    tax_rate_bps: int = GCT_RATE_BPS

    @property
    def subtotal(self) -> Decimal:
        return Decimal(self.subtotal_cents).scaleb(-2)

    @property
    def tax(self) -> Decimal:
        return Decimal(self.tax_cents).scaleb(-2)

    @property
    def total(self) -> Decimal:
        return Decimal(self.total_cents).scaleb(-2)


def parse_price(value: Any) -> Decimal | None:
    """
    Parse a raw price without bounding it.

    Strings may carry thousands separators and a leading '$'. Returns None
    for missing, blank, non-numeric and non-finite input.
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, str):
        value = value.strip().replace(",", "").lstrip("$").strip()
        if not value:
            return None
    elif isinstance(value, float):
        # str() first so 0.1 stays 0.1 rather than its binary expansion
        value = str(value)

    try:
        price = Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        return None

    return price if price.is_finite() else None


def coerce_price(value: Any) -> Decimal:
    """
    Coerce a raw price to a non-negative Decimal quantized to cents.

    Anything parse_price rejects becomes zero, as do negative prices and
    prices above MAX_PRICE. Never raises.
    """
    price = parse_price(value)
    if price is None:
        if value is not None and value != "":
            logger.debug("Non-numeric price %r treated as zero", value)
        return Decimal("0.00")

    if price < 0 or price > MAX_PRICE:
        logger.debug("Out of range price %r treated as zero", value)
        return Decimal("0.00")

    return price.quantize(_CENT, rounding=ROUND_HALF_UP)


def to_cents(price: Decimal) -> int:
    """Convert a cent-quantized Decimal to integer cents."""
    return int(price.quantize(_CENT, rounding=ROUND_HALF_UP) * 100)


def compute_tax_cents(subtotal_cents: int, tax_rate_bps: int = GCT_RATE_BPS) -> int:
    """Tax on a non-negative subtotal, rounded half-up to the cent."""
    return (subtotal_cents * tax_rate_bps + 5000) // 10000


def compute_totals(vehicles: Iterable[Any], tax_rate_bps: int = GCT_RATE_BPS) -> InvoiceTotals:
    """
    Compute subtotal, tax and total for a sequence of vehicles.

    Accepts Vehicle models or raw mappings (draft form rows). Pure and
    deterministic: safe to call on every keystroke while a form is edited.
    An empty sequence yields all zeros.
    """
    subtotal_cents = 0
    for vehicle in vehicles:
        if isinstance(vehicle, Mapping):
            raw = vehicle.get("price")
        else:
            raw = getattr(vehicle, "price", None)
        subtotal_cents += to_cents(coerce_price(raw))

    tax_cents = compute_tax_cents(subtotal_cents, tax_rate_bps)

    return InvoiceTotals(
        subtotal_cents=subtotal_cents,
        tax_cents=tax_cents,
        total_cents=subtotal_cents + tax_cents,
        tax_rate_bps=tax_rate_bps,
    )


def format_currency(cents: int) -> str:
    """
    Format cents for display: "JMD 1,725,000.00".

    Every document and text output goes through here so numeric values are
    identical across formats.
    """
    amount = Decimal(cents).scaleb(-2)
    return f"{CURRENCY_LABEL} {amount:,.2f}"


def format_rate(tax_rate_bps: int) -> str:
    """Format a basis-point rate as a percentage label: 1500 -> "15%"."""
    percent = Decimal(tax_rate_bps).scaleb(-2).normalize()
    return f"{percent:f}%"
