"""Shared test fixtures for the invoicing test suite.

Everything here is hermetic: no Vault, Postgres, Valkey or Anthropic access.
"""

import json

import pytest
from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path
from uuid import UUID

from dotenv import load_dotenv

# Load .env file BEFORE any other imports that might use env vars
load_dotenv(Path(__file__).parent.parent / ".env", override=True)

# Reset vault client singleton so no test sees a cached secret
import clients.vault_client as vault_module
vault_module._vault_client_instance = None
vault_module._secret_cache.clear()

from core.models import Customer, Invoice, InvoiceStatus, Vehicle
from core.totals import GCT_RATE_BPS, compute_totals


# =============================================================================
# TEST CONSTANTS
# =============================================================================

TEST_INVOICE_ID = UUID("00000000-0000-0000-0000-0000000000a1")
TEST_CUSTOMER_ID = UUID("00000000-0000-0000-0000-0000000000c1")
TEST_OPERATOR_EMAIL = "operator@example.com"

# 2026-10-19 10:00 in Kingston
TEST_CREATED_AT = datetime(2026, 10, 19, 15, 0, tzinfo=timezone.utc)


# =============================================================================
# IN-MEMORY VALKEY
# =============================================================================


class FakeValkey:
    """Dict-backed stand-in for ValkeyClient. TTLs are recorded, not enforced."""

    def __init__(self):
        self.data: dict[str, str] = {}
        self.ttls: dict[str, int] = {}

    def get(self, key):
        return self.data.get(key)

    def set(self, key, value, expire_seconds=None):
        self.data[key] = value
        if expire_seconds:
            self.ttls[key] = expire_seconds

    def delete(self, key):
        self.ttls.pop(key, None)
        return self.data.pop(key, None) is not None

    def expire(self, key, seconds):
        self.ttls[key] = seconds

    def ttl(self, key):
        if key not in self.data:
            return -2
        return self.ttls.get(key, -1)

    def incr(self, key):
        value = int(self.data.get(key, 0)) + 1
        self.data[key] = str(value)
        return value

    def set_json(self, key, value, expire_seconds=None):
        self.set(key, json.dumps(value), expire_seconds)

    def get_json(self, key):
        raw = self.get(key)
        return None if raw is None else json.loads(raw)


@pytest.fixture
def valkey():
    """Fresh in-memory Valkey per test."""
    return FakeValkey()


# =============================================================================
# DOMAIN FIXTURES
# =============================================================================


@pytest.fixture
def vehicles() -> tuple[Vehicle, ...]:
    return (
        Vehicle(
            make="Toyota", model="Corolla", year="2022", vin="JTDBR32E720012345",
            color="Silver", mileage="12,000 km", price=Decimal("1000000.00"),
        ),
        Vehicle(
            make="Honda", model="Fit", year="2019", vin="JHMGK5H50KX000001",
            color="Blue", mileage="48,500 km", price=Decimal("500000.00"),
        ),
    )


@pytest.fixture
def customer() -> Customer:
    return Customer(
        id=TEST_CUSTOMER_ID,
        full_name="Marcia Campbell",
        tax_registration_number="123-456-789",
        address="12 Hope Road, Kingston 10",
        phone="876-555-0142",
        email="marcia@example.com",
        created_at=TEST_CREATED_AT,
    )


def _invoice_for(vehicles, **fields) -> Invoice:
    """Build a stored invoice whose amounts are computed from its vehicles."""
    totals = compute_totals(vehicles, GCT_RATE_BPS)
    return Invoice(**{
        "id": TEST_INVOICE_ID,
        "invoice_number": "INV-20261019-1A2B3C4D",
        "customer_id": TEST_CUSTOMER_ID,
        "vehicles": vehicles,
        "subtotal_cents": totals.subtotal_cents,
        "tax_rate_bps": totals.tax_rate_bps,
        "tax_amount_cents": totals.tax_cents,
        "total_cents": totals.total_cents,
        "status": InvoiceStatus.PENDING,
        "created_at": TEST_CREATED_AT,
        "updated_at": TEST_CREATED_AT,
        **fields,
    })


@pytest.fixture
def make_invoice():
    """Factory for invoices over other vehicle lists."""
    return _invoice_for


@pytest.fixture
def invoice(vehicles) -> Invoice:
    return _invoice_for(vehicles)
