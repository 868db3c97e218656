"""
Invoice service: creation, lookup and status changes.

An invoice and its customer are written in one transaction. Line items and
totals are fixed at creation; afterwards only the status can move, from
Pending to Paid or Cancelled.
"""

import logging
import secrets
from datetime import datetime
from uuid import UUID, uuid4

import psycopg2.errors
from psycopg2.extras import Json

from clients.postgres_client import PostgresClient
from core.config import DealerConfig
from core.exceptions import InvoiceNumberExhaustedError
from core.models import Customer, Invoice, InvoiceCreate, InvoiceListing, InvoiceStatus
from core.totals import compute_totals
from utils.timezone import now_utc, to_local

logger = logging.getLogger(__name__)


def generate_invoice_number(now: datetime | None = None, tz_name: str = "America/Jamaica") -> str:
    """
    Generate a human-facing invoice number.

    Format: INV-YYYYMMDD-XXXXXXXX where the date is the dealership's local
    date and XXXXXXXX is 32 random bits in hex. Uniqueness is enforced by
    the database; callers retry on collision.
    """
    local = to_local(now or now_utc(), tz_name)
    return f"INV-{local:%Y%m%d}-{secrets.token_hex(4).upper()}"


def _escape_like(term: str) -> str:
    """Escape LIKE wildcards so a search term matches literally."""
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class InvoiceService:
    """Service for invoice operations."""

    MAX_NUMBER_ATTEMPTS = 3

    def __init__(self, postgres: PostgresClient, config: DealerConfig | None = None):
        self.postgres = postgres
        self.config = config or DealerConfig()

    def _insert(self, data: InvoiceCreate, invoice_number: str) -> tuple[dict, dict]:
        """Insert customer and invoice atomically. Returns (customer_row, invoice_row)."""
        totals = compute_totals(data.vehicles)
        vehicles = [v.model_dump(mode="json") for v in data.vehicles]
        customer = data.customer
        now = now_utc()

        with self.postgres.transaction() as cur:
            cur.execute(
                """
                INSERT INTO customers (
                    id, full_name, tax_registration_number,
                    address, phone, email, created_at
                ) VALUES (%s, %s, %s, %s, %s, %s, %s)
                RETURNING *
                """,
                (
                    uuid4(), customer.full_name, customer.tax_registration_number,
                    customer.address, customer.phone, customer.email, now,
                ),
            )
            customer_row = cur.fetchone()

            cur.execute(
                """
                INSERT INTO invoices (
                    id, invoice_number, customer_id, vehicles,
                    subtotal_cents, tax_rate_bps, tax_amount_cents, total_cents,
                    status, created_at, updated_at
                ) VALUES (
                    %s, %s, %s, %s,
                    %s, %s, %s, %s,
                    %s, %s, %s
                )
                RETURNING *
                """,
                (
                    uuid4(), invoice_number, customer_row["id"], Json(vehicles),
                    totals.subtotal_cents, totals.tax_rate_bps, totals.tax_cents, totals.total_cents,
                    InvoiceStatus.PENDING.value, now, now,
                ),
            )
            invoice_row = cur.fetchone()

        return dict(customer_row), dict(invoice_row)

    def create(self, data: InvoiceCreate) -> tuple[Invoice, Customer]:
        """
        Create a customer and their invoice together.

        Args:
            data: Validated form submission

        Returns:
            (invoice, customer) as stored, invoice in Pending status

        Raises:
            InvoiceNumberExhaustedError: If every generated number collided
            psycopg2.Error: On any other database failure (nothing is stored)
        """
        for attempt in range(1, self.MAX_NUMBER_ATTEMPTS + 1):
            invoice_number = generate_invoice_number(tz_name=self.config.display_timezone)
            try:
                customer_row, invoice_row = self._insert(data, invoice_number)
            except psycopg2.errors.UniqueViolation:
                logger.warning(
                    "Invoice number %s already taken (attempt %d/%d)",
                    invoice_number, attempt, self.MAX_NUMBER_ATTEMPTS,
                )
                continue

            invoice = Invoice.model_validate(invoice_row)
            customer = Customer.model_validate(customer_row)
            logger.info(
                "Created invoice %s for %s: %d vehicle(s), total %d cents",
                invoice.invoice_number, customer.full_name, len(invoice.vehicles), invoice.total_cents,
            )
            return invoice, customer

        raise InvoiceNumberExhaustedError(
            f"Could not allocate a unique invoice number after {self.MAX_NUMBER_ATTEMPTS} attempts"
        )

    def get_by_id(self, invoice_id: UUID) -> Invoice | None:
        """Get invoice by ID, or None if it doesn't exist."""
        row = self.postgres.execute_single(
            "SELECT * FROM invoices WHERE id = %s",
            (invoice_id,)
        )

        if row is None:
            return None

        return Invoice.model_validate(row)

    def list_recent(self, limit: int = 50, search: str | None = None) -> list[InvoiceListing]:
        """
        List invoices with their customer's name, newest first.

        search matches, case-insensitively, any part of the invoice number,
        the customer's name, or the local issue date as YYYY-MM-DD.
        """
        params: list = []
        where = ""

        term = (search or "").strip()
        if term:
            pattern = f"%{_escape_like(term)}%"
            where = """
            WHERE i.invoice_number ILIKE %s
               OR c.full_name ILIKE %s
               OR to_char(i.created_at AT TIME ZONE %s, 'YYYY-MM-DD') LIKE %s
            """
            params.extend([pattern, pattern, self.config.display_timezone, pattern])

        params.append(limit)
        rows = self.postgres.execute(
            f"""
            SELECT i.*, c.full_name AS customer_name
            FROM invoices i
            LEFT JOIN customers c ON c.id = i.customer_id
            {where}
            ORDER BY i.created_at DESC
            LIMIT %s
            """,
            tuple(params)
        )

        return [InvoiceListing.model_validate(row) for row in rows]

    def update_status(self, invoice_id: UUID, status: InvoiceStatus) -> Invoice:
        """
        Mark a pending invoice as Paid or Cancelled.

        Line items and totals are never touched.

        Raises:
            ValueError: If invoice not found, not pending, or status is Pending
        """
        current = self.get_by_id(invoice_id)
        if current is None:
            raise ValueError(f"Invoice {invoice_id} not found")

        if status == InvoiceStatus.PENDING:
            raise ValueError("Invoices can only move from Pending to Paid or Cancelled")

        if not current.is_pending:
            raise ValueError(
                f"Invoice {current.invoice_number} is already {current.status.value}"
            )

        row = self.postgres.execute_single(
            """
            UPDATE invoices
            SET status = %s, updated_at = %s
            WHERE id = %s AND status = %s
            RETURNING *
            """,
            (status.value, now_utc(), invoice_id, InvoiceStatus.PENDING.value)
        )
        if row is None:
            raise ValueError(f"Invoice {current.invoice_number} changed status concurrently")

        updated = Invoice.model_validate(row)
        logger.info(
            "Invoice %s status %s -> %s",
            updated.invoice_number, current.status.value, updated.status.value,
        )
        return updated
