"""
Customer reads.

Customers are created together with their invoice (see InvoiceService), so
this service only looks them up.
"""

from uuid import UUID

from clients.postgres_client import PostgresClient
from core.models import Customer


class CustomerService:
    """Service for customer lookups."""

    def __init__(self, postgres: PostgresClient):
        self.postgres = postgres

    def get_by_id(self, customer_id: UUID) -> Customer | None:
        """Get customer by ID, or None if it doesn't exist."""
        row = self.postgres.execute_single(
            "SELECT * FROM customers WHERE id = %s",
            (customer_id,)
        )

        if row is None:
            return None

        return Customer.model_validate(row)

    def list_recent(self, limit: int = 50) -> list[Customer]:
        """List customers, newest first."""
        rows = self.postgres.execute(
            "SELECT * FROM customers ORDER BY created_at DESC LIMIT %s",
            (limit,)
        )
        return [Customer.model_validate(row) for row in rows]
