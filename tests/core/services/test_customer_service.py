"""Tests for CustomerService lookups."""

from unittest.mock import Mock
from uuid import uuid4

import pytest

from clients.postgres_client import PostgresClient
from core.services.customer_service import CustomerService


@pytest.fixture
def postgres():
    return Mock(spec=PostgresClient)


class TestCustomerService:

    def test_get_by_id(self, postgres, customer):
        postgres.execute_single.return_value = customer.model_dump()
        service = CustomerService(postgres)

        result = service.get_by_id(customer.id)

        assert result == customer
        assert postgres.execute_single.call_args.args[1] == (customer.id,)

    def test_get_by_id_missing(self, postgres):
        postgres.execute_single.return_value = None

        assert CustomerService(postgres).get_by_id(uuid4()) is None

    def test_list_recent(self, postgres, customer):
        postgres.execute.return_value = [customer.model_dump()]

        result = CustomerService(postgres).list_recent(5)

        assert result == [customer]
        query, params = postgres.execute.call_args.args
        assert "ORDER BY created_at DESC" in query
        assert params == (5,)
