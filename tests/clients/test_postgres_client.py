"""Tests for PostgresClient with the connection pool patched out."""

from unittest.mock import MagicMock, patch
from uuid import UUID

import psycopg2.pool
import pytest

from clients.postgres_client import PostgresClient


DATABASE_URL = "postgresql://test@localhost/steelwheel_test"


@pytest.fixture
def pool():
    with patch("clients.postgres_client.psycopg2.pool.ThreadedConnectionPool") as pool_cls, \
            patch("clients.postgres_client.psycopg2.extras.register_default_jsonb"), \
            patch("clients.postgres_client.psycopg2.extras.register_uuid"):
        PostgresClient._connection_pools.pop(DATABASE_URL, None)
        yield pool_cls.return_value
        PostgresClient._connection_pools.pop(DATABASE_URL, None)


@pytest.fixture
def connection(pool):
    conn = MagicMock()
    pool.getconn.return_value = conn
    return conn


@pytest.fixture
def cursor(connection):
    cur = MagicMock()
    connection.cursor.return_value.__enter__.return_value = cur
    return cur


class TestTransaction:

    def test_commits_on_success(self, pool, connection, cursor):
        db = PostgresClient(DATABASE_URL)

        with db.transaction() as cur:
            cur.execute("SELECT 1")

        connection.commit.assert_called_once()
        connection.rollback.assert_not_called()
        pool.putconn.assert_called_once_with(connection)

    def test_rolls_back_and_reraises(self, pool, connection, cursor):
        db = PostgresClient(DATABASE_URL)

        with pytest.raises(RuntimeError):
            with db.transaction() as cur:
                cur.execute("INSERT INTO customers ...")
                raise RuntimeError("second insert failed")

        connection.rollback.assert_called_once()
        connection.commit.assert_not_called()
        pool.putconn.assert_called_once_with(connection)


class TestExecute:

    def test_returns_row_dicts(self, pool, connection, cursor):
        cursor.description = [("id",)]
        cursor.fetchall.return_value = [{"id": 1}, {"id": 2}]

        rows = PostgresClient(DATABASE_URL).execute("SELECT id FROM invoices")

        assert rows == [{"id": 1}, {"id": 2}]

    def test_no_result_set(self, pool, connection, cursor):
        cursor.description = None

        assert PostgresClient(DATABASE_URL).execute("UPDATE invoices SET status = 'Paid'") == []

    def test_uuid_params_converted(self, pool, connection, cursor):
        cursor.description = None
        invoice_id = UUID("00000000-0000-0000-0000-0000000000a1")

        PostgresClient(DATABASE_URL).execute("SELECT 1 WHERE %s IS NOT NULL", (invoice_id,))

        assert cursor.execute.call_args.args[1] == ("00000000-0000-0000-0000-0000000000a1",)

    def test_execute_single(self, pool, connection, cursor):
        cursor.description = [("id",)]
        cursor.fetchall.return_value = []

        assert PostgresClient(DATABASE_URL).execute_single("SELECT * FROM invoices WHERE id = %s", ("x",)) is None


class TestPool:

    def test_pool_shared_per_url(self, pool):
        PostgresClient(DATABASE_URL)
        PostgresClient(DATABASE_URL)

        assert psycopg2.pool.ThreadedConnectionPool.call_count == 1

    def test_close_removes_pool(self, pool):
        db = PostgresClient(DATABASE_URL)

        db.close()

        pool.closeall.assert_called_once()
        assert DATABASE_URL not in PostgresClient._connection_pools
