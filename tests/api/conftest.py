"""API test fixtures — authenticated TestClient over mocked services."""

from datetime import timedelta
from unittest.mock import Mock

import pytest
from starlette.testclient import TestClient

from auth.service import AuthService
from auth.session import SessionManager
from auth.types import Session
from core.enrichment import EnrichmentService
from core.services.customer_service import CustomerService
from core.services.document_service import DocumentService
from core.services.invoice_service import InvoiceService
from core.services.mail_service import MailService
from main import create_app
from utils.timezone import now_utc


# =============================================================================
# SERVICE FIXTURES
# =============================================================================


@pytest.fixture
def invoice_service(invoice):
    mock = Mock(spec=InvoiceService)
    mock.get_by_id.return_value = invoice
    return mock


@pytest.fixture
def customer_service(customer):
    mock = Mock(spec=CustomerService)
    mock.get_by_id.return_value = customer
    return mock


@pytest.fixture
def enrichment():
    mock = Mock(spec=EnrichmentService)
    mock.describe_sale.return_value = None
    return mock


@pytest.fixture
def document_service(enrichment):
    """Real renderer; only the LLM behind it is mocked."""
    return DocumentService(enrichment)


@pytest.fixture
def mail_service():
    mock = Mock(spec=MailService)
    mock.send.return_value = "msg-001"
    mock.send_invoice.return_value = "msg-002"
    return mock


@pytest.fixture
def services(invoice_service, customer_service, document_service, mail_service):
    return {
        "invoice": invoice_service,
        "customer": customer_service,
        "document": document_service,
        "mail": mail_service,
    }


# =============================================================================
# AUTH FIXTURES
# =============================================================================


@pytest.fixture
def mock_session_manager():
    now = now_utc()
    mock = Mock(spec=SessionManager)
    mock.validate_session.return_value = Session(
        token="test-token",
        email="operator@example.com",
        created_at=now,
        expires_at=now + timedelta(hours=12),
        last_activity_at=now,
    )
    return mock


# =============================================================================
# APP & CLIENT FIXTURES
# =============================================================================


@pytest.fixture
def app(services, mock_session_manager):
    """Full app: middleware, error handlers and every router."""
    return create_app(services, Mock(spec=AuthService), mock_session_manager)


@pytest.fixture
def client(app):
    """Authenticated test client."""
    c = TestClient(app, raise_server_exceptions=False)
    c.cookies.set("session_token", "test-token")
    return c


@pytest.fixture
def unauthed_client(app):
    """Unauthenticated test client (no session cookie)."""
    return TestClient(app, raise_server_exceptions=False)
