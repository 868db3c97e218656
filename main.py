"""
Application entry point.

Run directly:
    python3 main.py

Or with uvicorn's factory mode:
    uvicorn main:build_app --factory
"""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI

from api.base import success_response
from api.documents import create_documents_router
from api.errors import register_error_handlers
from api.invoices import create_invoices_router
from api.mail import create_mail_router
from api.middleware import RequestIDMiddleware
from api.totals import create_totals_router
from auth import (
    AuthConfig,
    AuthMiddleware,
    AuthService,
    RateLimiter,
    SessionManager,
    create_auth_router,
)
from clients import (
    EmailGatewayClient,
    LLMClient,
    PostgresClient,
    ValkeyClient,
    get_database_url,
    get_email_config,
    get_operator_config,
    get_valkey_url,
)
from core.config import DealerConfig
from core.enrichment import EnrichmentService
from core.services.customer_service import CustomerService
from core.services.document_service import DocumentService
from core.services.invoice_service import InvoiceService
from core.services.mail_service import MailService

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    """Configure root logger from LOG_LEVEL (default INFO)."""
    level = os.getenv("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def build_services(
    postgres: PostgresClient,
    email_client: EmailGatewayClient,
    llm: LLMClient | None,
    config: DealerConfig | None = None,
) -> dict:
    """Wire the application services around their clients."""
    config = config or DealerConfig()
    enrichment = EnrichmentService(llm, config)
    return {
        "invoice": InvoiceService(postgres, config),
        "customer": CustomerService(postgres),
        "document": DocumentService(enrichment, config),
        "mail": MailService(email_client, config),
    }


def create_app(
    services: dict,
    auth_service: AuthService,
    session_manager: SessionManager,
    auth_config: AuthConfig | None = None,
) -> FastAPI:
    """Assemble the FastAPI app: middleware, error handlers and routes."""
    auth_config = auth_config or AuthConfig()

    app = FastAPI(title="SteelWheel Invoicing")
    app.add_middleware(AuthMiddleware, session_manager=session_manager, config=auth_config)
    # Outermost, so auth rejections also carry a request ID
    app.add_middleware(RequestIDMiddleware)
    register_error_handlers(app)

    @app.get("/health")
    async def health():
        return success_response({"status": "ok"}).model_dump(mode="json")

    app.include_router(create_auth_router(auth_service, auth_config), prefix="/auth")
    app.include_router(create_totals_router(), prefix="/api")
    app.include_router(create_invoices_router(services), prefix="/api")
    app.include_router(create_documents_router(services), prefix="/api")
    app.include_router(create_mail_router(services), prefix="/api")

    return app


def _build_llm() -> LLMClient | None:
    try:
        return LLMClient()
    except Exception:
        logger.warning("LLM client unavailable, documents will have no enrichment note", exc_info=True)
        return None


def build_app() -> FastAPI:
    """Build the production app with clients configured from Vault."""
    load_dotenv(Path(__file__).parent / ".env")
    configure_logging()

    auth_config = AuthConfig()
    dealer_config = DealerConfig()

    postgres = PostgresClient(get_database_url())
    valkey = ValkeyClient(get_valkey_url())
    email_client = EmailGatewayClient(**get_email_config())

    session_manager = SessionManager(valkey, auth_config)
    operator = get_operator_config()
    auth_service = AuthService(
        auth_config,
        operator_email=operator["email"],
        password_hash=operator["password_hash"],
        session_manager=session_manager,
        rate_limiter=RateLimiter(valkey, auth_config),
    )

    services = build_services(postgres, email_client, _build_llm(), dealer_config)
    logger.info("Application configured for %s", dealer_config.company_name)
    return create_app(services, auth_service, session_manager, auth_config)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(build_app(), host="0.0.0.0", port=int(os.getenv("PORT", "8000")))
