"""Global exception handlers for FastAPI."""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from starlette.responses import JSONResponse

from api.base import error_response, ErrorCodes
from clients.email_client import EmailGatewayError
from core.exceptions import DocumentRenderError, InvoiceNumberExhaustedError

logger = logging.getLogger(__name__)


def _json_error(request: Request, status_code: int, code: str, message: str) -> JSONResponse:
    request_id = getattr(request.state, "request_id", None)
    return JSONResponse(
        status_code=status_code,
        content=error_response(code, message, request_id).model_dump(mode="json"),
    )


def register_error_handlers(app: FastAPI) -> None:
    """Register global exception handlers on the app."""

    @app.exception_handler(ValueError)
    async def value_error_handler(request: Request, exc: ValueError):
        message = str(exc)
        if "not found" in message.lower():
            return _json_error(request, 404, ErrorCodes.NOT_FOUND, message)
        return _json_error(request, 400, ErrorCodes.INVALID_REQUEST, message)

    @app.exception_handler(RequestValidationError)
    async def request_validation_error_handler(request: Request, exc: RequestValidationError):
        return _json_error(request, 422, ErrorCodes.VALIDATION_ERROR, str(exc.errors()))

    # Registered separately: pydantic's ValidationError subclasses ValueError
    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError):
        return _json_error(request, 422, ErrorCodes.VALIDATION_ERROR, str(exc.errors()))

    @app.exception_handler(DocumentRenderError)
    async def document_render_error_handler(request: Request, exc: DocumentRenderError):
        logger.error("Document generation failed: %s", exc)
        return _json_error(
            request, 500, ErrorCodes.DOCUMENT_GENERATION_FAILED,
            "The invoice document could not be generated",
        )

    @app.exception_handler(EmailGatewayError)
    async def email_gateway_error_handler(request: Request, exc: EmailGatewayError):
        logger.error("Mail dispatch failed: %s", exc)
        return _json_error(
            request, 502, ErrorCodes.MAIL_DISPATCH_FAILED,
            "The email could not be sent",
        )

    @app.exception_handler(InvoiceNumberExhaustedError)
    async def invoice_number_error_handler(request: Request, exc: InvoiceNumberExhaustedError):
        logger.error("Invoice number allocation failed: %s", exc)
        return _json_error(
            request, 503, ErrorCodes.INVOICE_NUMBER_UNAVAILABLE,
            "Could not allocate an invoice number, please retry",
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled exception")
        return _json_error(request, 500, ErrorCodes.INTERNAL_ERROR, "An internal error occurred")
