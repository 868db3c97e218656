"""
Email gateway client for sending invoices via an HTTP gateway.

Uses HMAC-SHA256 signature for request authentication. Attachments travel
base64-encoded inside the signed JSON payload.
"""

import base64
import hashlib
import hmac
import json
import logging
from dataclasses import dataclass

import requests

logger = logging.getLogger(__name__)


class EmailGatewayError(Exception):
    """Raised when email gateway request fails."""


@dataclass(frozen=True)
class EmailAttachment:
    """A file attached to an outgoing email."""

    content: bytes
    filename: str
    content_type: str = "application/octet-stream"

    def to_payload(self) -> dict:
        return {
            "filename": self.filename,
            "content_type": self.content_type,
            "content": base64.b64encode(self.content).decode("ascii"),
        }


class EmailGatewayClient:
    """Send emails via HTTP gateway with HMAC signature verification."""

    def __init__(self, gateway_url: str, api_key: str, hmac_secret: str, sender: str = "invoices"):
        """
        Initialize with gateway credentials.

        Args:
            gateway_url: Full URL to the email gateway endpoint
            api_key: API key for X-API-Key header
            hmac_secret: Secret for HMAC-SHA256 signature
            sender: Sender identity configured on the gateway

        Raises:
            ValueError: If any credential is empty
        """
        if not gateway_url:
            raise ValueError("gateway_url is required")
        if not api_key:
            raise ValueError("api_key is required")
        if not hmac_secret:
            raise ValueError("hmac_secret is required")

        self.gateway_url = gateway_url
        self.api_key = api_key
        self.hmac_secret = hmac_secret
        self.sender = sender

    def _sign(self, payload_json: str) -> str:
        return hmac.new(
            self.hmac_secret.encode("utf-8"),
            payload_json.encode("utf-8"),
            hashlib.sha256,
        ).hexdigest()

    def _sign_and_send(self, payload: dict) -> dict:
        """
        Sign payload with HMAC and send to gateway.

        Returns:
            Parsed gateway response

        Raises:
            EmailGatewayError: On any failure
        """
        payload_json = json.dumps(payload, separators=(",", ":"))

        headers = {
            "Content-Type": "application/json",
            "X-API-Key": self.api_key,
            "X-Signature": self._sign(payload_json),
        }

        try:
            response = requests.post(
                self.gateway_url,
                data=payload_json,
                headers=headers,
                timeout=15,
            )
        except (requests.exceptions.RequestException, ConnectionError) as e:
            logger.error(f"Email gateway connection failed: {e}")
            raise EmailGatewayError(f"Connection failed: {e}")

        try:
            response_data = response.json()
        except (json.JSONDecodeError, ValueError):
            logger.error(f"Email gateway returned invalid JSON: {response.text[:200]}")
            raise EmailGatewayError("Invalid response from gateway")

        if response.status_code != 200 or not response_data.get("success"):
            error_msg = response_data.get("message", "Unknown error")
            logger.error(f"Email gateway error: {error_msg}")
            raise EmailGatewayError(f"Gateway error: {error_msg}")

        return response_data

    def send_email(
        self,
        to: list[str],
        subject: str,
        body: str,
        html: str | None = None,
        attachment: EmailAttachment | None = None,
    ) -> str:
        """
        Send an email via gateway. Not retried on failure.

        Args:
            to: Recipient email addresses
            subject: Email subject line
            body: Plain text email body
            html: Optional HTML body (gateway falls back to body when absent)
            attachment: Optional file attachment

        Returns:
            Transport message id reported by the gateway

        Raises:
            ValueError: If there are no recipients
            EmailGatewayError: On gateway failure
        """
        if not to:
            raise ValueError("At least one recipient is required")

        payload = {
            "type": "custom",
            "to": list(to),
            "subject": subject,
            "body": body,
            "html": html or body,
            "sender": self.sender,
        }
        if attachment is not None:
            payload["attachments"] = [attachment.to_payload()]

        response_data = self._sign_and_send(payload)
        message_id = str(response_data.get("message_id", ""))
        logger.info(f"Email sent to {', '.join(to)}: {subject} (message_id={message_id})")
        return message_id
