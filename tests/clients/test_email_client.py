"""
Tests for EmailGatewayClient.

Tests verify the client's contract with calling code: signed JSON out,
message id back, typed errors on any gateway failure.
"""

import base64
import hashlib
import hmac
import json

import pytest
import requests
import responses

from clients.email_client import EmailAttachment, EmailGatewayClient, EmailGatewayError


GATEWAY_URL = "https://gateway.example.com/send"


@pytest.fixture
def client():
    """Create client with test credentials."""
    return EmailGatewayClient(
        gateway_url=GATEWAY_URL,
        api_key="test-api-key",
        hmac_secret="test-hmac-secret",
    )


class TestEmailGatewayClientInit:
    """Test client initialization - fail-fast on invalid config."""

    @pytest.mark.parametrize("field", ["gateway_url", "api_key", "hmac_secret"])
    def test_init_rejects_empty_credential(self, field):
        kwargs = {"gateway_url": GATEWAY_URL, "api_key": "k", "hmac_secret": "s", field: ""}

        with pytest.raises(ValueError, match=field):
            EmailGatewayClient(**kwargs)


class TestSendEmail:
    """Test send_email - uses responses library for HTTP mocking."""

    @responses.activate
    def test_returns_message_id(self, client):
        responses.add(responses.POST, GATEWAY_URL, json={"success": True, "message_id": "msg-42"}, status=200)

        message_id = client.send_email(["buyer@example.com"], "Hello", "Body text")

        assert message_id == "msg-42"

    @responses.activate
    def test_request_is_signed(self, client):
        responses.add(responses.POST, GATEWAY_URL, json={"success": True, "message_id": "m"}, status=200)

        client.send_email(["buyer@example.com"], "Hello", "Body text")

        request = responses.calls[0].request
        expected = hmac.new(b"test-hmac-secret", request.body.encode("utf-8"), hashlib.sha256).hexdigest()
        assert request.headers["X-Signature"] == expected
        assert request.headers["X-API-Key"] == "test-api-key"

    @responses.activate
    def test_payload_shape(self, client):
        responses.add(responses.POST, GATEWAY_URL, json={"success": True, "message_id": "m"}, status=200)

        client.send_email(["a@example.com", "b@example.com"], "Subject", "Plain")

        payload = json.loads(responses.calls[0].request.body)
        assert payload["to"] == ["a@example.com", "b@example.com"]
        assert payload["subject"] == "Subject"
        assert payload["body"] == "Plain"
        assert payload["html"] == "Plain"
        assert "attachments" not in payload

    @responses.activate
    def test_attachment_base64_encoded(self, client):
        responses.add(responses.POST, GATEWAY_URL, json={"success": True, "message_id": "m"}, status=200)
        attachment = EmailAttachment(b"%PDF-1.3 bytes", "INV-1.pdf", "application/pdf")

        client.send_email(["a@example.com"], "Invoice", "See attached", attachment=attachment)

        sent = json.loads(responses.calls[0].request.body)["attachments"][0]
        assert sent["filename"] == "INV-1.pdf"
        assert sent["content_type"] == "application/pdf"
        assert base64.b64decode(sent["content"]) == b"%PDF-1.3 bytes"

    def test_requires_recipient(self, client):
        with pytest.raises(ValueError, match="recipient"):
            client.send_email([], "Subject", "Body")

    @responses.activate
    def test_gateway_500_raises_error(self, client):
        responses.add(responses.POST, GATEWAY_URL, json={"success": False, "message": "Internal error"}, status=500)

        with pytest.raises(EmailGatewayError):
            client.send_email(["a@example.com"], "Subject", "Body")

    @responses.activate
    def test_gateway_success_false_raises_error(self, client):
        responses.add(responses.POST, GATEWAY_URL, json={"success": False, "message": "Invalid email"}, status=200)

        with pytest.raises(EmailGatewayError, match="Invalid email"):
            client.send_email(["a@example.com"], "Subject", "Body")

    @responses.activate
    def test_invalid_json_raises_error(self, client):
        responses.add(responses.POST, GATEWAY_URL, body="<html>bad gateway</html>", status=502)

        with pytest.raises(EmailGatewayError, match="Invalid response"):
            client.send_email(["a@example.com"], "Subject", "Body")

    @responses.activate
    def test_connection_error_raises_error(self, client):
        responses.add(responses.POST, GATEWAY_URL, body=requests.exceptions.ConnectionError("refused"))

        with pytest.raises(EmailGatewayError, match="Connection failed"):
            client.send_email(["a@example.com"], "Subject", "Body")
