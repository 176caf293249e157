"""Unit tests for e-mail service implementations"""

import base64
import pytest
import httpx
from unittest.mock import AsyncMock, MagicMock, patch

from src.adapter.services.email_service import (
    CompositeEmailService,
    LoggingEmailService,
    WebhookEmailService,
    create_email_service,
)


@pytest.fixture
def webhook_service():
    return WebhookEmailService(
        api_url="https://mail.example.test/send",
        from_address="noreply@facturation.app",
        timeout=5.0,
    )


def _patched_http_client(post):
    http_client = MagicMock()
    http_client.post = post
    client_class = MagicMock()
    client_class.return_value.__aenter__ = AsyncMock(return_value=http_client)
    client_class.return_value.__aexit__ = AsyncMock(return_value=False)
    return client_class


def test_build_payload(webhook_service, make_invoice, sample_user):
    invoice = make_invoice()

    payload = webhook_service.build_payload("compta@acme.fr", invoice, sample_user, b"%PDF-data")

    assert payload["from"] == {"email": "noreply@facturation.app", "name": "Dupont Conseil"}
    assert payload["reply_to"] == "marie.dupont@example.fr"
    assert payload["to"] == ["compta@acme.fr"]
    assert payload["subject"] == "Invoice INV-202403-00001"
    assert "120.00 EUR" in payload["text"]
    assert "2024-03-31" in payload["text"]
    attachment = payload["attachments"][0]
    assert attachment["filename"] == "INV-202403-00001.pdf"
    assert attachment["content_type"] == "application/pdf"
    assert base64.b64decode(attachment["content"]) == b"%PDF-data"


def test_factory_without_api_url():
    service = create_email_service()

    assert isinstance(service, LoggingEmailService)


def test_factory_with_api_url():
    service = create_email_service(api_url="https://mail.example.test/send", timeout=3.0)

    assert isinstance(service, CompositeEmailService)
    webhook = service.services[1]
    assert isinstance(webhook, WebhookEmailService)
    assert webhook.timeout == 3.0


@pytest.mark.asyncio
class TestWebhookEmailService:

    async def test_accepted(self, webhook_service, make_invoice, sample_user):
        response = MagicMock()
        response.raise_for_status = MagicMock()
        post = AsyncMock(return_value=response)

        with patch("src.adapter.services.email_service.httpx.AsyncClient", _patched_http_client(post)):
            delivered = await webhook_service.send_invoice(
                "compta@acme.fr", make_invoice(), sample_user, b"%PDF"
            )

        assert delivered is True
        post.assert_called_once()
        assert post.call_args[0][0] == "https://mail.example.test/send"
        assert post.call_args.kwargs["json"]["to"] == ["compta@acme.fr"]

    async def test_rejected(self, webhook_service, make_invoice, sample_user):
        request = httpx.Request("POST", "https://mail.example.test/send")
        response = MagicMock()
        response.raise_for_status = MagicMock(
            side_effect=httpx.HTTPStatusError(
                "422 Unprocessable Entity",
                request=request,
                response=httpx.Response(422, request=request),
            )
        )
        post = AsyncMock(return_value=response)

        with patch("src.adapter.services.email_service.httpx.AsyncClient", _patched_http_client(post)):
            delivered = await webhook_service.send_invoice(
                "compta@acme.fr", make_invoice(), sample_user, b"%PDF"
            )

        assert delivered is False

    async def test_connection_error(self, webhook_service, make_invoice, sample_user):
        post = AsyncMock(side_effect=httpx.ConnectError("connection refused"))

        with patch("src.adapter.services.email_service.httpx.AsyncClient", _patched_http_client(post)):
            delivered = await webhook_service.send_invoice(
                "compta@acme.fr", make_invoice(), sample_user, b"%PDF"
            )

        assert delivered is False


@pytest.mark.asyncio
class TestCompositeEmailService:

    async def test_all_delegates_succeed(self, make_invoice, sample_user):
        first, second = MagicMock(), MagicMock()
        first.send_invoice = AsyncMock(return_value=True)
        second.send_invoice = AsyncMock(return_value=True)
        service = CompositeEmailService([first, second])

        assert await service.send_invoice("a@b.fr", make_invoice(), sample_user, b"%PDF") is True

    async def test_one_delegate_fails(self, make_invoice, sample_user):
        first, second = MagicMock(), MagicMock()
        first.send_invoice = AsyncMock(return_value=False)
        second.send_invoice = AsyncMock(return_value=True)
        service = CompositeEmailService([first, second])

        assert await service.send_invoice("a@b.fr", make_invoice(), sample_user, b"%PDF") is False
        second.send_invoice.assert_called_once()
