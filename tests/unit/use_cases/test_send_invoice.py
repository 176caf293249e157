"""Unit tests for SendInvoice use case

Tests cover:
- DRAFT invoices are moved to SENT with one history row
- Already sent invoices are re-sent without a status change
- Cancelled invoices cannot be sent
- Delivery failure rolls back and returns EMAIL_DELIVERY_FAILED
"""

import pytest
from unittest.mock import AsyncMock, MagicMock

from src.app.use_cases.invoices.dtos import SendInvoiceCommandDTO
from src.app.use_cases.invoices.send_invoice import SendInvoice
from src.domain.invoice import InvoiceStatus


@pytest.fixture
def mock_pdf_service():
    service = MagicMock()
    service.generate_invoice = MagicMock(return_value=b"%PDF-1.4 fake")
    return service


@pytest.fixture
def mock_email_service():
    service = MagicMock()
    service.send_invoice = AsyncMock(return_value=True)
    return service


@pytest.fixture
def use_case(
    mock_uow,
    mock_invoice_repo,
    mock_line_item_repo,
    mock_client_repo,
    mock_user_repo,
    mock_history_repo,
    mock_pdf_service,
    mock_email_service,
    sample_client,
    sample_user,
    make_line_item,
):
    mock_client_repo.get_by_id = AsyncMock(return_value=sample_client)
    mock_user_repo.get_by_id = AsyncMock(return_value=sample_user)
    mock_line_item_repo.get_by_invoice_id = AsyncMock(return_value=[make_line_item()])
    return SendInvoice(
        uow=mock_uow,
        invoice_repo=mock_invoice_repo,
        line_item_repo=mock_line_item_repo,
        client_repo=mock_client_repo,
        user_repo=mock_user_repo,
        history_repo=mock_history_repo,
        pdf_service=mock_pdf_service,
        email_service=mock_email_service,
    )


@pytest.mark.asyncio
class TestSendInvoice:

    async def test_pdf_rendered_with_sent_status(
        self, use_case, make_invoice, mock_invoice_repo, mock_pdf_service
    ):
        """
        Given a draft invoice
        When it is sent for the first time
        Then the attached document is rendered after the move to SENT
        """
        # Arrange
        rendered_statuses = []

        def _render(invoice, client, user, line_items):
            rendered_statuses.append(invoice.status)
            return b"%PDF-1.4 fake"

        mock_pdf_service.generate_invoice = MagicMock(side_effect=_render)
        mock_invoice_repo.get_by_id = AsyncMock(return_value=make_invoice())

        # Act
        result = await use_case.execute(
            SendInvoiceCommandDTO(user_id="user-1", invoice_id="invoice-1")
        )

        # Assert
        assert result.is_ok()
        assert rendered_statuses == [InvoiceStatus.SENT]

    async def test_send_draft_invoice(
        self,
        use_case,
        make_invoice,
        mock_invoice_repo,
        mock_history_repo,
        mock_email_service,
        mock_uow,
    ):
        """
        Given a draft invoice with line items
        When it is sent without an explicit recipient
        Then the client's e-mail receives the PDF and the invoice becomes SENT
        """
        # Arrange
        mock_invoice_repo.get_by_id = AsyncMock(return_value=make_invoice())
        command = SendInvoiceCommandDTO(user_id="user-1", invoice_id="invoice-1")

        # Act
        result = await use_case.execute(command)

        # Assert
        assert result.is_ok()
        response = result.value
        assert response.status == InvoiceStatus.SENT
        assert response.recipient_email == "compta@acme.fr"
        assert response.sent_at is not None
        assert response.pdf_size == len(b"%PDF-1.4 fake")

        mock_email_service.send_invoice.assert_called_once()
        kwargs = mock_email_service.send_invoice.call_args.kwargs
        assert kwargs["recipient_email"] == "compta@acme.fr"
        assert kwargs["pdf_bytes"] == b"%PDF-1.4 fake"

        history = mock_history_repo.create.call_args[0][0]
        assert history.from_status == InvoiceStatus.DRAFT
        assert history.to_status == InvoiceStatus.SENT
        assert history.reason == "Sent by e-mail to compta@acme.fr"
        assert history.change_metadata == {"recipient_email": "compta@acme.fr"}
        mock_uow.commit.assert_called_once()

    async def test_explicit_recipient_is_lowercased(self, use_case, make_invoice, mock_invoice_repo):
        mock_invoice_repo.get_by_id = AsyncMock(return_value=make_invoice())
        command = SendInvoiceCommandDTO(
            user_id="user-1", invoice_id="invoice-1", recipient_email="Boss@Acme.FR"
        )

        result = await use_case.execute(command)

        assert result.value.recipient_email == "boss@acme.fr"

    async def test_draft_without_line_items(
        self, use_case, make_invoice, mock_invoice_repo, mock_line_item_repo, mock_email_service
    ):
        mock_invoice_repo.get_by_id = AsyncMock(return_value=make_invoice())
        mock_line_item_repo.get_by_invoice_id = AsyncMock(return_value=[])
        command = SendInvoiceCommandDTO(user_id="user-1", invoice_id="invoice-1")

        result = await use_case.execute(command)

        assert result.is_err()
        assert result.error.code == "INVALID_STATUS_TRANSITION"
        mock_email_service.send_invoice.assert_not_called()

    @pytest.mark.parametrize(
        "status",
        [InvoiceStatus.SENT, InvoiceStatus.VIEWED, InvoiceStatus.OVERDUE, InvoiceStatus.PAID],
    )
    async def test_resend_keeps_status(
        self, status, use_case, make_invoice, mock_invoice_repo, mock_history_repo, mock_uow
    ):
        mock_invoice_repo.get_by_id = AsyncMock(return_value=make_invoice(status=status))
        command = SendInvoiceCommandDTO(user_id="user-1", invoice_id="invoice-1")

        result = await use_case.execute(command)

        assert result.is_ok()
        assert result.value.status == status
        mock_history_repo.create.assert_not_called()
        mock_uow.commit.assert_called_once()

    @pytest.mark.parametrize("status", [InvoiceStatus.CANCELLED, InvoiceStatus.REFUNDED])
    async def test_closed_invoice_not_sendable(
        self, status, use_case, make_invoice, mock_invoice_repo, mock_email_service
    ):
        mock_invoice_repo.get_by_id = AsyncMock(return_value=make_invoice(status=status))
        command = SendInvoiceCommandDTO(user_id="user-1", invoice_id="invoice-1")

        result = await use_case.execute(command)

        assert result.is_err()
        assert result.error.code == "INVOICE_NOT_SENDABLE"
        mock_email_service.send_invoice.assert_not_called()

    async def test_delivery_failure_rolls_back(
        self, use_case, make_invoice, mock_invoice_repo, mock_email_service, mock_uow
    ):
        """
        Given a draft invoice
        When the e-mail service fails to deliver
        Then nothing is committed and EMAIL_DELIVERY_FAILED is returned
        """
        mock_invoice_repo.get_by_id = AsyncMock(return_value=make_invoice())
        mock_email_service.send_invoice = AsyncMock(return_value=False)
        command = SendInvoiceCommandDTO(user_id="user-1", invoice_id="invoice-1")

        result = await use_case.execute(command)

        assert result.is_err()
        assert result.error.code == "EMAIL_DELIVERY_FAILED"
        assert "compta@acme.fr" in result.error.message
        mock_uow.rollback.assert_called_once()
        mock_uow.commit.assert_not_called()

    async def test_pdf_failure(self, use_case, make_invoice, mock_invoice_repo, mock_pdf_service, mock_uow):
        mock_invoice_repo.get_by_id = AsyncMock(return_value=make_invoice())
        mock_pdf_service.generate_invoice = MagicMock(side_effect=RuntimeError("render failed"))
        command = SendInvoiceCommandDTO(user_id="user-1", invoice_id="invoice-1")

        result = await use_case.execute(command)

        assert result.is_err()
        assert result.error.code == "SEND_INVOICE_FAILED"
        mock_uow.rollback.assert_called_once()

    async def test_invoice_not_found(self, use_case, mock_invoice_repo):
        mock_invoice_repo.get_by_id = AsyncMock(return_value=None)
        command = SendInvoiceCommandDTO(user_id="user-1", invoice_id="missing")

        result = await use_case.execute(command)

        assert result.is_err()
        assert result.error.code == "INVOICE_NOT_FOUND"
