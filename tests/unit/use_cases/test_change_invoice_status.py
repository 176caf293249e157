"""Unit tests for ChangeInvoiceStatus use case"""

import pytest
from datetime import date, datetime, timedelta
from decimal import Decimal
from unittest.mock import AsyncMock

from src.app.use_cases.invoices.change_invoice_status import ChangeInvoiceStatus
from src.app.use_cases.invoices.dtos import ChangeInvoiceStatusCommandDTO
from src.domain.invoice import InvoiceStatus


@pytest.fixture
def use_case(mock_uow, mock_invoice_repo, mock_line_item_repo, mock_history_repo):
    return ChangeInvoiceStatus(
        uow=mock_uow,
        invoice_repo=mock_invoice_repo,
        line_item_repo=mock_line_item_repo,
        history_repo=mock_history_repo,
    )


def _command(status, **kwargs):
    return ChangeInvoiceStatusCommandDTO(
        user_id="user-1", invoice_id="invoice-1", status=status, **kwargs
    )


@pytest.mark.asyncio
class TestChangeInvoiceStatus:

    async def test_draft_to_sent(
        self, use_case, make_invoice, mock_invoice_repo, mock_line_item_repo, mock_history_repo, mock_uow
    ):
        """
        Given a draft invoice with one line item
        When it is moved to SENT
        Then sent_at is set and one history row is written
        """
        # Arrange
        mock_invoice_repo.get_by_id = AsyncMock(return_value=make_invoice())
        mock_line_item_repo.count_by_invoice_id = AsyncMock(return_value=1)

        # Act
        result = await use_case.execute(_command(InvoiceStatus.SENT))

        # Assert
        assert result.is_ok()
        assert result.value.status == InvoiceStatus.SENT
        assert result.value.sent_at is not None

        mock_history_repo.create.assert_called_once()
        history = mock_history_repo.create.call_args[0][0]
        assert history.from_status == InvoiceStatus.DRAFT
        assert history.to_status == InvoiceStatus.SENT
        assert history.user_id == "user-1"
        assert history.reason == "Sending invoice"
        mock_uow.commit.assert_called_once()

    async def test_draft_without_line_items_cannot_be_sent(
        self, use_case, make_invoice, mock_invoice_repo, mock_history_repo, mock_uow
    ):
        mock_invoice_repo.get_by_id = AsyncMock(return_value=make_invoice())

        result = await use_case.execute(_command(InvoiceStatus.SENT))

        assert result.is_err()
        assert result.error.code == "INVALID_STATUS_TRANSITION"
        assert "at least one line item" in result.error.message
        mock_history_repo.create.assert_not_called()
        mock_uow.commit.assert_not_called()

    async def test_disallowed_transition(self, use_case, make_invoice, mock_invoice_repo):
        mock_invoice_repo.get_by_id = AsyncMock(return_value=make_invoice())

        result = await use_case.execute(_command(InvoiceStatus.PAID))

        assert result.is_err()
        assert result.error.code == "INVALID_STATUS_TRANSITION"
        assert result.error.message == "Cannot transition from DRAFT to PAID"

    async def test_terminal_status(self, use_case, make_invoice, mock_invoice_repo):
        mock_invoice_repo.get_by_id = AsyncMock(
            return_value=make_invoice(status=InvoiceStatus.CANCELLED)
        )

        result = await use_case.execute(_command(InvoiceStatus.SENT))

        assert result.is_err()
        assert result.error.code == "INVALID_STATUS_TRANSITION"

    async def test_paid_sets_paid_date_and_amount(
        self, use_case, make_invoice, mock_invoice_repo, mock_history_repo
    ):
        mock_invoice_repo.get_by_id = AsyncMock(
            return_value=make_invoice(status=InvoiceStatus.SENT)
        )

        result = await use_case.execute(
            _command(
                InvoiceStatus.PAID,
                reason="Bank transfer received",
                metadata={"payment_reference": "VIR-42"},
            )
        )

        assert result.is_ok()
        assert result.value.paid_date is not None
        assert result.value.paid_amount == Decimal("120.00")
        history = mock_history_repo.create.call_args[0][0]
        assert history.reason == "Bank transfer received"
        assert history.change_metadata == {"payment_reference": "VIR-42"}

    async def test_overdue_before_due_date(self, use_case, make_invoice, mock_invoice_repo):
        mock_invoice_repo.get_by_id = AsyncMock(
            return_value=make_invoice(
                status=InvoiceStatus.SENT,
                invoice_date=date.today(),
                due_date=date.today() + timedelta(days=10),
            )
        )

        result = await use_case.execute(_command(InvoiceStatus.OVERDUE))

        assert result.is_err()
        assert result.error.message == "Invoice is not overdue yet"

    async def test_manual_overdue_is_flagged_automatic(
        self, use_case, make_invoice, mock_invoice_repo, mock_history_repo
    ):
        mock_invoice_repo.get_by_id = AsyncMock(
            return_value=make_invoice(
                status=InvoiceStatus.VIEWED,
                invoice_date=date.today() - timedelta(days=40),
                due_date=date.today() - timedelta(days=10),
            )
        )

        result = await use_case.execute(_command(InvoiceStatus.OVERDUE))

        assert result.is_ok()
        history = mock_history_repo.create.call_args[0][0]
        assert history.change_metadata == {"automatic": True}

    async def test_invoice_of_another_user(self, use_case, make_invoice, mock_invoice_repo):
        mock_invoice_repo.get_by_id = AsyncMock(return_value=make_invoice(user_id="user-2"))

        result = await use_case.execute(_command(InvoiceStatus.CANCELLED))

        assert result.is_err()
        assert result.error.code == "FORBIDDEN"

    async def test_deleted_invoice_not_found(self, use_case, make_invoice, mock_invoice_repo):
        mock_invoice_repo.get_by_id = AsyncMock(
            return_value=make_invoice(deleted_at=datetime(2024, 3, 5, 12, 0, 0))
        )

        result = await use_case.execute(_command(InvoiceStatus.CANCELLED))

        assert result.is_err()
        assert result.error.code == "INVOICE_NOT_FOUND"

    async def test_history_failure_rolls_back(
        self, use_case, make_invoice, mock_invoice_repo, mock_history_repo, mock_uow
    ):
        mock_invoice_repo.get_by_id = AsyncMock(return_value=make_invoice())
        mock_history_repo.create = AsyncMock(side_effect=Exception("insert failed"))

        result = await use_case.execute(_command(InvoiceStatus.CANCELLED))

        assert result.is_err()
        assert result.error.code == "CHANGE_INVOICE_STATUS_FAILED"
        mock_uow.rollback.assert_called_once()
        mock_uow.commit.assert_not_called()
