"""Unit tests for MarkOverdueInvoices use case"""

import pytest
from datetime import date
from unittest.mock import AsyncMock

from src.app.use_cases.invoices.mark_overdue_invoices import MarkOverdueInvoices, OVERDUE_REASON
from src.domain.invoice import InvoiceStatus


@pytest.fixture
def use_case(mock_uow, mock_invoice_repo, mock_history_repo):
    return MarkOverdueInvoices(
        uow=mock_uow,
        invoice_repo=mock_invoice_repo,
        history_repo=mock_history_repo,
        batch_size=100,
    )


@pytest.mark.asyncio
class TestMarkOverdueInvoices:

    async def test_marks_past_due_invoices(
        self, use_case, make_invoice, mock_invoice_repo, mock_history_repo, mock_uow
    ):
        """
        Given one SENT and one VIEWED invoice past their due date
        When overdue detection runs
        Then both become OVERDUE with an automatic history row each
        """
        # Arrange
        today = date(2024, 4, 15)
        invoices = [
            make_invoice(id="inv-a", status=InvoiceStatus.SENT, due_date=date(2024, 4, 1)),
            make_invoice(
                id="inv-b", user_id="user-2", status=InvoiceStatus.VIEWED, due_date=date(2024, 4, 14)
            ),
        ]
        mock_invoice_repo.get_overdue_candidates = AsyncMock(return_value=invoices)

        # Act
        result = await use_case.execute(today=today)

        # Assert
        assert result.is_ok()
        assert result.value.checked == 2
        assert result.value.marked == 2
        assert result.value.invoice_ids == ["inv-a", "inv-b"]
        assert result.value.run_date == today
        assert all(invoice.status == InvoiceStatus.OVERDUE for invoice in invoices)

        mock_invoice_repo.get_overdue_candidates.assert_called_once_with(today, limit=100)
        assert mock_history_repo.create.call_count == 2
        history = [call[0][0] for call in mock_history_repo.create.call_args_list]
        assert [h.user_id for h in history] == ["user-1", "user-2"]
        assert all(h.reason == OVERDUE_REASON for h in history)
        assert all(h.change_metadata == {"automatic": True} for h in history)
        mock_uow.commit.assert_called_once()

    async def test_skips_invoice_not_yet_due(
        self, use_case, make_invoice, mock_invoice_repo, mock_history_repo
    ):
        invoice = make_invoice(status=InvoiceStatus.SENT, due_date=date(2024, 4, 15))
        mock_invoice_repo.get_overdue_candidates = AsyncMock(return_value=[invoice])

        result = await use_case.execute(today=date(2024, 4, 15))

        assert result.value.checked == 1
        assert result.value.marked == 0
        assert invoice.status == InvoiceStatus.SENT
        mock_history_repo.create.assert_not_called()

    async def test_no_candidates(self, use_case, mock_invoice_repo, mock_uow):
        mock_invoice_repo.get_overdue_candidates = AsyncMock(return_value=[])

        result = await use_case.execute(today=date(2024, 4, 15))

        assert result.is_ok()
        assert result.value.marked == 0
        mock_uow.commit.assert_called_once()

    async def test_rollback_on_failure(self, use_case, mock_invoice_repo, mock_uow):
        mock_invoice_repo.get_overdue_candidates = AsyncMock(side_effect=Exception("connection lost"))

        result = await use_case.execute(today=date(2024, 4, 15))

        assert result.is_err()
        assert result.error.code == "MARK_OVERDUE_FAILED"
        mock_uow.rollback.assert_called_once()
