"""Unit tests for GenerateInvoicePdf use case"""

import pytest
from unittest.mock import AsyncMock, MagicMock

from src.app.use_cases.invoices.generate_invoice_pdf import GenerateInvoicePdf


@pytest.fixture
def mock_pdf_service():
    service = MagicMock()
    service.generate_invoice = MagicMock(return_value=b"%PDF-1.4 test")
    return service


@pytest.fixture
def use_case(
    mock_invoice_repo,
    mock_line_item_repo,
    mock_client_repo,
    mock_user_repo,
    mock_pdf_service,
    sample_client,
    sample_user,
):
    mock_client_repo.get_by_id = AsyncMock(return_value=sample_client)
    mock_user_repo.get_by_id = AsyncMock(return_value=sample_user)
    return GenerateInvoicePdf(
        invoice_repo=mock_invoice_repo,
        line_item_repo=mock_line_item_repo,
        client_repo=mock_client_repo,
        user_repo=mock_user_repo,
        pdf_service=mock_pdf_service,
    )


@pytest.mark.asyncio
class TestGenerateInvoicePdf:

    async def test_renders_with_related_records(
        self,
        use_case,
        make_invoice,
        make_line_item,
        mock_invoice_repo,
        mock_line_item_repo,
        mock_pdf_service,
        sample_client,
        sample_user,
    ):
        invoice = make_invoice()
        line_items = [make_line_item()]
        mock_invoice_repo.get_by_id = AsyncMock(return_value=invoice)
        mock_line_item_repo.get_by_invoice_id = AsyncMock(return_value=line_items)

        result = await use_case.execute("user-1", "invoice-1")

        assert result.is_ok()
        assert result.value.filename == "INV-202403-00001.pdf"
        assert result.value.content == b"%PDF-1.4 test"
        mock_pdf_service.generate_invoice.assert_called_once_with(
            invoice=invoice,
            client=sample_client,
            user=sample_user,
            line_items=line_items,
        )

    async def test_other_users_invoice(self, use_case, make_invoice, mock_invoice_repo, mock_pdf_service):
        mock_invoice_repo.get_by_id = AsyncMock(return_value=make_invoice(user_id="user-2"))

        result = await use_case.execute("user-1", "invoice-1")

        assert result.is_err()
        assert result.error.code == "FORBIDDEN"
        mock_pdf_service.generate_invoice.assert_not_called()

    async def test_render_failure(self, use_case, make_invoice, mock_invoice_repo, mock_pdf_service):
        mock_invoice_repo.get_by_id = AsyncMock(return_value=make_invoice())
        mock_pdf_service.generate_invoice = MagicMock(side_effect=ValueError("bad font"))

        result = await use_case.execute("user-1", "invoice-1")

        assert result.is_err()
        assert result.error.code == "GENERATE_PDF_FAILED"
        assert "bad font" in result.error.reason
