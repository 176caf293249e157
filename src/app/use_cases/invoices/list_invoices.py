"""ListInvoices Use Case

Retrieves the user's invoices with pagination.
"""

from typing import Optional
from libs.result import Result, Return
from src.app.repositories.invoice_repository import InvoiceRepository
from src.domain.invoice import InvoiceStatus
from .dtos import InvoiceResponseDTO, ListInvoicesResponseDTO


class ListInvoices:
    """
    Use case: List invoices

    Soft-deleted invoices are excluded. Invoices are ordered by
    invoice_date DESC (most recent first).
    """

    def __init__(self, invoice_repo: InvoiceRepository):
        self.invoice_repo = invoice_repo

    async def execute(
        self,
        user_id: str,
        status: Optional[InvoiceStatus] = None,
        client_id: Optional[str] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> Result[ListInvoicesResponseDTO]:
        invoices = await self.invoice_repo.get_by_user_id(
            user_id=user_id,
            status=status,
            client_id=client_id,
            limit=limit,
            offset=offset,
        )
        total = await self.invoice_repo.count_by_user_id(
            user_id=user_id,
            status=status,
            client_id=client_id,
        )

        return Return.ok(
            ListInvoicesResponseDTO(
                invoices=[InvoiceResponseDTO.model_validate(inv) for inv in invoices],
                total=total,
                limit=limit,
                offset=offset,
            )
        )
