"""GetStatusHistory Use Case

Retrieves the status change log of an invoice, newest first.
"""

from libs.result import Result, Return
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.invoice_status_history_repository import InvoiceStatusHistoryRepository
from src.app.use_cases.common import load_owned_invoice
from .dtos import StatusHistoryEntryDTO, StatusHistoryResponseDTO


class GetStatusHistory:
    """
    Use case: View invoice status history

    History of soft-deleted invoices stays readable.
    """

    def __init__(
        self,
        invoice_repo: InvoiceRepository,
        history_repo: InvoiceStatusHistoryRepository,
    ):
        self.invoice_repo = invoice_repo
        self.history_repo = history_repo

    async def execute(
        self, user_id: str, invoice_id: str, limit: int = 50, offset: int = 0
    ) -> Result[StatusHistoryResponseDTO]:
        loaded = await load_owned_invoice(self.invoice_repo, invoice_id, user_id, allow_deleted=True)
        if loaded.is_err():
            return loaded

        entries = await self.history_repo.get_by_invoice_id(invoice_id, limit=limit, offset=offset)
        total = await self.history_repo.count_by_invoice_id(invoice_id)

        entry_dtos = [
            StatusHistoryEntryDTO(
                id=entry.id,
                invoice_id=entry.invoice_id,
                user_id=entry.user_id,
                from_status=entry.from_status,
                to_status=entry.to_status,
                reason=entry.reason,
                metadata=entry.change_metadata,
                created_at=entry.created_at,
            )
            for entry in entries
        ]

        return Return.ok(
            StatusHistoryResponseDTO(
                invoice_id=invoice_id,
                entries=entry_dtos,
                total=total,
                limit=limit,
                offset=offset,
            )
        )
